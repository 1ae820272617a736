#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Usage:
    python run.py play [--width 7] [--height 7] [--debug]
    python run.py test --position 0,0,1,... [--width 7] [--height 7]
"""

import sys

from connect_four.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
