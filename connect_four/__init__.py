"""
connect_four - Two-player Connect Four game

This package provides the board engine (gravity drop, win and draw
detection, turn switching), the event channels it notifies through,
and a terminal view with the controller that wires the two together.
"""

# Version number
__version__ = '0.1.0'
