"""
connect_four.interfaces - User interfaces for Connect Four

This package contains the terminal view, the controller wiring it to the
board engine, and the command-line front end.
"""

# Don't import anything here to avoid circular imports
__all__ = []
