"""
connect_four.game - Core game mechanics for Connect Four

This package contains the board engine and the event channels it uses
to notify the presentation layer of state changes.
"""

from connect_four.game.board import Board
from connect_four.game.events import Event

__all__ = ['Board', 'Event']
