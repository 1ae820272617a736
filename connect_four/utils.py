"""
utils.py - Constants, enumerations and helpers for the Connect Four game

This module provides the player marks, game results, scan directions and
the flat-index helpers shared by the board engine and the interfaces.
"""

from enum import Enum, auto
from typing import List, Sequence

import numpy as np

# Game constants
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 7
CONNECT_N = 4  # Number of marks in a row to win


class Mark(Enum):
    """Enumeration representing player marks and the empty cell."""
    EMPTY = 0
    YELLOW = 1    # Moves first
    RED = 2

    def other(self) -> "Mark":
        """Get the opposing mark."""
        if self == Mark.YELLOW:
            return Mark.RED
        elif self == Mark.RED:
            return Mark.YELLOW
        return Mark.EMPTY

    @property
    def symbol(self) -> str:
        return SYMBOLS[self]

    def __str__(self):
        return self.symbol


SYMBOLS = {
    Mark.EMPTY: " ",
    Mark.YELLOW: "🟡",
    Mark.RED: "🔴",
}

FIRST_PLAYER = Mark.YELLOW


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    YELLOW_WIN = auto()
    RED_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, mark: Mark) -> "GameResult":
        if mark == Mark.YELLOW:
            return cls.YELLOW_WIN
        if mark == Mark.RED:
            return cls.RED_WIN
        raise ValueError(f"No win result for {mark!r}")


class Direction(Enum):
    """Scan directions for four-in-a-row, in scan order."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN = auto()  # top-left to bottom-right
    DIAGONAL_UP = auto()    # top-right to bottom-left

    def step(self, width: int) -> int:
        """Flat-index distance between neighbouring cells in this direction."""
        return {
            Direction.HORIZONTAL: 1,
            Direction.VERTICAL: width,
            Direction.DIAGONAL_DOWN: width + 1,
            Direction.DIAGONAL_UP: width - 1,
        }[self]

    def starts(self, width: int, height: int) -> List[int]:
        """
        Flat indices where a window of CONNECT_N cells fits on the board.

        Args:
            width: Number of columns
            height: Number of rows

        Returns:
            Start indices, row-major for horizontal scans and column-major
            for vertical scans, so windows are visited in scan order
        """
        span = CONNECT_N - 1
        if self == Direction.HORIZONTAL:
            return [row * width + col
                    for row in range(height)
                    for col in range(width - span)]
        if self == Direction.VERTICAL:
            return [row * width + col
                    for col in range(width)
                    for row in range(height - span)]
        if self == Direction.DIAGONAL_DOWN:
            return [row * width + col
                    for row in range(height - span)
                    for col in range(width - span)]
        return [row * width + col
                for row in range(height - span)
                for col in range(span, width)]


def to_index(row: int, col: int, width: int) -> int:
    """Flat index of (row, col)."""
    return row * width + col


def to_position(index: int, width: int) -> tuple:
    """(row, col) of a flat index."""
    return divmod(index, width)


def parse_position(position: str, width: int, height: int) -> np.ndarray:
    """
    Parse a comma-separated flat position string.

    Args:
        position: Cell values, 0 for empty, 1 for yellow, 2 for red
        width: Number of columns
        height: Number of rows

    Returns:
        Flat integer array of width*height cells

    Raises:
        ValueError: If the string has the wrong length or unknown values
    """
    values = [int(c) for c in position.split(',')]
    if len(values) != width * height:
        raise ValueError(f"Position string must have {width * height} values, got {len(values)}")

    known = {mark.value for mark in Mark}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Unknown cell values in position: {unknown}")

    return np.array(values, dtype=np.int8)


def render_board_ascii(cells: Sequence[int], width: int, height: int) -> str:
    """
    Render a flat board as text.

    Args:
        cells: Flat cell values
        width: Number of columns
        height: Number of rows

    Returns:
        Text representation of the board with column numbers underneath
    """
    # emoji marks are two columns wide, so empty cells are padded to match
    def cell_text(value: int) -> str:
        mark = Mark(int(value))
        return "  " if mark == Mark.EMPTY else mark.symbol

    border = "+" + "-" * (width * 3 - 1) + "+"
    lines = [border]
    for row in range(height):
        row_cells = cells[row * width:(row + 1) * width]
        lines.append("|" + " ".join(cell_text(v) for v in row_cells) + "|")
    lines.append(border)
    lines.append(" " + " ".join(f"{col:<2}" for col in range(width)))
    return "\n".join(lines)
