"""
board.py - Board engine for Connect Four

This module implements the Board class, which owns the grid and turn state,
applies the gravity-drop placement rule, detects wins and draws, and
notifies listeners of every state change through Event channels.
"""

from typing import List, Optional

import numpy as np

from connect_four.debug import debug
from connect_four.game.events import Event
from connect_four.utils import (DEFAULT_WIDTH, DEFAULT_HEIGHT, CONNECT_N, FIRST_PLAYER,
                                Mark, GameResult, Direction, render_board_ascii,
                                to_index)


class Board:
    """
    A Connect Four board stored as one flat sequence of width*height cells.

    Cell ``row * width + col`` holds a Mark value; row 0 is the top row and
    marks fall toward the highest index. The board is only mutated through
    play(). A finished game stays finished; start a new game by building a
    new Board.

    Events:
        update_event(snapshot): after every accepted move, with a copy of the cells
        switch_player_event(mark): after a non-terminal move, with the next player
        victory_event(mark): when the move just played completes four in a row
        draw_event(): when the move just played fills the board without a win
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT):
        """
        Initialize an empty board.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            ValueError: If either dimension is not a positive integer
        """
        if width < 1 or height < 1:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")

        debug.debug(f"Initializing new {width}x{height} Board", "board")
        self._width = int(width)
        self._height = int(height)
        self._grid = np.full(self._width * self._height, Mark.EMPTY.value, dtype=np.int8)
        self._current_player = FIRST_PLAYER
        self._game_result = GameResult.IN_PROGRESS

        self.update_event = Event("update")
        self.switch_player_event = Event("switch_player")
        self.victory_event = Event("victory")
        self.draw_event = Event("draw")

    @classmethod
    def from_cells(cls, cells, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                   current_player: Mark = FIRST_PLAYER) -> 'Board':
        """
        Build a board holding an existing position.

        The position is loaded as-is: no gravity is applied and no
        notification is sent. A position that already holds four in a row
        is loaded as won by the mark on that line, and a full one as drawn.
        """
        board = cls(width, height)
        values = np.asarray(cells, dtype=np.int8).reshape(-1)
        if values.size != board.size:
            raise ValueError(f"Expected {board.size} cells, got {values.size}")
        board._grid[:] = values
        board._current_player = current_player

        line = board.find_winning_line()
        if line:
            board._game_result = GameResult.win_for(board.cell(line[0]))
        elif board.is_full():
            board._game_result = GameResult.DRAW
        return board

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        return self._width * self._height

    @property
    def board(self) -> np.ndarray:
        """A copy of the flat cell values."""
        return self._grid.copy()

    @property
    def cells(self) -> List[Mark]:
        return [Mark(int(v)) for v in self._grid]

    @property
    def current_player(self) -> Mark:
        return self._current_player

    @property
    def finished(self) -> bool:
        return self._game_result.is_game_over()

    @property
    def game_result(self) -> GameResult:
        return self._game_result

    @property
    def winner(self) -> Optional[Mark]:
        """The winning mark, or None while in progress or after a draw."""
        if self._game_result == GameResult.YELLOW_WIN:
            return Mark.YELLOW
        if self._game_result == GameResult.RED_WIN:
            return Mark.RED
        return None

    def cell(self, index: int) -> Mark:
        return Mark(int(self._grid[index]))

    def column_top(self, column: int) -> int:
        """Flat index of the top cell of a column."""
        return to_index(0, column, self._width)

    def _in_range(self, index) -> bool:
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            return False
        return 0 <= index < self.size

    def get_valid_moves(self) -> List[int]:
        """
        Get the columns that can still take a mark.

        Returns:
            Column numbers whose top cell is empty, or an empty list once the
            game is finished
        """
        if self.finished:
            return []
        return [col for col in range(self._width)
                if self._grid[self.column_top(col)] == Mark.EMPTY.value]

    def play(self, move) -> bool:
        """
        Drop the current player's mark starting from a cell index.

        The caller passes the top-row index of the target column. The mark
        falls from that index to the lowest empty cell below it.

        Args:
            move: Flat cell index to drop from

        Returns:
            True if the move was accepted, False if it was rejected (game
            finished, index out of range, or starting cell occupied)
        """
        if self.finished:
            debug.debug(f"Rejected move {move}: game is over ({self._game_result.name})", "board")
            return False

        if not self._in_range(move):
            debug.debug(f"Rejected move {move}: out of range [0, {self.size})", "board")
            return False

        move = int(move)
        if self._grid[move] != Mark.EMPTY.value:
            debug.debug(f"Rejected move {move}: cell is occupied", "board")
            return False

        while move + self._width < self.size and self._grid[move + self._width] == Mark.EMPTY.value:
            move += self._width

        debug.debug(f"Placing {self._current_player.name} at index {move}", "board")
        self._grid[move] = self._current_player.value
        self.update_event.trigger(self.board)

        if self.check_victory():
            self._finish(GameResult.win_for(self._current_player))
        elif self.check_draw():
            self._finish(GameResult.DRAW)
        else:
            self.switch_player()
            self.switch_player_event.trigger(self._current_player)

        return True

    def play_column(self, column) -> bool:
        """
        Drop the current player's mark into a column.

        Args:
            column: Column number (0-indexed)

        Returns:
            True if the move was accepted, False otherwise
        """
        if isinstance(column, bool) or not isinstance(column, (int, np.integer)) \
                or not 0 <= column < self._width:
            debug.debug(f"Rejected column {column}: out of range [0, {self._width})", "board")
            return False
        return self.play(self.column_top(int(column)))

    def _finish(self, result: GameResult):
        self._game_result = result
        debug.info(f"Game over: {result.name}", "board")

    def _check_four(self, a: int, b: int, c: int, d: int) -> bool:
        grid = self._grid
        return (grid[a] != Mark.EMPTY.value
                and grid[a] == grid[b] == grid[c] == grid[d])

    def find_winning_line(self) -> List[int]:
        """
        Find the first four-in-a-row on the board.

        Windows are scanned horizontally, then vertically, then along the
        top-left to bottom-right diagonal, then the top-right to bottom-left
        diagonal.

        Returns:
            The four flat indices of the first match, or an empty list
        """
        debug.start_timer("win_scan")
        try:
            for direction in Direction:
                step = direction.step(self._width)
                for start in direction.starts(self._width, self._height):
                    line = [start + i * step for i in range(CONNECT_N)]
                    if self._check_four(*line):
                        debug.trace(f"{direction.name} four at {line}", "board")
                        return line
            return []
        finally:
            debug.end_timer("win_scan", "board")

    def has_four_in_a_row(self) -> bool:
        """Pure check for four equal marks in a line anywhere on the board."""
        return bool(self.find_winning_line())

    def is_full(self) -> bool:
        """Pure check that no cell is empty."""
        return bool(np.all(self._grid != Mark.EMPTY.value))

    def check_victory(self) -> bool:
        """
        Check for four in a row and announce the current player as winner.

        Every call that finds a line triggers victory_event again.
        """
        if not self.has_four_in_a_row():
            return False
        self.victory_event.trigger(self._current_player)
        return True

    def check_draw(self) -> bool:
        """
        Check for a full board and announce the draw.

        Every call on a full board triggers draw_event again. Call it only
        after check_victory() has found no winner.
        """
        if not self.is_full():
            return False
        self.draw_event.trigger()
        return True

    def switch_player(self):
        """Hand the turn to the other mark."""
        self._current_player = self._current_player.other()
        debug.trace(f"Turn passes to {self._current_player.name}", "board")

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            Text representation of the board
        """
        return render_board_ascii(self._grid, self._width, self._height)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(width={self._width}, height={self._height}, "
                f"current_player={self._current_player.name}, finished={self.finished})")
