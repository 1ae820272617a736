"""
cli.py - Terminal interface for playing Connect Four

This module provides the presentation layer (TerminalView), the controller
that wires the view to the board engine, and a command-line front end for
playing a two-player game or inspecting a board position.
"""

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from connect_four.debug import debug, DebugLevel
from connect_four.game.board import Board
from connect_four.game.events import Event
from connect_four.utils import (DEFAULT_WIDTH, DEFAULT_HEIGHT, Mark,
                                parse_position, render_board_ascii, to_position)


class TerminalView:
    """
    Text rendering of the board and the status message.

    play_event(index) carries the cell index of the chosen column's top
    row back to whoever listens (normally the Controller).
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                 out: Optional[TextIO] = None):
        self.width = width
        self.height = height
        self.out = out if out is not None else sys.stdout
        self.message = ""
        self.play_event = Event("play")

    def _write(self, text: str):
        print(text, file=self.out)

    def render(self, board):
        """Draw the grid from a flat snapshot of cell values."""
        self._write(render_board_ascii(board, self.width, self.height))

    def show_message(self, message: str):
        self.message = message
        self._write(message)

    def turn_of(self, player: Mark):
        self.show_message(f"It's turn of {player}")

    def victory(self, winner: Mark):
        self.show_message(f"{winner} wins!")

    def draw(self):
        self.show_message("It's a draw!")

    def select_column(self, column: int):
        """Forward a column choice as the index of its top cell."""
        self.play_event.trigger(column)


class Controller:
    """
    Links the view's input to the board and the board's events to the view.

    The controller owns the Board. restart() replaces it with a fresh one
    of the same size; there is no in-place reset.
    """

    def __init__(self, view: TerminalView, width: Optional[int] = None,
                 height: Optional[int] = None):
        self._view = view
        self._width = width if width is not None else view.width
        self._height = height if height is not None else view.height
        self.last_move_accepted: Optional[bool] = None

        self._view.play_event.add_listener(self._play)
        self._board = self._new_board()

    @property
    def board(self) -> Board:
        return self._board

    @property
    def view(self) -> TerminalView:
        return self._view

    def _new_board(self) -> Board:
        board = Board(self._width, self._height)
        board.switch_player_event.add_listener(self._view.turn_of)
        board.update_event.add_listener(self._view.render)
        board.victory_event.add_listener(self._view.victory)
        board.draw_event.add_listener(self._view.draw)
        debug.debug(f"Wired new {self._width}x{self._height} board to view", "controller")
        return board

    def _play(self, move: int) -> bool:
        self.last_move_accepted = self._board.play(move)
        if not self.last_move_accepted:
            debug.debug(f"Move {move} ignored", "controller")
        return self.last_move_accepted

    def run(self):
        """Show the empty board and the first player's turn."""
        self._view.render(self._board.board)
        self._view.turn_of(self._board.current_player)

    def restart(self):
        """Discard the current game and start a new one."""
        debug.info("Restarting game", "controller")
        self._board = self._new_board()
        self.last_move_accepted = None
        self.run()


class SimpleCLI:
    """Command-line front end for Connect Four."""

    def __init__(self, input_fn: Callable[[str], str] = input, out: Optional[TextIO] = None):
        self.input_fn = input_fn
        self.out = out if out is not None else sys.stdout
        self.args = None

    def _write(self, text: str):
        print(text, file=self.out)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Two-player Connect Four')

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument('--width', type=int, default=DEFAULT_WIDTH,
                            help=f'Number of columns (default: {DEFAULT_WIDTH})')
        common.add_argument('--height', type=int, default=DEFAULT_HEIGHT,
                            help=f'Number of rows (default: {DEFAULT_HEIGHT})')
        common.add_argument('--debug', action='store_true',
                            help='Enable debug logging (same as --debug-level debug)')
        common.add_argument('--debug-level',
                            choices=[level.name.lower() for level in DebugLevel],
                            default=None,
                            help='Logging level: none, error, warning, info, debug, trace')
        common.add_argument('--log-file', type=str, default=None,
                            help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')
        subparsers.add_parser('play', parents=[common], help='Play a two-player game')

        test_parser = subparsers.add_parser('test', parents=[common],
                                            help='Inspect a board position')
        test_parser.add_argument('--position', type=str, required=True,
                                 help='Comma-separated cell values, row by row from the top '
                                      '(0 empty, 1 yellow, 2 red)')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments and configure logging."""
        self.args = self.build_parser().parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)
        if getattr(self.args, 'log_file', None):
            debug.configure(log_file=self.args.log_file)

        return self.args

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command named on the command line."""
        if argv is not None or self.args is None:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'test':
            return self.test_position()

        self._write("Please specify a command. Use --help for options.")
        return 1

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self.input_fn(prompt).strip().lower()
        except EOFError:
            return None

    def play_game(self) -> int:
        """Play an interactive two-player game."""
        try:
            view = TerminalView(self.args.width, self.args.height, out=self.out)
            controller = Controller(view)
        except ValueError as e:
            self._write(f"Error: {e}")
            return 1

        self._write("Starting a new Connect Four game!")
        self._write(f"Enter a column number (0-{self.args.width - 1}) to drop a mark.")
        self._write("Other commands: 'r' to restart, 'q' to quit.")
        controller.run()

        while True:
            board = controller.board
            prompt = "Game over ('r' to restart, 'q' to quit): " if board.finished \
                else f"{board.current_player} column: "
            user_input = self._read(prompt)

            if user_input is None or user_input == 'q':
                self._write("Quitting game.")
                return 0
            if user_input == 'r':
                controller.restart()
                continue
            if board.finished:
                continue

            try:
                column = int(user_input)
            except ValueError:
                self._write("Invalid input. Please enter a column number or a command.")
                continue

            if not 0 <= column < board.width:
                self._write(f"Column must be between 0 and {board.width - 1}.")
                continue

            view.select_column(board.column_top(column))
            if not controller.last_move_accepted:
                self._write(f"Column {column} is full.")

    def test_position(self) -> int:
        """Load a position and report what the engine sees in it."""
        width, height = self.args.width, self.args.height
        try:
            cells = parse_position(self.args.position, width, height)
            board = Board.from_cells(cells, width, height)
        except ValueError as e:
            self._write(f"Error parsing position: {e}")
            return 1

        self._write("Loaded position:")
        self._write(board.render())

        line = board.find_winning_line()
        if line:
            mark = board.cell(line[0])
            positions = [to_position(index, width) for index in line]
            self._write(f"Four in a row for {mark} at {positions}")
        else:
            self._write("No four in a row")

        if board.winner is not None:
            self._write(f"Game over: {board.winner} wins")
        elif board.game_result.is_game_over():
            self._write("Board is full: draw")
        else:
            empty_count = sum(1 for mark in board.cells if mark == Mark.EMPTY)
            self._write(f"Empty cells: {empty_count}")
            self._write(f"Playable columns: {board.get_valid_moves()}")

        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
