"""Tests for the terminal view, the controller wiring and the CLI."""

import io

import pytest

from connect_four.debug import debug, DebugLevel
from connect_four.interfaces.cli import TerminalView, Controller, SimpleCLI, main
from connect_four.utils import Mark


def scripted(*lines):
    remaining = iter(lines)

    def fake_input(prompt):
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None
    return fake_input


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def view(out):
    return TerminalView(7, 7, out=out)


@pytest.fixture
def restore_debug_level():
    level = debug.level
    yield
    debug.configure(level=level)


class TestTerminalView:
    def test_messages(self, view, out):
        view.turn_of(Mark.RED)
        assert view.message == "It's turn of 🔴"
        view.victory(Mark.YELLOW)
        assert view.message == "🟡 wins!"
        view.draw()
        assert view.message == "It's a draw!"
        assert out.getvalue().splitlines() == ["It's turn of 🔴", "🟡 wins!", "It's a draw!"]

    def test_select_column_triggers_play_event(self, view):
        received = []
        view.play_event.add_listener(received.append)
        view.select_column(4)
        assert received == [4]

    def test_render(self, view, out):
        view.render([0] * 49)
        assert len(out.getvalue().splitlines()) == 7 + 3


class TestController:
    def test_run_shows_board_and_first_turn(self, view, out):
        controller = Controller(view)
        controller.run()
        assert view.message == "It's turn of 🟡"
        assert controller.board.width == 7
        assert "0" in out.getvalue()

    def test_view_input_reaches_board(self, view):
        controller = Controller(view)
        view.select_column(3)
        assert controller.last_move_accepted is True
        assert controller.board.cell(45) == Mark.YELLOW
        assert view.message == "It's turn of 🔴"

    def test_victory_is_displayed(self, view):
        controller = Controller(view)
        for column in [0, 0, 1, 1, 2, 2, 3]:
            view.select_column(column)
        assert controller.board.finished
        assert view.message == "🟡 wins!"

        view.select_column(5)
        assert controller.last_move_accepted is False
        assert view.message == "🟡 wins!"

    def test_restart_builds_a_new_board(self, view):
        controller = Controller(view)
        view.select_column(0)
        old_board = controller.board

        controller.restart()

        assert controller.board is not old_board
        assert controller.board.current_player == Mark.YELLOW
        assert controller.board.get_valid_moves() == list(range(7))
        assert view.message == "It's turn of 🟡"

        view.select_column(0)
        assert controller.board.cell(42) == Mark.YELLOW
        assert old_board.cell(35) == Mark.EMPTY

    def test_dimensions_follow_the_view(self, out):
        controller = Controller(TerminalView(5, 4, out=out))
        assert (controller.board.width, controller.board.height) == (5, 4)


class TestSimpleCLI:
    def test_play_until_victory(self, out):
        cli = SimpleCLI(input_fn=scripted("0", "0", "1", "1", "2", "2", "3", "q"), out=out)
        assert cli.run(["play"]) == 0
        text = out.getvalue()
        assert "🟡 wins!" in text
        assert "Quitting game." in text

    def test_invalid_input_and_full_column(self, out):
        moves = ["x", "9"] + ["0"] * 8 + ["q"]
        cli = SimpleCLI(input_fn=scripted(*moves), out=out)
        assert cli.run(["play"]) == 0
        text = out.getvalue()
        assert "Invalid input" in text
        assert "Column must be between 0 and 6." in text
        assert "Column 0 is full." in text

    def test_restart_and_end_of_input(self, out):
        cli = SimpleCLI(input_fn=scripted("3", "r"), out=out)
        assert cli.run(["play", "--width", "5", "--height", "4"]) == 0
        text = out.getvalue()
        assert text.count("It's turn of 🟡") == 2
        assert "Quitting game." in text

    def test_play_with_bad_dimensions(self, out):
        cli = SimpleCLI(input_fn=scripted("q"), out=out)
        assert cli.run(["play", "--width", "0"]) == 1
        assert "Error" in out.getvalue()

    def test_position_with_four(self, out):
        cells = ["0"] * 49
        for index in (42, 43, 44, 45):
            cells[index] = "1"
        cli = SimpleCLI(out=out)
        assert cli.run(["test", "--position", ",".join(cells)]) == 0
        text = out.getvalue()
        assert "Four in a row for 🟡 at [(6, 0), (6, 1), (6, 2), (6, 3)]" in text
        assert "Game over: 🟡 wins" in text
        assert "Playable columns" not in text

    def test_position_full_board(self, out):
        cli = SimpleCLI(out=out)
        position = ",".join(["1", "1", "2", "2", "2", "2", "1", "1"] * 2)
        assert cli.run(["test", "--position", position, "--width", "4", "--height", "4"]) == 0
        text = out.getvalue()
        assert "No four in a row" in text
        assert "Board is full: draw" in text

    def test_position_in_progress(self, out):
        cells = ["0"] * 49
        cells[45] = "1"
        cli = SimpleCLI(out=out)
        assert cli.run(["test", "--position", ",".join(cells)]) == 0
        text = out.getvalue()
        assert "Empty cells: 48" in text
        assert "Playable columns: [0, 1, 2, 3, 4, 5, 6]" in text

    def test_run_parses_new_arguments(self, out):
        cli = SimpleCLI(out=out)
        cli.parse_args(["test", "--position", "1,2,3"])
        cells = ["0"] * 49
        assert cli.run(["test", "--position", ",".join(cells)]) == 0
        assert "Error parsing position" not in out.getvalue()
        assert "Empty cells: 49" in out.getvalue()

    def test_bad_position(self, out):
        cli = SimpleCLI(out=out)
        assert cli.run(["test", "--position", "1,2,3"]) == 1
        assert "Error parsing position" in out.getvalue()

    def test_debug_level_flag(self, out, restore_debug_level):
        cli = SimpleCLI(out=out)
        cli.parse_args(["test", "--position", "0", "--debug-level", "trace"])
        assert debug.level == DebugLevel.TRACE

    def test_no_command(self, capsys):
        assert main([]) == 1
        assert "Please specify a command" in capsys.readouterr().out
