"""
Unit tests for the terminal front end's command handling.
"""
import random

import pytest

from conftest import FakeScheduler, make_board, make_session
from main import handle_command, parse_command, render_session
from minesweeper import Game, GamePhase, Level


@pytest.fixture
def game(scheduler: FakeScheduler) -> Game:
    game = Game(Level.EASY, scheduler=scheduler, rng=random.Random(5))
    game._session = make_session(make_board(3, 3, [(1, 1)]))
    return game


class TestParseCommand:
    """Test input parsing."""

    @pytest.mark.parametrize("line, expected", [
        ("c 1 2", ("click", (1, 2))),
        ("click 0 0", ("click", (0, 0))),
        ("f 3 4", ("flag", (3, 4))),
        ("level hard", ("level", (Level.HARD,))),
        ("reset", ("reset", None)),
        ("quit", ("quit", None)),
        ("", ("help", None)),
    ])
    def test_valid_commands(self, line: str, expected: tuple) -> None:
        assert parse_command(line) == expected

    @pytest.mark.parametrize("line", [
        "c 1", "c x y", "level nightmare", "dance", "reset now",
    ])
    def test_invalid_commands(self, line: str) -> None:
        assert parse_command(line) == ("invalid", None)


class TestHandleCommand:
    """Test command dispatch to the game."""

    def test_click_bomb_reports_game_over(self, game: Game) -> None:
        message = handle_command(game, "click", (1, 1))
        assert "Game over" in message
        assert game.phase is GamePhase.LOST

    def test_flag_win_reports_congrats(self, game: Game) -> None:
        message = handle_command(game, "flag", (1, 1))
        assert message == "CONGRATS YOU WIN"

    def test_off_board_click(self, game: Game) -> None:
        assert "off the board" in handle_command(game, "click", (5, 5))
        assert game.phase is GamePhase.READY

    def test_level_change_refused_mid_game(self, game: Game) -> None:
        handle_command(game, "click", (0, 0))
        message = handle_command(game, "level", (Level.HARD,))
        assert "before the first click" in message

    def test_level_change_before_play(self, game: Game) -> None:
        assert handle_command(game, "level", (Level.HARD,)) == ""
        assert game.board.width == 30

    def test_render_session_status_line(self, game: Game) -> None:
        text = render_session(game.session)
        assert text.splitlines()[-1] == (
            "Bombs: 1  Timer: 0  Level: easy  [READY]"
        )
