"""
Session module for Minesweeper game.

A Session is the single owned aggregate of board, phase, selected level
and elapsed time. The transitions below are pure: each takes a Session
and returns the next one.
"""
import logging
import random
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional

from .board import (
    Board,
    Level,
    bombs_remaining,
    is_won,
    new_game,
    reveal,
    reveal_all,
    toggle_flag_at,
)

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Possible phases of a game."""

    READY = auto()
    RUNNING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.WON, GamePhase.LOST)


class GameStateError(RuntimeError):
    """A transition was attempted from a phase that cannot reach it."""


@dataclass(frozen=True)
class Session:
    """
    Current state of one game.

    Attributes:
        board: Current board snapshot.
        phase: Current game phase.
        level: Selected difficulty level.
        elapsed_seconds: Clock value, counted while running.
    """

    board: Board
    phase: GamePhase
    level: Level
    elapsed_seconds: int = 0

    @property
    def bombs_remaining(self) -> int:
        return bombs_remaining(self.board)


# ============================================================================
# Transitions
# ============================================================================

def new_session(
    level: Level = Level.MEDIUM, rng: Optional[random.Random] = None
) -> Session:
    """Ready session with a freshly generated board."""
    return Session(
        board=new_game(level, rng), phase=GamePhase.READY, level=level
    )


def reset(session: Session, rng: Optional[random.Random] = None) -> Session:
    """Back to Ready with a new board for the selected level."""
    return new_session(session.level, rng)


def select_level(
    session: Session, level: Level, rng: Optional[random.Random] = None
) -> Session:
    """
    Change difficulty before play starts.

    Only honored while Ready; the board is regenerated for the new level.
    In any other phase the session is returned unchanged.
    """
    if session.phase is not GamePhase.READY:
        logger.debug("Ignoring level change to %s while %s",
                     level.value, session.phase.name)
        return session
    return new_session(level, rng)


def click(session: Session, row: int, col: int) -> Session:
    """
    Reveal a cell.

    A click on a clicked or flagged cell, or after the game ended, changes
    nothing. The first accepted click moves a Ready game to Running.

    Raises:
        IndexError: If the position lies outside the board.
    """
    cell = session.board.get_cell(row, col)
    if session.phase.is_terminal:
        return session
    if cell.is_clicked or cell.is_flagged:
        return session

    if session.phase is GamePhase.READY:
        session = replace(session, phase=GamePhase.RUNNING)

    if cell.is_bomb:
        return _game_over(session, row, col)

    board = reveal(session.board, row, col)
    session = replace(session, board=board)
    if is_won(board):
        return _game_won(session)
    return session


def toggle_flag(session: Session, row: int, col: int) -> Session:
    """
    Flip the flag on an unclicked cell while the game is not over.

    A flag alone can complete the board, so the win check runs here too.

    Raises:
        IndexError: If the position lies outside the board.
    """
    cell = session.board.get_cell(row, col)
    if session.phase.is_terminal or cell.is_clicked:
        return session

    board = toggle_flag_at(session.board, row, col)
    session = replace(session, board=board)
    if is_won(board):
        return _game_won(session)
    return session


def tick(session: Session) -> Session:
    """Advance the clock by one second while Running."""
    if session.phase is not GamePhase.RUNNING:
        return session
    return replace(session, elapsed_seconds=session.elapsed_seconds + 1)


def _game_over(session: Session, row: int, col: int) -> Session:
    if session.phase is not GamePhase.RUNNING:
        raise GameStateError(
            f"Bomb at ({row}, {col}) clicked while {session.phase.name}"
        )
    logger.info("Bomb clicked at (%d, %d), game over", row, col)
    board = session.board.replace_cells(
        {(row, col): session.board.get_cell(row, col).clicked()}
    )
    return replace(session, board=board, phase=GamePhase.LOST)


def _game_won(session: Session) -> Session:
    logger.info("Board cleared after %d seconds", session.elapsed_seconds)
    return replace(
        session, board=reveal_all(session.board), phase=GamePhase.WON
    )
