"""
Pytest configuration and shared fixtures.
"""
import random
from typing import Callable, Iterable, List, Tuple

import pytest

from minesweeper import (
    Board,
    Cell,
    GamePhase,
    Level,
    Session,
    new_board,
    place_bomb,
)


def make_board(
    height: int, width: int, bombs: Iterable[Tuple[int, int]] = ()
) -> Board:
    """Build a board with bombs at fixed positions."""
    board = new_board(height, width)
    for row, col in bombs:
        board = place_bomb(board, row, col)
    return board


def make_session(
    board: Board,
    phase: GamePhase = GamePhase.READY,
    level: Level = Level.EASY,
) -> Session:
    """Wrap a fixed board in a session."""
    return Session(board=board, phase=phase, level=level)


# ============================================================================
# Fake Scheduler
# ============================================================================

class FakeHandle:
    """Timer handle recorded by FakeScheduler."""

    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic stand-in for an event loop's call_later."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: List[FakeHandle] = []

    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> FakeHandle:
        handle = FakeHandle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> List[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds: float) -> None:
        """Move time forward, firing due callbacks in order."""
        target = self.now + seconds
        while True:
            due = sorted(
                (h for h in self.pending if h.when <= target),
                key=lambda h: h.when,
            )
            if not due:
                break
            handle = due[0]
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target

    def fire_stale(self, handle: FakeHandle) -> None:
        """Run a callback even though it was cancelled."""
        handle.callback()


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


@pytest.fixture
def center_bomb_board() -> Board:
    """3x3 board with a single bomb in the middle."""
    return make_board(3, 3, [(1, 1)])


@pytest.fixture
def empty_board() -> Board:
    """5x5 board with no bombs for cascade testing."""
    return make_board(5, 5)


@pytest.fixture
def diagonal_board() -> Board:
    """3x3 board with bombs at (0, 0) and (1, 1)."""
    return make_board(3, 3, [(0, 0), (1, 1)])


@pytest.fixture
def corridor_board() -> Board:
    """
    4x5 board with a bomb column on the right.

    Columns 0-2 are open ground, column 3 is numbered, column 4 has
    bombs at rows 0 and 3.
    """
    return make_board(4, 5, [(0, 4), (3, 4)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def bomb_cell() -> Cell:
    """Create a cell containing a bomb."""
    return Cell(0, 0, is_bomb=True)


# ============================================================================
# Clock Fixtures
# ============================================================================

@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
