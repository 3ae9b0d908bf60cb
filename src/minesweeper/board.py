"""
Board module for Minesweeper game.

Implements the immutable board snapshot, bomb placement, the flood-fill
reveal and the win condition. Every operation takes a board and returns
a new one; nothing here mutates a board in place.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        height: Number of rows.
        width: Number of columns.
        bomb_count: Total bombs to place.
    """

    height: int
    width: int
    bomb_count: int

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.bomb_count < 0:
            raise ValueError("Number of bombs cannot be negative")
        max_bombs = self.width * self.height
        if self.bomb_count > max_bombs:
            raise ValueError(f"Too many bombs (max {max_bombs})")


class Level(Enum):
    """The three difficulty presets."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> BoardConfig:
        """Board dimensions and bomb count for this level."""
        return LEVEL_CONFIGS[self]


LEVEL_CONFIGS: Dict[Level, BoardConfig] = {
    Level.EASY: BoardConfig(height=8, width=8, bomb_count=10),
    Level.MEDIUM: BoardConfig(height=16, width=16, bomb_count=40),
    Level.HARD: BoardConfig(height=16, width=30, bomb_count=99),
}


# ============================================================================
# Board Snapshot
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of a Minesweeper grid.

    The grid is a tuple of row tuples. Its dimensions are fixed for the
    lifetime of the snapshot; changes produce a new Board.
    """

    rows: Tuple[Tuple[Cell, ...], ...]

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self.rows[0]) if self.rows else 0

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position lies outside the board.
        """
        if not self.is_valid_position(row, col):
            raise IndexError(
                f"Position ({row}, {col}) is outside the "
                f"{self.height}x{self.width} board"
            )
        return self.rows[row][col]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in self.rows:
            yield from row

    def bomb_positions(self) -> Set[Position]:
        """Positions of every bomb."""
        return {cell.position for cell in self.cells() if cell.is_bomb}

    def flag_positions(self) -> Set[Position]:
        """Positions of every flagged cell."""
        return {cell.position for cell in self.cells() if cell.is_flagged}

    def clicked_count(self) -> int:
        """Number of clicked cells."""
        return sum(1 for cell in self.cells() if cell.is_clicked)

    def replace_cells(self, updates: Dict[Position, Cell]) -> "Board":
        """
        Return a new board with the given cells swapped in.

        Rows without updates are shared with this board.
        """
        if not updates:
            return self
        touched = {row for row, _ in updates}
        rows: List[Tuple[Cell, ...]] = []
        for row_index, row in enumerate(self.rows):
            if row_index not in touched:
                rows.append(row)
                continue
            rows.append(tuple(
                updates.get((row_index, col_index), cell)
                for col_index, cell in enumerate(row)
            ))
        return Board(tuple(rows))

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = clicked with adjacent count
                9 = clicked bomb
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def render(self) -> str:
        """Render board as text, one line per row."""
        return "\n".join(
            " ".join(cell.symbol() for cell in row) for row in self.rows
        )


# ============================================================================
# Construction and Bomb Placement
# ============================================================================

def new_board(height: int, width: int) -> Board:
    """Create an empty height x width board with no bombs."""
    if height < 1 or width < 1:
        raise ValueError("Board dimensions must be positive")
    return Board(tuple(
        tuple(Cell(row, col) for col in range(width))
        for row in range(height)
    ))


def neighbors(board: Board, row: int, col: int) -> List[Position]:
    """
    Get valid neighboring cell positions.

    Corner cells have 3 neighbors, edge cells 5, interior cells 8.

    Args:
        board: Board giving the bounds.
        row: Row index of center cell.
        col: Column index of center cell.

    Returns:
        List of (row, col) tuples for in-bounds neighbors.
    """
    result = []
    for delta_row, delta_col in NEIGHBOR_OFFSETS:
        new_row = row + delta_row
        new_col = col + delta_col
        if board.is_valid_position(new_row, new_col):
            result.append((new_row, new_col))
    return result


def place_bomb(board: Board, row: int, col: int) -> Board:
    """
    Place a bomb at a position and bump each neighbor's count.

    Raises:
        ValueError: If the position already holds a bomb.
    """
    cell = board.get_cell(row, col)
    if cell.is_bomb:
        raise ValueError(f"Position ({row}, {col}) already holds a bomb")
    updates = {(row, col): replace(cell, is_bomb=True)}
    for position in neighbors(board, row, col):
        neighbor = updates.get(position, board.get_cell(*position))
        updates[position] = replace(
            neighbor, bomb_neighbor_count=neighbor.bomb_neighbor_count + 1
        )
    return board.replace_cells(updates)


def place_bombs(
    board: Board, n: int, rng: Optional[random.Random] = None
) -> Board:
    """
    Scatter n bombs uniformly at random over distinct positions.

    The whole board is shuffled and the first n positions are taken.
    No attempt is made to keep any particular cell safe.

    Args:
        board: Board to place bombs on.
        n: Number of bombs.
        rng: Random source, defaults to the module-level generator.

    Returns:
        New board with bombs placed and neighbor counts filled in.
    """
    positions = list(board.positions())
    if n < 0 or n > len(positions):
        raise ValueError(
            f"Cannot place {n} bombs on {len(positions)} cells"
        )
    (rng or random).shuffle(positions)
    for row, col in positions[:n]:
        board = place_bomb(board, row, col)
    return board


def new_game(level: Level, rng: Optional[random.Random] = None) -> Board:
    """Fresh board for a difficulty level."""
    config = level.config
    return place_bombs(
        new_board(config.height, config.width), config.bomb_count, rng
    )


# ============================================================================
# Play
# ============================================================================

def flag_neighbor_count(board: Board, row: int, col: int) -> int:
    """Count flagged cells adjacent to position."""
    return sum(
        1 for position in neighbors(board, row, col)
        if board.get_cell(*position).is_flagged
    )


def reveal(board: Board, start_row: int, start_col: int) -> Board:
    """
    Flood-fill reveal starting from a position.

    Breadth-first over a work queue. Every dequeued position ends up
    clicked. A position only opens its neighborhood when it has neither
    adjacent bombs nor adjacent flags; already clicked and flagged
    neighbors are never enqueued.

    Args:
        board: Board to reveal on.
        start_row: Row of the clicked cell.
        start_col: Column of the clicked cell.

    Returns:
        New board with every reached position clicked.
    """
    start = (start_row, start_col)
    board.get_cell(*start)
    seen = {start}
    queue = deque([start])

    while queue:
        row, col = queue.popleft()
        if board.get_cell(row, col).bomb_neighbor_count:
            continue
        if flag_neighbor_count(board, row, col):
            continue
        for position in neighbors(board, row, col):
            if position in seen:
                continue
            neighbor = board.get_cell(*position)
            if neighbor.is_clicked or neighbor.is_flagged:
                continue
            seen.add(position)
            queue.append(position)

    logger.debug("Reveal from %s clicks %d cells", start, len(seen))
    return board.replace_cells({
        position: board.get_cell(*position).clicked() for position in seen
    })


def reveal_all(board: Board) -> Board:
    """Mark every cell clicked."""
    return Board(tuple(
        tuple(cell.clicked() for cell in row) for row in board.rows
    ))


def toggle_flag_at(board: Board, row: int, col: int) -> Board:
    """Flip the flag on one unclicked cell."""
    cell = board.get_cell(row, col)
    return board.replace_cells({(row, col): cell.with_flag_toggled()})


def is_won(board: Board) -> bool:
    """
    Success if every bomb is flagged and every flag sits on a bomb.

    A stray flag on a safe cell blocks the win even when all bombs are
    flagged.
    """
    return board.bomb_positions() == board.flag_positions()


def bombs_remaining(board: Board) -> int:
    """Bombs minus flags. Goes negative when over-flagged."""
    bombs = sum(1 for cell in board.cells() if cell.is_bomb)
    flags = sum(1 for cell in board.cells() if cell.is_flagged)
    return bombs - flags
