"""
Cell module for Minesweeper game.

A cell is a fixed-shape, immutable record. Changing a cell means building
a new one with ``dataclasses.replace``; boards are rebuilt the same way.
"""
from dataclasses import dataclass, replace
from typing import Tuple


# ============================================================================
# Observation Codes
# ============================================================================

HIDDEN = -1
FLAGGED = -2
DETONATED = 9


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        row: Row index of the cell.
        col: Column index of the cell.
        is_bomb: Whether this cell contains a bomb. Fixed at generation.
        is_flagged: Whether the player has flagged this cell.
        is_clicked: Whether this cell has been revealed. Never unset.
        bomb_neighbor_count: Number of adjacent bombs (0-8).
    """

    row: int
    col: int
    is_bomb: bool = False
    is_flagged: bool = False
    is_clicked: bool = False
    bomb_neighbor_count: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) of this cell."""
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Check if cell is neither clicked nor flagged."""
        return not self.is_clicked and not self.is_flagged

    def clicked(self) -> "Cell":
        """Return a copy of this cell marked as clicked."""
        if self.is_clicked:
            return self
        return replace(self, is_clicked=True)

    def with_flag_toggled(self) -> "Cell":
        """
        Return a copy with the flag flipped.

        Raises:
            ValueError: If the cell is already clicked.
        """
        if self.is_clicked:
            raise ValueError(
                f"Cannot flag clicked cell ({self.row}, {self.col})"
            )
        return replace(self, is_flagged=not self.is_flagged)

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Clicked cell with adjacent bomb count
            9: Clicked bomb
        """
        if self.is_clicked:
            return DETONATED if self.is_bomb else self.bomb_neighbor_count
        if self.is_flagged:
            return FLAGGED
        return HIDDEN

    def symbol(self) -> str:
        """Single-character text rendering of the cell."""
        if self.is_clicked:
            if self.is_bomb:
                return "*"
            if self.bomb_neighbor_count == 0:
                return " "
            return str(self.bomb_neighbor_count)
        if self.is_flagged:
            return "F"
        return "."
