"""
Tile module for the minefield core.

A Tile is the ground truth of one grid cell (mine, or safe with a
neighbor count). CellState is the player-facing status of a cell.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible player-facing states of a cell."""

    COVERED = auto()
    MARKED = auto()
    UNCOVERED = auto()


# Observation values shared by the board and the environment
OBS_COVERED = -1
OBS_MARKED = -2
OBS_MINE = 9


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass(frozen=True)
class Tile:
    """
    Classification of a single cell: Mine, or Safe(n).

    Attributes:
        is_mine: Whether this cell contains a mine.
        neighbor_count: Mines among the up-to-8 neighbors (0-8).
            Unused for mine tiles.
    """

    is_mine: bool = False
    neighbor_count: int = 0

    @classmethod
    def mine(cls) -> "Tile":
        return cls(is_mine=True)

    @classmethod
    def safe(cls, neighbor_count: int) -> "Tile":
        if not 0 <= neighbor_count <= 8:
            raise ValueError(f"Neighbor count out of range: {neighbor_count}")
        return cls(is_mine=False, neighbor_count=neighbor_count)

    @property
    def is_empty(self) -> bool:
        """Check if this is a safe tile with no neighboring mines."""
        return not self.is_mine and self.neighbor_count == 0

    def to_observation(self) -> int:
        """
        Convert an uncovered tile to its observation value.

        Returns:
            9 for a mine, otherwise the neighbor count (0-8).
        """
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_count

    def symbol(self) -> str:
        """Single-character text form used by render()."""
        if self.is_mine:
            return "*"
        if self.neighbor_count == 0:
            return " "
        return str(self.neighbor_count)
