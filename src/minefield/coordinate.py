"""
Coordinate module for the minefield core.

Grid positions are immutable (row, col) pairs. Offsets are applied with
bounds checks so that a step off the grid yields None instead of wrapping.
"""
from numbers import Integral
from typing import NamedTuple, Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

# Fixed 8-direction enumeration: NW, N, NE, W, E, SW, S, SE
COMPASS_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)


# ============================================================================
# Coordinate
# ============================================================================

class Coordinate(NamedTuple):
    """
    A cell position on the grid.

    Attributes:
        row: Row index, 0 <= row < height.
        col: Column index, 0 <= col < width.
    """

    row: int
    col: int

    @classmethod
    def of(cls, value) -> "Coordinate":
        """
        Coerce a (row, col) pair into a Coordinate.

        Raises:
            TypeError: If value is not a pair of integers.
        """
        if isinstance(value, cls):
            return value
        try:
            row, col = value
        except (TypeError, ValueError):
            raise TypeError(f"Expected a (row, col) pair, got {value!r}") from None
        if isinstance(row, bool) or isinstance(col, bool):
            raise TypeError(f"Expected integer indices, got {value!r}")
        if not isinstance(row, Integral) or not isinstance(col, Integral):
            raise TypeError(f"Expected integer indices, got {value!r}")
        return cls(int(row), int(col))

    def offset(
        self, delta: Tuple[int, int], width: int, height: int
    ) -> Optional["Coordinate"]:
        """
        Apply a signed offset inside a width x height grid.

        Args:
            delta: (delta_row, delta_col) pair.
            width: Number of columns.
            height: Number of rows.

        Returns:
            The shifted Coordinate, or None if it falls off the grid.
        """
        new_row = self.row + delta[0]
        new_col = self.col + delta[1]
        if 0 <= new_row < height and 0 <= new_col < width:
            return Coordinate(new_row, new_col)
        return None

    def in_bounds(self, width: int, height: int) -> bool:
        """Check if this position lies within a width x height grid."""
        return 0 <= self.row < height and 0 <= self.col < width

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
