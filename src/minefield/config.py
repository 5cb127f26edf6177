"""
Board configuration for the minefield core.

Validates grid dimensions and mine counts up front so that generation
can never be asked for an impossible layout.
"""
from dataclasses import dataclass


class ConfigError(ValueError):
    """Raised when a board configuration cannot produce a valid game."""


def min_safe_zone_size(width: int, height: int) -> int:
    """
    Size of the smallest safe zone on a width x height grid.

    A corner origin has the fewest neighbors, so its closed neighborhood
    is the cheapest zone to keep clear.
    """
    return min(2, width) * min(2, height)


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        safe_start: Keep a zone around a starting cell mine-free and
            open it as the first move.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10
    safe_start: bool = True

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigError("Number of mines cannot be negative")
        if self.num_mines > self.max_mines:
            raise ConfigError(f"Too many mines (max {self.max_mines})")

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def safe_cells(self) -> int:
        """Number of non-mine cells on the board."""
        return self.total_cells - self.num_mines

    @property
    def max_mines(self) -> int:
        """Largest mine count this grid accepts."""
        if self.safe_start:
            return self.total_cells - min_safe_zone_size(self.width, self.height)
        return self.total_cells


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)
