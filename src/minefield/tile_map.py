"""
Tile map module for the minefield core.

Owns the ground truth of a grid: where the mines are and how many mines
border every safe cell. Generation is the only writer; the map is
read-only once built.
"""
import logging
import random
from typing import Dict, Iterable, Iterator, List, Optional, Set

import numpy as np

from .config import ConfigError
from .coordinate import COMPASS_OFFSETS, Coordinate
from .tile import Tile

logger = logging.getLogger(__name__)


# ============================================================================
# Tile Map Class
# ============================================================================

class TileMap:
    """
    Dense mapping from Coordinate to Tile.

    Build with generate() for random layouts or from_mines() for a fixed
    layout. Counts are always derived from the complete mine set.
    """

    def __init__(self, width: int, height: int, mines: Iterable[Coordinate]) -> None:
        """
        Build the map from a final set of mine positions.

        Args:
            width: Number of columns.
            height: Number of rows.
            mines: Positions holding a mine.

        Raises:
            ConfigError: If dimensions are not positive or a mine lies
                outside the grid.
        """
        if width < 1 or height < 1:
            raise ConfigError("Board dimensions must be positive")
        self.width = width
        self.height = height

        mine_set: Set[Coordinate] = set()
        for mine in mines:
            coord = Coordinate.of(mine)
            if not coord.in_bounds(width, height):
                raise ConfigError(f"Mine {coord} lies outside the grid")
            mine_set.add(coord)
        self._mine_count = len(mine_set)

        self._neighbors: Dict[Coordinate, List[Coordinate]] = {
            coord: self._scan_neighbors(coord) for coord in self.coordinates()
        }
        self._tiles: Dict[Coordinate, Tile] = self._build_tiles(mine_set)

    # ========================================================================
    # Construction (Low-level)
    # ========================================================================

    @classmethod
    def generate(
        cls,
        width: int,
        height: int,
        mine_count: int,
        safe_origin: Optional[Coordinate] = None,
        rng: Optional[random.Random] = None,
    ) -> "TileMap":
        """
        Place mines uniformly at random among eligible cells.

        Eligible cells are all cells, minus the safe zone around
        safe_origin when one is given.

        Args:
            width: Number of columns.
            height: Number of rows.
            mine_count: Exact number of mines to place.
            safe_origin: Cell whose closed neighborhood stays mine-free.
            rng: Random source (default: module-level random).

        Returns:
            A new TileMap holding exactly mine_count mines.

        Raises:
            ConfigError: If dimensions are not positive, the origin is off
                the grid, or mine_count exceeds the eligible cell count.
        """
        if width < 1 or height < 1:
            raise ConfigError("Board dimensions must be positive")
        if mine_count < 0:
            raise ConfigError("Number of mines cannot be negative")
        rng = rng or random

        excluded: Set[Coordinate] = set()
        if safe_origin is not None:
            origin = Coordinate.of(safe_origin)
            if not origin.in_bounds(width, height):
                raise ConfigError(f"Safe origin {origin} lies outside the grid")
            excluded = closed_neighborhood(origin, width, height)

        eligible = [
            Coordinate(row, col)
            for row in range(height)
            for col in range(width)
            if Coordinate(row, col) not in excluded
        ]
        if mine_count > len(eligible):
            raise ConfigError(
                f"Too many mines ({mine_count}) for {len(eligible)} eligible cells"
            )

        # Draw without replacement: exactly mine_count distinct cells
        mines = rng.sample(eligible, mine_count)
        logger.debug(
            "Placed %d mines on %dx%d grid (safe origin: %s)",
            mine_count, width, height, safe_origin,
        )
        return cls(width, height, mines)

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Coordinate]
    ) -> "TileMap":
        """Build a map with mines at the given positions."""
        return cls(width, height, mines)

    def _build_tiles(self, mines: Set[Coordinate]) -> Dict[Coordinate, Tile]:
        """Classify every cell once the mine set is final."""
        tiles = {}
        for coord in self.coordinates():
            if coord in mines:
                tiles[coord] = Tile.mine()
            else:
                count = sum(1 for n in self._neighbors[coord] if n in mines)
                tiles[coord] = Tile.safe(count)
        return tiles

    def _scan_neighbors(self, coord: Coordinate) -> List[Coordinate]:
        neighbors = []
        for delta in COMPASS_OFFSETS:
            neighbor = coord.offset(delta, self.width, self.height)
            if neighbor is not None:
                neighbors.append(neighbor)
        return neighbors

    # ========================================================================
    # Queries
    # ========================================================================

    def _lookup(self, coord) -> Optional[Coordinate]:
        """Coerce coord; None if malformed or off the grid."""
        try:
            coord = Coordinate.of(coord)
        except TypeError:
            return None
        if not coord.in_bounds(self.width, self.height):
            return None
        return coord

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every cell in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield Coordinate(row, col)

    def contains(self, coord: Coordinate) -> bool:
        """Check if coord lies on this grid."""
        return self._lookup(coord) is not None

    def neighbors_in_bounds(self, coord: Coordinate) -> List[Coordinate]:
        """
        Get the on-grid neighbors of coord.

        Returns:
            Up to 8 Coordinates in NW, N, NE, W, E, SW, S, SE order, or an
            empty list if coord is off the grid.
        """
        return list(self._neighbors.get(self._lookup(coord), ()))

    def safe_zone(self, origin: Coordinate) -> Set[Coordinate]:
        """Origin plus its on-grid neighbors."""
        return closed_neighborhood(Coordinate.of(origin), self.width, self.height)

    def tile_at(self, coord: Coordinate) -> Optional[Tile]:
        """Get the tile at coord, or None if off the grid."""
        return self._tiles.get(self._lookup(coord))

    def is_mine_at(self, coord: Coordinate) -> bool:
        tile = self.tile_at(coord)
        return tile is not None and tile.is_mine

    def neighbor_count_at(self, coord: Coordinate) -> int:
        """
        Mines adjacent to coord.

        Only meaningful for safe cells; callers check is_mine_at first.
        Off-grid coordinates report 0.
        """
        tile = self.tile_at(coord)
        if tile is None:
            return 0
        return tile.neighbor_count

    def mine_count(self) -> int:
        """Total mines on the map."""
        return self._mine_count

    def mine_coordinates(self) -> List[Coordinate]:
        """Positions of every mine, in row-major order."""
        return [coord for coord, tile in self._tiles.items() if tile.is_mine]

    # ========================================================================
    # Output
    # ========================================================================

    def to_array(self) -> np.ndarray:
        """
        Ground truth as a numpy array.

        Returns:
            (height, width) int8 array: -1 for mines, otherwise 0-8.
        """
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for coord, tile in self._tiles.items():
            grid[coord.row, coord.col] = -1 if tile.is_mine else tile.neighbor_count
        return grid

    def render(self) -> str:
        """Render the fully exposed map as text."""
        lines = []
        for row in range(self.height):
            symbols = [
                self._tiles[Coordinate(row, col)].symbol()
                for col in range(self.width)
            ]
            lines.append(" ".join(symbols))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"TileMap(width={self.width}, height={self.height}, "
            f"mines={self._mine_count})"
        )


def closed_neighborhood(origin: Coordinate, width: int, height: int) -> Set[Coordinate]:
    """Origin plus every on-grid neighbor."""
    zone = {origin}
    for delta in COMPASS_OFFSETS:
        neighbor = origin.offset(delta, width, height)
        if neighbor is not None:
            zone.add(neighbor)
    return zone
