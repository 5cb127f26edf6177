"""
Board module for the minefield core.

BoardState wraps a TileMap with the player-facing records: which cells
are still covered and which ones the player has marked. All player
intents (reveal, toggle mark, safe-cell search) go through here and
return the set of affected cells for the caller to render.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set

import numpy as np

from .config import BoardConfig, ConfigError
from .coordinate import Coordinate
from .propagation import propagate
from .tile import OBS_COVERED, OBS_MARKED, CellState, Tile
from .tile_map import TileMap, closed_neighborhood

logger = logging.getLogger(__name__)

HandleFactory = Callable[[Coordinate], Any]


# ============================================================================
# Constants
# ============================================================================

class RevealKind(Enum):
    """Possible results of a reveal intent."""

    REJECTED = auto()
    DETONATED = auto()
    UNCOVERED = auto()


@dataclass(frozen=True)
class RevealOutcome:
    """
    Result of a reveal intent.

    Attributes:
        kind: Whether the reveal was rejected, hit a mine, or uncovered
            safe cells.
        cells: Every cell uncovered by this intent (empty when rejected).
        completed: Whether the board is complete after this intent.
    """

    kind: RevealKind
    cells: FrozenSet[Coordinate] = field(default_factory=frozenset)
    completed: bool = False

    @classmethod
    def rejected(cls) -> "RevealOutcome":
        return cls(RevealKind.REJECTED)

    @property
    def is_rejected(self) -> bool:
        return self.kind == RevealKind.REJECTED

    @property
    def is_detonated(self) -> bool:
        return self.kind == RevealKind.DETONATED

    @property
    def is_uncovered(self) -> bool:
        return self.kind == RevealKind.UNCOVERED


# ============================================================================
# Board State Class
# ============================================================================

class BoardState:
    """
    Covered/marked bookkeeping on top of a TileMap.

    A cell is covered iff it is a key of the covered mapping. Marks are
    kept in placement order and are always a subset of the covered cells.
    """

    def __init__(
        self,
        tile_map: TileMap,
        handle_factory: Optional[HandleFactory] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Start a round with every cell covered.

        Args:
            tile_map: Ground truth for this round.
            handle_factory: Builds the presentation handle stored for each
                covered cell (default: None for every cell).
            rng: Random source for the safe-cell search.
        """
        self.tile_map = tile_map
        self.safe_origin: Optional[Coordinate] = None
        self._rng = rng or random.Random()
        self._covered: Dict[Coordinate, Any] = {
            coord: handle_factory(coord) if handle_factory else None
            for coord in tile_map.coordinates()
        }
        self._marked: List[Coordinate] = []

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _resolve(self, coord) -> Optional[Coordinate]:
        """Coerce coord and check bounds; None if off the grid."""
        try:
            coord = Coordinate.of(coord)
        except TypeError:
            logger.warning("Ignoring malformed coordinate %r", coord)
            return None
        if not self.tile_map.contains(coord):
            logger.debug("Ignoring out-of-grid coordinate %s", coord)
            return None
        return coord

    def adjacent_covered(self, coord: Coordinate) -> List[Coordinate]:
        """Covered neighbors of coord, marked or not."""
        return [
            n for n in self.tile_map.neighbors_in_bounds(coord)
            if n in self._covered
        ]

    def marked_neighbor_count(self, coord: Coordinate) -> int:
        """Count marked cells adjacent to coord."""
        marked = set(self._marked)
        return sum(
            1 for n in self.tile_map.neighbors_in_bounds(coord) if n in marked
        )

    def chord_ready(self, coord: Coordinate) -> bool:
        """
        Check if a chord on coord would fire.

        The coord must be uncovered and safe with a positive count equal
        to the number of marked neighbors. Marks are trusted as given.
        """
        coord = self._resolve(coord)
        if coord is None or coord in self._covered:
            return False
        tile = self.tile_map.tile_at(coord)
        if tile.is_mine or tile.neighbor_count == 0:
            return False
        marked_neighbors = self.marked_neighbor_count(coord)
        logger.debug(
            "Neighbor count at %s is %d and marked neighbors are %d",
            coord, tile.neighbor_count, marked_neighbors,
        )
        return marked_neighbors == tile.neighbor_count

    # ========================================================================
    # Player Intents (Mid-level)
    # ========================================================================

    def reveal(self, coord: Coordinate) -> RevealOutcome:
        """
        Reveal a cell, or chord around an uncovered one.

        Marked cells are rejected. A covered cell is uncovered and, when
        safe, its zero-count region is opened. An uncovered cell chords
        when its marked-neighbor count matches its mine count; otherwise
        the call is a no-op and reports REJECTED.

        Args:
            coord: Cell the player targeted.

        Returns:
            RevealOutcome describing every uncovered cell.
        """
        coord = self._resolve(coord)
        if coord is None:
            return RevealOutcome.rejected()

        if coord in self._marked:
            logger.info("Cell %s is marked, unmark it before revealing", coord)
            return RevealOutcome.rejected()

        if coord in self._covered:
            logger.debug("Single uncover at %s", coord)
            return self._reveal_seeds([coord])

        if self.chord_ready(coord):
            seeds = [n for n in self.adjacent_covered(coord) if n not in self._marked]
            logger.info("Chord at %s opens %d cells", coord, len(seeds))
            return self._reveal_seeds(seeds)

        logger.debug("Chord condition unmet at %s", coord)
        return RevealOutcome.rejected()

    def _reveal_seeds(self, seeds: List[Coordinate]) -> RevealOutcome:
        """Uncover each seed and the region it opens."""
        if not seeds:
            return RevealOutcome.rejected()

        marked = set(self._marked)
        uncovered: Set[Coordinate] = set()
        detonated = False
        for seed in seeds:
            if seed not in self._covered:
                # Already opened by an earlier seed's propagation
                continue
            self._covered.pop(seed)
            uncovered.add(seed)
            if self.tile_map.is_mine_at(seed):
                logger.info("Boom! Mine uncovered at %s", seed)
                detonated = True
                continue
            uncovered |= propagate(seed, self.tile_map, self._covered, marked)

        completed = not detonated and self.is_completed()
        if completed:
            logger.info("Board completed")
        kind = RevealKind.DETONATED if detonated else RevealKind.UNCOVERED
        return RevealOutcome(kind, frozenset(uncovered), completed)

    def toggle_mark(self, coord: Coordinate) -> Optional[bool]:
        """
        Mark or unmark a covered cell.

        Returns:
            The new mark state, or None if coord is not covered.
        """
        coord = self._resolve(coord)
        if coord is None or coord not in self._covered:
            return None
        if coord in self._marked:
            self._marked.remove(coord)
            return False
        self._marked.append(coord)
        return True

    def find_safe_covered_cell(self) -> Optional[Coordinate]:
        """
        Pick a random covered, unmarked cell that holds no mine.

        Scans one random permutation of the candidates, so the search
        only comes back empty when no such cell exists.
        """
        marked = set(self._marked)
        candidates = [c for c in self._covered if c not in marked]
        self._rng.shuffle(candidates)
        for coord in candidates:
            if not self.tile_map.is_mine_at(coord):
                return coord
        logger.debug("No safe covered cell left")
        return None

    def reveal_all(self) -> FrozenSet[Coordinate]:
        """
        Uncover every remaining cell, ignoring marks.

        Used at end of game to expose the layout.

        Returns:
            Cells that were still covered.
        """
        remaining = frozenset(self._covered)
        self._covered.clear()
        self._marked.clear()
        return remaining

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def is_completed(self) -> bool:
        """Check if every non-mine cell is uncovered."""
        return len(self._covered) == self.tile_map.mine_count()

    def is_covered(self, coord: Coordinate) -> bool:
        coord = self._resolve(coord)
        return coord is not None and coord in self._covered

    def is_marked(self, coord: Coordinate) -> bool:
        coord = self._resolve(coord)
        return coord is not None and coord in self._marked

    def state_at(self, coord: Coordinate) -> Optional[CellState]:
        """Get the player-facing state of coord, or None if off the grid."""
        coord = self._resolve(coord)
        if coord is None:
            return None
        if coord in self._marked:
            return CellState.MARKED
        if coord in self._covered:
            return CellState.COVERED
        return CellState.UNCOVERED

    def tile_at(self, coord: Coordinate) -> Optional[Tile]:
        """Tile classification at coord, for rendering."""
        return self.tile_map.tile_at(coord)

    def handle_at(self, coord: Coordinate) -> Any:
        """Presentation handle of a covered cell (None once uncovered)."""
        coord = self._resolve(coord)
        if coord is None:
            return None
        return self._covered.get(coord)

    def all_mine_coordinates(self) -> List[Coordinate]:
        return self.tile_map.mine_coordinates()

    @property
    def mine_total(self) -> int:
        return self.tile_map.mine_count()

    @property
    def marked_count(self) -> int:
        return len(self._marked)

    @property
    def covered_count(self) -> int:
        return len(self._covered)

    @property
    def mines_remaining(self) -> int:
        """Mine total minus player marks (may go negative)."""
        return self.mine_total - self.marked_count

    @property
    def marked_coordinates(self) -> List[Coordinate]:
        """Marks in placement order."""
        return list(self._marked)

    @property
    def covered_coordinates(self) -> FrozenSet[Coordinate]:
        return frozenset(self._covered)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array.

        Returns:
            2D int8 array where:
                -1 = covered
                -2 = marked
                0-8 = uncovered with adjacent count
                9 = uncovered mine
        """
        obs = np.full(
            (self.tile_map.height, self.tile_map.width), OBS_COVERED, dtype=np.int8
        )
        for coord in self.tile_map.coordinates():
            if coord in self._covered:
                continue
            obs[coord.row, coord.col] = self.tile_map.tile_at(coord).to_observation()
        for coord in self._marked:
            obs[coord.row, coord.col] = OBS_MARKED
        return obs

    def render(self) -> str:
        """Render the board as text: '.' covered, 'F' marked."""
        lines = []
        for row in range(self.tile_map.height):
            symbols = []
            for col in range(self.tile_map.width):
                coord = Coordinate(row, col)
                if coord in self._marked:
                    symbols.append("F")
                elif coord in self._covered:
                    symbols.append(".")
                else:
                    symbols.append(self.tile_map.tile_at(coord).symbol())
            lines.append(" ".join(symbols))
        return "\n".join(lines)


# ============================================================================
# Game Construction
# ============================================================================

def new_game(
    width: int,
    height: int,
    mine_count: int,
    safe_start: bool,
    rng: Optional[random.Random] = None,
    handle_factory: Optional[HandleFactory] = None,
) -> BoardState:
    """
    Generate a fresh board for one round.

    With safe_start, a random origin whose safe zone leaves room for every
    mine is chosen, the layout keeps that zone clear, and the origin is
    revealed as the opening move.

    Raises:
        ConfigError: If the configuration cannot produce a board.
    """
    config = BoardConfig(width, height, mine_count, safe_start)
    rng = rng or random.Random()

    origin = None
    if safe_start:
        origin = _pick_safe_origin(config, rng)

    tile_map = TileMap.generate(width, height, mine_count, origin, rng)
    board = BoardState(tile_map, handle_factory, rng)
    logger.info(
        "Generated %dx%d board with %d mines", width, height, mine_count
    )
    if origin is not None:
        board.safe_origin = origin
        board.reveal(origin)
    return board


def new_game_from_config(
    config: BoardConfig,
    rng: Optional[random.Random] = None,
    handle_factory: Optional[HandleFactory] = None,
) -> BoardState:
    """Generate a board from a validated BoardConfig."""
    return new_game(
        config.width, config.height, config.num_mines, config.safe_start,
        rng, handle_factory,
    )


def _pick_safe_origin(config: BoardConfig, rng: random.Random) -> Coordinate:
    """Choose an origin whose safe zone leaves enough eligible cells."""
    feasible = [
        Coordinate(row, col)
        for row in range(config.height)
        for col in range(config.width)
        if config.total_cells
        - len(closed_neighborhood(Coordinate(row, col), config.width, config.height))
        >= config.num_mines
    ]
    if not feasible:
        raise ConfigError(
            f"Too many mines ({config.num_mines}) to keep a safe start zone"
        )
    return rng.choice(feasible)
