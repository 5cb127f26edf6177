"""
Reveal propagation for the minefield core.

Expands a reveal through zero-count cells in a single synchronous pass.
"""
import logging
from collections import deque
from typing import Any, Collection, Deque, Dict, Set

from .coordinate import Coordinate
from .tile_map import TileMap

logger = logging.getLogger(__name__)


def propagate(
    seed: Coordinate,
    tile_map: TileMap,
    covered: Dict[Coordinate, Any],
    marked: Collection[Coordinate],
) -> Set[Coordinate]:
    """
    Uncover the region opened by an already-uncovered safe seed.

    Cells are removed from covered as soon as they are queued, so each
    cell is visited at most once. Marked cells are never uncovered and
    the fill does not pass through them. Only zero-count cells expand.

    Args:
        seed: Uncovered, non-mine cell the fill starts from.
        tile_map: Ground truth for counts.
        covered: Covered mapping; uncovered cells are popped from it.
        marked: Player marks to leave alone.

    Returns:
        Cells uncovered by this call, excluding the seed itself.
    """
    uncovered: Set[Coordinate] = set()
    if tile_map.neighbor_count_at(seed) != 0:
        return uncovered

    frontier: Deque[Coordinate] = deque([seed])
    while frontier:
        current = frontier.popleft()
        for neighbor in tile_map.neighbors_in_bounds(current):
            if neighbor not in covered or neighbor in marked:
                continue
            covered.pop(neighbor)
            uncovered.add(neighbor)
            if tile_map.neighbor_count_at(neighbor) == 0:
                frontier.append(neighbor)

    logger.debug("Propagation from %s uncovered %d cells", seed, len(uncovered))
    return uncovered
