"""
Pytest configuration and shared fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import BoardConfig, BoardState, Coordinate, TileMap


# ============================================================================
# Random Source Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible layouts."""
    return random.Random(1234)


# ============================================================================
# Tile Map Fixtures
# ============================================================================

@pytest.fixture
def empty_map() -> TileMap:
    """5x5 map with no mines for cascade testing."""
    return TileMap.from_mines(5, 5, [])


@pytest.fixture
def corner_mine_map() -> TileMap:
    """4x4 map with a single mine in the top-left corner."""
    return TileMap.from_mines(4, 4, [Coordinate(0, 0)])


@pytest.fixture
def small_map() -> TileMap:
    """3x3 map with one mine at (0, 0); the center counts 1."""
    return TileMap.from_mines(3, 3, [Coordinate(0, 0)])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def empty_board(empty_map: TileMap) -> BoardState:
    """Fully covered board with no mines."""
    return BoardState(empty_map)


@pytest.fixture
def corner_mine_board(corner_mine_map: TileMap) -> BoardState:
    """Fully covered 4x4 board with a corner mine."""
    return BoardState(corner_mine_map)


@pytest.fixture
def small_board(small_map: TileMap) -> BoardState:
    """Fully covered 3x3 board with one mine."""
    return BoardState(small_map)


@pytest.fixture
def opened_center_board(small_board: BoardState) -> BoardState:
    """3x3 board with the center (count 1) already uncovered."""
    small_board.reveal(Coordinate(1, 1))
    return small_board


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def unsafe_config() -> BoardConfig:
    """Configuration without a safe start zone."""
    return BoardConfig(5, 5, 5, safe_start=False)
