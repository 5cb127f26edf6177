"""
Minefield board-logic core.

Provides mine layout generation, covered/marked bookkeeping and the
reveal algorithm (flood fill and chorded reveal).
"""
from .coordinate import Coordinate, COMPASS_OFFSETS
from .tile import Tile, CellState
from .config import BoardConfig, ConfigError, BEGINNER, INTERMEDIATE, EXPERT
from .tile_map import TileMap
from .propagation import propagate
from .board import BoardState, RevealOutcome, RevealKind, new_game, new_game_from_config
from .session import GameSession, AppPhase
from .environment import MinesweeperEnv

__all__ = [
    "Coordinate",
    "COMPASS_OFFSETS",
    "Tile",
    "CellState",
    "BoardConfig",
    "ConfigError",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "TileMap",
    "propagate",
    "BoardState",
    "RevealOutcome",
    "RevealKind",
    "new_game",
    "new_game_from_config",
    "GameSession",
    "AppPhase",
    "MinesweeperEnv",
]
