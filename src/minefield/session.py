"""
Game session state.

Holds the application-level state around a board: the current phase,
the cheat counter, and the round's start time. The presentation layer
owns a GameSession and feeds it player intents.
"""
import logging
import random
import time
from enum import Enum, auto
from typing import Callable, Optional

from .board import BoardState, RevealOutcome, new_game_from_config
from .config import EXPERT, BoardConfig
from .coordinate import Coordinate

logger = logging.getLogger(__name__)


class AppPhase(Enum):
    """Possible phases of the application."""

    IN_GAME = auto()
    OUT = auto()


class GameSession:
    """
    One player's sequence of rounds.

    Attributes:
        config: Board settings used by generate().
        board: Board of the current or last round, or None after clear().
        phase: IN_GAME while a round is being played, OUT otherwise.
        cheat_count: Safe cells revealed through cheat() this round.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EXPERT
        self.board: Optional[BoardState] = None
        self.phase = AppPhase.OUT
        self.cheat_count = 0
        self.start_time = clock()
        self._rng = rng or random.Random()
        self._clock = clock

    @property
    def in_game(self) -> bool:
        return self.phase == AppPhase.IN_GAME

    def generate(self) -> bool:
        """
        Start a new round.

        Returns:
            True if a round was started, False if one is in progress.
        """
        if self.in_game:
            logger.debug("Generate ignored, a round is in progress")
            return False
        logger.info("Loading game")
        self.board = new_game_from_config(self.config, self._rng)
        self.cheat_count = 0
        self.start_time = self._clock()
        self.phase = AppPhase.IN_GAME
        if self.board.is_completed():
            # Opening move cleared the whole board
            self.phase = AppPhase.OUT
        return True

    def clear(self) -> bool:
        """
        Abandon the current round.

        Returns:
            True if a round was cleared, False if none was in progress.
        """
        if not self.in_game:
            logger.debug("Clear ignored, no round in progress")
            return False
        logger.info("Clearing game")
        self.board = None
        self.phase = AppPhase.OUT
        return True

    def reveal(self, coord: Coordinate) -> RevealOutcome:
        """Forward a reveal to the board and end the round if it is over."""
        if not self.in_game:
            return RevealOutcome.rejected()
        outcome = self.board.reveal(coord)
        self._check_end_of_game(outcome)
        return outcome

    def toggle_mark(self, coord: Coordinate) -> Optional[bool]:
        if not self.in_game:
            return None
        return self.board.toggle_mark(coord)

    def cheat(self) -> Optional[RevealOutcome]:
        """
        Reveal a random safe covered cell for the player.

        Returns:
            The reveal outcome, or None if no safe cell could be found.
        """
        if not self.in_game:
            return None
        coord = self.board.find_safe_covered_cell()
        if coord is None:
            return None
        outcome = self.board.reveal(coord)
        if not outcome.is_rejected:
            self.cheat_count += 1
        self._check_end_of_game(outcome)
        return outcome

    def _check_end_of_game(self, outcome: RevealOutcome) -> None:
        if outcome.is_detonated or outcome.completed:
            logger.info("Round over (%s)", "completed" if outcome.completed else "detonated")
            self.phase = AppPhase.OUT

    def elapsed(self) -> float:
        """Seconds since the current round started."""
        return self._clock() - self.start_time

    def elapsed_label(self) -> str:
        """Elapsed time formatted as M:SS."""
        seconds = int(self.elapsed())
        return f"{seconds // 60}:{seconds % 60:02d}"
