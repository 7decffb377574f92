"""
Computer controlled opponent.

The opponent plays the search-optimal move from ttt_engine.minimax, except
that on each turn it plays a uniformly random legal move with its configured
mistake probability. Ties between equally good moves are broken at random,
so even a perfect opponent does not repeat itself.
"""

import logging
import random
from enum import Enum
from typing import Dict, Optional, Union

from .board import Position
from .game import Game
from .minimax import score_moves

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Named mistake probabilities."""
    NONE = "none"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    UNBEATABLE = "unbeatable"
    CUSTOM = "custom"

    @property
    def mistake_probability(self) -> Optional[float]:
        """The preset's probability; None for CUSTOM."""
        return _PRESET_PROBABILITIES.get(self)


_PRESET_PROBABILITIES = {
    Difficulty.NONE: 1.0,
    Difficulty.EASY: 0.5,
    Difficulty.MEDIUM: 0.25,
    Difficulty.HARD: 0.1,
    Difficulty.UNBEATABLE: 0.0,
}


def best_position(scores: Dict[Position, int], rng: random.Random) -> Optional[Position]:
    """
    Pick one of the highest scoring positions uniformly at random.

    Returns None if scores is empty.
    """
    if not scores:
        return None
    best = max(scores.values())
    candidates = sorted(
        (p for p, s in scores.items() if s == best),
        key=lambda p: p.index,
    )
    return rng.choice(candidates)


class Opponent:
    """
    An AI that plays TicTacToe using exhaustive minimax.

    With mistake_probability 0.0 it never loses; with 1.0 it always plays a
    random legal move. Either mark can be played: the opponent moves for
    whichever player's turn it is in the game it is given.
    """

    def __init__(self, mistake_probability: float = 0.0, rng: Optional[random.Random] = None):
        """
        Initialize the opponent.

        Args:
            mistake_probability: Chance per turn of a random move. Values
                outside 0.0-1.0 are clamped into that range.
            rng: Source of randomness; seed it for reproducible play.
        """
        self._mistake_probability = min(1.0, max(0.0, float(mistake_probability)))
        self._rng = rng if rng is not None else random.Random()

    @classmethod
    def from_difficulty(
        cls,
        difficulty: Union[Difficulty, str],
        mistake_probability: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> "Opponent":
        """
        Build an opponent from a preset.

        Args:
            difficulty: A Difficulty or its name ("easy", "hard", ...).
            mistake_probability: Required for CUSTOM, ignored otherwise.

        Raises:
            ValueError: unknown name, or CUSTOM without a probability.
        """
        if isinstance(difficulty, str):
            difficulty = difficulty.lower()
        difficulty = Difficulty(difficulty)
        if difficulty is Difficulty.CUSTOM:
            if mistake_probability is None:
                raise ValueError("Difficulty.CUSTOM needs an explicit mistake_probability")
            return cls(mistake_probability, rng=rng)
        return cls(difficulty.mistake_probability, rng=rng)

    @property
    def mistake_probability(self) -> float:
        return self._mistake_probability

    def evaluate_game(self, game: Game) -> Dict[Position, int]:
        """
        Score every free position for the player to move.

        Higher is better for that player: positive scores win, zero draws,
        negative scores lose against perfect play. Empty if the game is over.
        Useful for hint systems.
        """
        mover = game.state.to_move()
        if mover is None:
            return {}
        scores = score_moves(game.board.cells(), mover.value)
        return {Position.from_index(action): score for action, score in scores.items()}

    def get_move(self, game: Game) -> Optional[Position]:
        """
        Choose a position for the player whose turn it is.

        Returns:
            A free position, or None if the game is over.
        """
        free = game.free_positions()
        if not free:
            return None

        if self._rng.random() < self._mistake_probability:
            move = self._rng.choice(free)
            logger.debug("Mistake: random move %s", move)
            return move

        scores = self.evaluate_game(game)
        move = best_position(scores, self._rng)
        logger.debug(
            "Best move %s (score: %d, %d candidates)",
            move, scores[move], sum(1 for s in scores.values() if s == scores[move]),
        )
        return move

    def __repr__(self) -> str:
        return f"Opponent(mistake_probability={self._mistake_probability})"
