"""
Evaluation functions.

Pits opponents against each other and tallies the results, e.g. to compare
how the difficulty presets fare against a random player and against a
perfect one.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tqdm.auto import trange

from .board import Mark
from .game import Game, Phase, State
from .opponent import Difficulty, Opponent

logger = logging.getLogger(__name__)


@dataclass
class ArenaConfig:
    """Difficulty comparison configuration."""

    # Random seed
    seed: int = 0

    # Games per battle
    games: int = 100

    # Difficulties to compare against NONE and UNBEATABLE
    difficulties: List[Difficulty] = field(default_factory=lambda: [
        Difficulty.NONE,
        Difficulty.EASY,
        Difficulty.MEDIUM,
        Difficulty.HARD,
        Difficulty.UNBEATABLE,
    ])

    # Mistake probability used when CUSTOM is listed
    custom_mistake_probability: Optional[float] = None

    # Show tqdm progress bars
    progress: bool = True


@dataclass
class BattleScores:
    """Results of a series of games between two opponents."""
    player_x_wins: int = 0
    player_o_wins: int = 0
    cats_games: int = 0

    @property
    def total_games(self) -> int:
        return self.player_x_wins + self.player_o_wins + self.cats_games

    def _percent(self, value: int) -> float:
        if self.total_games == 0:
            return 0.0
        return 100.0 * value / self.total_games

    @property
    def player_x_win_percent(self) -> float:
        return self._percent(self.player_x_wins)

    @property
    def player_o_win_percent(self) -> float:
        return self._percent(self.player_o_wins)

    @property
    def cats_game_percent(self) -> float:
        return self._percent(self.cats_games)

    def record(self, state: State) -> None:
        """Count a finished game."""
        if state.phase is Phase.PLAYER_X_WIN:
            self.player_x_wins += 1
        elif state.phase is Phase.PLAYER_O_WIN:
            self.player_o_wins += 1
        elif state.phase is Phase.CATS_GAME:
            self.cats_games += 1
        else:
            raise ValueError(f"Cannot record an unfinished game ({state.phase.name})")

    def __str__(self) -> str:
        return (f"{self.player_x_win_percent:3.0f}% - {self.player_o_win_percent:3.0f}% - "
                f"{self.cats_game_percent:3.0f}%")


def play_game(player_x: Opponent, player_o: Opponent, game: Optional[Game] = None) -> State:
    """
    Play one game to the end.

    Args:
        game: Game to continue; a new one if None. It is played in place.

    Returns:
        The final state.
    """
    if game is None:
        game = Game()
    players = {Mark.X: player_x, Mark.O: player_o}

    while not game.state.is_game_over():
        mover = game.state.to_move()
        position = players[mover].get_move(game)
        game.do_move(position)

    return game.state


def battle(
    player_x: Opponent,
    player_o: Opponent,
    games: int = 100,
    progress: bool = True,
    desc: str = "battle",
) -> BattleScores:
    """
    Play a series of games between two opponents.

    The rounds are played on one Game with start_next_game(), so X and O
    take turns making the first move.
    """
    scores = BattleScores()
    game = Game()

    for g in trange(games, desc=desc, leave=False, disable=not progress):
        if g > 0:
            game.start_next_game()
        state = play_game(player_x, player_o, game)
        scores.record(state)
        logger.debug("%s game %d: %s", desc, g, state.phase.name)

    return scores


def compare_difficulties(config: ArenaConfig) -> List[Dict[str, object]]:
    """
    Battle each difficulty (as X) against a random and a perfect opponent.

    Returns:
        One row per difficulty with 'difficulty', 'vs_none' and
        'vs_unbeatable' BattleScores.
    """
    rng = random.Random(config.seed)
    rows = []

    for difficulty in config.difficulties:
        row: Dict[str, object] = {"difficulty": difficulty.name.capitalize()}
        for reference in (Difficulty.NONE, Difficulty.UNBEATABLE):
            player_x = Opponent.from_difficulty(
                difficulty, config.custom_mistake_probability, rng=random.Random(rng.random()),
            )
            player_o = Opponent.from_difficulty(reference, rng=random.Random(rng.random()))
            row[f"vs_{reference.value}"] = battle(
                player_x, player_o,
                games=config.games,
                progress=config.progress,
                desc=f"{difficulty.name.capitalize()} vs {reference.name.capitalize()}",
            )
        rows.append(row)

    return rows
