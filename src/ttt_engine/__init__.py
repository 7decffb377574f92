"""
ttt_engine - TicTacToe rules engine and computer opponent.

This package implements the 3x3 game state machine and an exhaustive
minimax opponent whose strength is set by a mistake probability.
"""

from .board import Board, Mark, Position, WINNING_LINES
from .errors import TicTacToeError, InvalidPosition, PositionOccupied, GameOver
from .game import Game, Phase, State
from .minimax import minimax_value_and_moves, score_moves, clear_cache, cache_size, iter_all_legal_nonterminal_states
from .opponent import Difficulty, Opponent, best_position
from .arena import ArenaConfig, BattleScores, play_game, battle, compare_difficulties

__version__ = "0.1.0"
__all__ = [
    "Board",
    "Mark",
    "Position",
    "WINNING_LINES",
    "TicTacToeError",
    "InvalidPosition",
    "PositionOccupied",
    "GameOver",
    "Game",
    "Phase",
    "State",
    "minimax_value_and_moves",
    "score_moves",
    "clear_cache",
    "cache_size",
    "iter_all_legal_nonterminal_states",
    "Difficulty",
    "Opponent",
    "best_position",
    "ArenaConfig",
    "BattleScores",
    "play_game",
    "battle",
    "compare_difficulties",
]
