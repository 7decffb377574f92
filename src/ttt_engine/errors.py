"""
Errors raised by the board and the game state machine.

All of them are recoverable by the caller: pick another position, or start
a new game after GameOver.
"""


class TicTacToeError(Exception):
    """Base class for every error raised by ttt_engine."""


class InvalidPosition(TicTacToeError):
    """Row or column outside the board."""

    def __init__(self, position):
        self.position = position
        super().__init__(f"Invalid position {position}. Row and column must be 0-2.")


class PositionOccupied(TicTacToeError):
    """The targeted square already holds a mark."""

    def __init__(self, position, owner):
        self.position = position
        self.owner = owner
        super().__init__(f"Position {position} is already occupied by {owner.name}.")


class GameOver(TicTacToeError):
    """A move was submitted after the game ended."""

    def __init__(self, state):
        self.state = state
        super().__init__(f"The game is already over ({state.phase.name}).")
