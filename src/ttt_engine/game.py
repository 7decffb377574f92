"""
TicTacToe game rules and state management.

Game owns the Board and is the only thing that writes to it. The State is
recomputed from the board after every successful move.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .board import Board, Mark, Position, PositionLike, WinningLine, completed_line
from .errors import GameOver, InvalidPosition


class Phase(Enum):
    """Which of the five game states holds."""
    PLAYER_X_MOVE = "player_x_move"
    PLAYER_O_MOVE = "player_o_move"
    PLAYER_X_WIN = "player_x_win"
    PLAYER_O_WIN = "player_o_win"
    CATS_GAME = "cats_game"


_MOVE_PHASES = {Mark.X: Phase.PLAYER_X_MOVE, Mark.O: Phase.PLAYER_O_MOVE}
_WIN_PHASES = {Mark.X: Phase.PLAYER_X_WIN, Mark.O: Phase.PLAYER_O_WIN}


@dataclass(frozen=True)
class State:
    """
    Current game state.

    The two win phases carry the winning line; every other phase has
    line=None.
    """
    phase: Phase
    line: Optional[WinningLine] = None

    @classmethod
    def turn(cls, mark: Mark) -> "State":
        return cls(_MOVE_PHASES[mark])

    @classmethod
    def win(cls, mark: Mark, line: WinningLine) -> "State":
        return cls(_WIN_PHASES[mark], line)

    @classmethod
    def cats_game(cls) -> "State":
        return cls(Phase.CATS_GAME)

    def is_game_over(self) -> bool:
        return self.phase in (Phase.PLAYER_X_WIN, Phase.PLAYER_O_WIN, Phase.CATS_GAME)

    def to_move(self) -> Optional[Mark]:
        """The mark whose turn it is, or None once the game is over."""
        if self.phase is Phase.PLAYER_X_MOVE:
            return Mark.X
        if self.phase is Phase.PLAYER_O_MOVE:
            return Mark.O
        return None

    def winner(self) -> Optional[Mark]:
        if self.phase is Phase.PLAYER_X_WIN:
            return Mark.X
        if self.phase is Phase.PLAYER_O_WIN:
            return Mark.O
        return None


def evaluate_board(board: Board, last_mover: Mark) -> State:
    """
    Compute the state after last_mover has marked a square.

    The first complete line in WINNING_LINES order wins; otherwise a full
    board is a cat's game; otherwise it is the other player's turn.
    """
    idx = completed_line(board.cells())
    if idx is not None:
        line = board.winning_lines()[idx]
        return State.win(board.get(line[0]), line)
    if board.is_full():
        return State.cats_game()
    return State.turn(last_mover.opponent())


class Game:
    """
    The authoritative TicTacToe state machine.

    Not thread safe: callers sharing one Game must serialize do_move.
    """

    def __init__(self):
        self._board = Board()
        self._first_player = Mark.X
        self._state = State.turn(self._first_player)

    @property
    def state(self) -> State:
        return self._state

    @property
    def board(self) -> Board:
        """A copy of the board; changing it does not affect the game."""
        return self._board.copy()

    def do_move(self, position: PositionLike) -> State:
        """
        Mark a square for the player whose turn it is.

        Args:
            position: Position or (row, column), both 0-2.

        Returns:
            The new state.

        Raises:
            GameOver: the game has already been won or drawn.
            InvalidPosition: row or column outside 0-2.
            PositionOccupied: the square already has an owner.

        A failed move leaves the game unchanged.
        """
        mover = self._state.to_move()
        if mover is None:
            raise GameOver(self._state)

        # Board.set validates before writing, so a failure changes nothing
        self._board.set(position, mover)
        self._state = evaluate_board(self._board, mover)
        return self._state

    def can_move(self, position: PositionLike) -> bool:
        """True if do_move(position) would succeed."""
        if self._state.is_game_over():
            return False
        try:
            return self._board.get(position) is None
        except InvalidPosition:
            return False

    def free_positions(self) -> List[Position]:
        """Squares the current player may mark; empty once the game is over."""
        if self._state.is_game_over():
            return []
        return self._board.free_positions()

    def start_next_game(self) -> State:
        """
        Clear the board and start another round.

        The player who did not move first last round moves first in this
        one, so a series of rounds alternates the opening move.
        """
        self._first_player = self._first_player.opponent()
        self._board = Board()
        self._state = State.turn(self._first_player)
        return self._state

    def copy(self) -> "Game":
        new_game = Game()
        new_game._board = self._board.copy()
        new_game._first_player = self._first_player
        new_game._state = self._state
        return new_game

    def __str__(self) -> str:
        return str(self._board)
