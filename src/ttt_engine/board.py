"""
TicTacToe board: positions, marks, and winning lines.

Flat representation used by the solver: tuple[int] of length 9, row-major
  - 0: empty
  - +1: X
  - -1: O
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import InvalidPosition, PositionOccupied

BOARD_SIZE = 3
NUM_SQUARES = BOARD_SIZE * BOARD_SIZE


class Mark(Enum):
    """A player's symbol."""
    X = +1
    O = -1

    def opponent(self) -> "Mark":
        """Get the other player's mark."""
        return Mark.O if self is Mark.X else Mark.X


@dataclass(frozen=True)
class Position:
    """A square on the board, zero-based."""
    row: int
    column: int

    @classmethod
    def coerce(cls, value: Union["Position", Tuple[int, int]]) -> "Position":
        """Accept either a Position or a (row, column) tuple."""
        if isinstance(value, Position):
            return value
        row, column = value
        return cls(row, column)

    def in_bounds(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.column < BOARD_SIZE

    @property
    def index(self) -> int:
        """Flat row-major index (0-8)."""
        return self.row * BOARD_SIZE + self.column

    @classmethod
    def from_index(cls, index: int) -> "Position":
        return cls(index // BOARD_SIZE, index % BOARD_SIZE)

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"


PositionLike = Union[Position, Tuple[int, int]]
WinningLine = Tuple[Position, Position, Position]

ALL_POSITIONS: Tuple[Position, ...] = tuple(Position.from_index(i) for i in range(NUM_SQUARES))

# Winning lines (rows, columns, diagonals)
WINNING_LINES: Tuple[WinningLine, ...] = (
    (Position(0, 0), Position(0, 1), Position(0, 2)),  # rows
    (Position(1, 0), Position(1, 1), Position(1, 2)),
    (Position(2, 0), Position(2, 1), Position(2, 2)),
    (Position(0, 0), Position(1, 0), Position(2, 0)),  # columns
    (Position(0, 1), Position(1, 1), Position(2, 1)),
    (Position(0, 2), Position(1, 2), Position(2, 2)),
    (Position(0, 0), Position(1, 1), Position(2, 2)),  # diagonals
    (Position(0, 2), Position(1, 1), Position(2, 0)),
)

# Same lines as flat indices, for the solver
WIN_LINES: Tuple[Tuple[int, int, int], ...] = tuple(
    tuple(p.index for p in line) for line in WINNING_LINES
)


def completed_line(cells: Sequence[int]) -> Optional[int]:
    """
    Find the first line owned entirely by one player.

    Args:
        cells: Flat board (see module docstring).

    Returns:
        Index into WINNING_LINES, or None if no line is complete.
    """
    for i, (a, b, c) in enumerate(WIN_LINES):
        s = cells[a] + cells[b] + cells[c]
        if s == 3 or s == -3:
            return i
    return None


class Board:
    """
    The 3x3 grid of square owners.

    set() is the only mutator; squares are never cleared.
    """

    def __init__(self):
        self._squares: Dict[Position, Optional[Mark]] = {p: None for p in ALL_POSITIONS}

    @staticmethod
    def _validate(position: PositionLike) -> Position:
        try:
            position = Position.coerce(position)
            # Only whole-number coordinates name a square
            valid = (isinstance(position.row, int) and isinstance(position.column, int)
                     and position.in_bounds())
        except (TypeError, ValueError):
            raise InvalidPosition(position) from None
        if not valid:
            raise InvalidPosition(position)
        return position

    def get(self, position: PositionLike) -> Optional[Mark]:
        """
        Get the owner of a square.

        Raises:
            InvalidPosition: row or column outside 0-2.
        """
        return self._squares[self._validate(position)]

    def set(self, position: PositionLike, mark: Mark) -> None:
        """
        Mark a free square.

        Raises:
            InvalidPosition: row or column outside 0-2.
            PositionOccupied: the square already has an owner.
        """
        position = self._validate(position)
        owner = self._squares[position]
        if owner is not None:
            raise PositionOccupied(position, owner)
        self._squares[position] = mark

    def occupied_count(self) -> int:
        return sum(1 for mark in self._squares.values() if mark is not None)

    def is_full(self) -> bool:
        return self.occupied_count() == NUM_SQUARES

    def free_positions(self) -> List[Position]:
        """Empty squares in row-major order."""
        return [p for p in ALL_POSITIONS if self._squares[p] is None]

    @staticmethod
    def winning_lines() -> Tuple[WinningLine, ...]:
        return WINNING_LINES

    def cells(self) -> Tuple[int, ...]:
        """Flat row-major encoding of the board."""
        return tuple(0 if self._squares[p] is None else self._squares[p].value for p in ALL_POSITIONS)

    def copy(self) -> "Board":
        new_board = Board()
        new_board._squares = dict(self._squares)
        return new_board

    def __iter__(self) -> Iterator[Tuple[Position, Optional[Mark]]]:
        for p in ALL_POSITIONS:
            yield p, self._squares[p]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        return f"Board({self.cells()})"

    def __str__(self) -> str:
        lines = []
        for row in range(BOARD_SIZE):
            marks = [self._squares[Position(row, col)] for col in range(BOARD_SIZE)]
            lines.append("|".join(" " if m is None else m.name for m in marks))
        return "\n-+-+-\n".join(lines)
