"""
Exact depth-weighted minimax solver for TicTacToe with caching.

Scores are from the perspective of the player to move:
  - a move that wins scores WIN_SCORE + empty squares left after it, so
    faster wins score higher
  - a move that fills the board without a winner scores 0
  - any other move scores minus the value of the resulting position for
    the opponent (negamax), so slower losses score higher than faster ones

Boards are flat tuples (see ttt_engine.board). Recursion depth is bounded by
the number of empty squares, which drops by one per level.
"""

from typing import Dict, Iterator, List, Sequence, Set, Tuple

from .board import NUM_SQUARES, WIN_LINES, completed_line
from .symmetries import canonical_cells

WIN_SCORE = 10

# Cache: (canonical board, player) -> value
_MINIMAX_CACHE: Dict[Tuple[Tuple[int, ...], int], int] = {}


def winners_set(cells: Sequence[int]) -> Set[int]:
    """Return set of winners (+1, -1, or both if illegal)."""
    wins = set()
    for a, b, c in WIN_LINES:
        s = cells[a] + cells[b] + cells[c]
        if s == 3:
            wins.add(+1)
        elif s == -3:
            wins.add(-1)
    return wins


def is_terminal(cells: Sequence[int]) -> Tuple[bool, int]:
    """
    Check if board is terminal.

    Returns:
        (is_terminal, winner) where winner is +1/-1/0
    """
    idx = completed_line(cells)
    if idx is not None:
        return True, cells[WIN_LINES[idx][0]]
    if all(v != 0 for v in cells):
        return True, 0
    return False, 0


def legal_moves(cells: Sequence[int]) -> List[int]:
    """Return list of legal move indices (empty squares)."""
    return [i for i, v in enumerate(cells) if v == 0]


def apply_move(cells: Sequence[int], player: int, action: int) -> Tuple[int, ...]:
    """Apply move and return new board."""
    new_cells = list(cells)
    new_cells[action] = player
    return tuple(new_cells)


def _move_score(cells: Sequence[int], player: int, action: int) -> int:
    child = apply_move(cells, player, action)
    empties = child.count(0)
    if completed_line(child) is not None:
        return WIN_SCORE + empties
    if empties == 0:
        return 0
    return -minimax_value(child, -player)


def minimax_value(cells: Sequence[int], player: int) -> int:
    """
    Value of a non-terminal position for the player to move.

    Args:
        cells: Current board, not terminal
        player: Current player (+1 or -1)
    """
    key = (canonical_cells(cells), player)
    cached = _MINIMAX_CACHE.get(key)
    if cached is not None:
        return cached

    value = max(_move_score(cells, player, action) for action in legal_moves(cells))
    _MINIMAX_CACHE[key] = value
    return value


def score_moves(cells: Sequence[int], player: int) -> Dict[int, int]:
    """
    Score every legal move for the player to move.

    Returns:
        {action: score}; empty if the board is terminal.
    """
    done, _ = is_terminal(cells)
    if done:
        return {}
    return {action: _move_score(cells, player, action) for action in legal_moves(cells)}


def minimax_value_and_moves(cells: Sequence[int], player: int) -> Tuple[int, List[int]]:
    """
    Compute minimax value and best moves from current state.

    Solver utility for analysing flat boards directly; Opponent works from
    the full score_moves() map so it can also report every square's score.

    Returns:
        (value, best_moves) where best_moves lists every action achieving
        value. On a terminal board best_moves is empty and value is 0 for a
        draw or minus the winner's score otherwise.
    """
    done, winner = is_terminal(cells)
    if done:
        if winner == 0:
            return 0, []
        v = WIN_SCORE + list(cells).count(0)
        return (v if winner == player else -v), []

    scores = score_moves(cells, player)
    best_v = max(scores.values())
    best_moves = [action for action, v in scores.items() if v == best_v]
    return best_v, best_moves


def clear_cache():
    """Clear minimax cache (useful for memory management)."""
    _MINIMAX_CACHE.clear()


def cache_size() -> int:
    """Return current cache size."""
    return len(_MINIMAX_CACHE)


def is_legal_board(cells: Sequence[int]) -> bool:
    """Check if board respects game rules, with X moving first."""
    x_cnt = sum(1 for v in cells if v == +1)
    o_cnt = sum(1 for v in cells if v == -1)

    # X goes first, so x_cnt == o_cnt or x_cnt == o_cnt + 1
    if not (x_cnt == o_cnt or x_cnt == o_cnt + 1):
        return False

    # Can't have both winners
    if len(winners_set(cells)) >= 2:
        return False

    return True


def iter_all_legal_nonterminal_states() -> Iterator[Tuple[Tuple[int, ...], int]]:
    """
    Iterate over all legal non-terminal board states of an X-first game.

    Yields:
        (cells, player) tuples for exhaustive evaluation.
    """
    for n in range(3 ** NUM_SQUARES):
        # Decode base-3 representation
        x = n
        digits = [0] * NUM_SQUARES
        for i in range(NUM_SQUARES):
            digits[i] = x % 3
            x //= 3

        cells = tuple(+1 if d == 1 else -1 if d == 2 else 0 for d in digits)

        if not is_legal_board(cells):
            continue

        done, _ = is_terminal(cells)
        if done:
            continue

        # Side to move
        x_cnt = cells.count(+1)
        o_cnt = cells.count(-1)
        player = +1 if x_cnt == o_cnt else -1
        yield cells, player
