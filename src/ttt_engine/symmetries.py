"""
D4 symmetries of the 3x3 board (8 transforms).

Rotations: 0°, 90°, 180°, 270°
Reflections: horizontal, vertical, main diagonal, anti-diagonal

The solver uses canonical_cells() so that all eight orientations of a
position share one cache entry.
"""

from typing import List, Sequence, Tuple

from .board import BOARD_SIZE, NUM_SQUARES


def _idx(r: int, c: int) -> int:
    """Convert (row, col) to flat index."""
    return r * BOARD_SIZE + c


def _build_symmetry_maps() -> Tuple[Tuple[int, ...], ...]:
    """Build 8 permutation maps for D4 symmetries."""
    last = BOARD_SIZE - 1
    maps = []
    for k in range(8):
        mp = [0] * NUM_SQUARES
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                # Apply transform k
                if k == 0:   rt, ct = r, c                  # identity
                elif k == 1: rt, ct = c, last - r           # rotate 90
                elif k == 2: rt, ct = last - r, last - c    # rotate 180
                elif k == 3: rt, ct = last - c, r           # rotate 270
                elif k == 4: rt, ct = r, last - c           # reflect horizontal
                elif k == 5: rt, ct = last - r, c           # reflect vertical
                elif k == 6: rt, ct = c, r                  # reflect main diag
                else:        rt, ct = last - c, last - r    # reflect anti-diag
                mp[_idx(rt, ct)] = _idx(r, c)
        maps.append(tuple(mp))
    return tuple(maps)


# Pre-computed symmetry maps
SYM_MAPS = _build_symmetry_maps()


def apply_symmetry_board(cells: Sequence[int], sym_id: int) -> Tuple[int, ...]:
    """
    Apply symmetry transform to a flat board.

    Args:
        cells: [9] board values
        sym_id: symmetry ID (0-7)

    Returns:
        Transformed board
    """
    mp = SYM_MAPS[sym_id]
    return tuple(cells[mp[i]] for i in range(NUM_SQUARES))


def get_all_symmetries(cells: Sequence[int]) -> List[Tuple[int, ...]]:
    """Return all 8 symmetric versions of a board."""
    return [apply_symmetry_board(cells, k) for k in range(8)]


def canonical_cells(cells: Sequence[int]) -> Tuple[int, ...]:
    """Smallest of the 8 symmetric versions; equal for symmetric boards."""
    return min(get_all_symmetries(cells))
