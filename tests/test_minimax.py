import unittest

from ttt_engine import minimax
from ttt_engine.minimax import (
    WIN_SCORE,
    is_terminal,
    iter_all_legal_nonterminal_states,
    minimax_value,
    minimax_value_and_moves,
    score_moves,
)
from ttt_engine.symmetries import SYM_MAPS, apply_symmetry_board, canonical_cells, get_all_symmetries

EMPTY = (0,) * 9


class TestSymmetries(unittest.TestCase):
    def test_maps_are_permutations(self) -> None:
        self.assertEqual(len(SYM_MAPS), 8)
        self.assertEqual(len(set(SYM_MAPS)), 8)
        for mp in SYM_MAPS:
            self.assertEqual(sorted(mp), list(range(9)))

    def test_identity(self) -> None:
        cells = (1, -1, 0, 0, 1, 0, 0, 0, -1)
        self.assertEqual(apply_symmetry_board(cells, 0), cells)

    def test_corners_share_canonical_form(self) -> None:
        corners = [(1, 0, 0, 0, 0, 0, 0, 0, 0), (0, 0, 1, 0, 0, 0, 0, 0, 0),
                   (0, 0, 0, 0, 0, 0, 1, 0, 0), (0, 0, 0, 0, 0, 0, 0, 0, 1)]
        self.assertEqual(len({canonical_cells(c) for c in corners}), 1)
        self.assertNotEqual(canonical_cells(corners[0]), canonical_cells((0, 0, 0, 0, 1, 0, 0, 0, 0)))

    def test_center_is_fixed(self) -> None:
        center = (0, 0, 0, 0, 1, 0, 0, 0, 0)
        self.assertEqual(set(get_all_symmetries(center)), {center})


class TestTerminal(unittest.TestCase):
    def test_empty_board_not_terminal(self) -> None:
        self.assertEqual(is_terminal(EMPTY), (False, 0))

    def test_win_and_draw(self) -> None:
        self.assertEqual(is_terminal((-1, -1, -1, 1, 1, 0, 1, 0, 0)), (True, -1))
        self.assertEqual(is_terminal((1, -1, 1, 1, -1, -1, -1, 1, 1)), (True, 0))


class TestMinimax(unittest.TestCase):
    def setUp(self) -> None:
        minimax.clear_cache()

    def test_empty_board_is_a_draw(self) -> None:
        value, best = minimax_value_and_moves(EMPTY, +1)
        self.assertEqual(value, 0)
        self.assertEqual(sorted(best), list(range(9)))

    def test_immediate_win_scores_highest(self) -> None:
        # X: 0, 2, 6   O: 1, 4, 8   X to move; 3 wins, 5 loses, 7 draws
        cells = (1, -1, 1, 0, -1, 0, 1, 0, -1)
        scores = score_moves(cells, +1)
        self.assertEqual(set(scores), {3, 5, 7})
        self.assertEqual(scores[3], WIN_SCORE + 2)
        self.assertEqual(scores[7], 0)
        self.assertEqual(scores[5], -(WIN_SCORE + 1))

    def test_faster_win_beats_slower_win(self) -> None:
        # X: 0, 3   O: 4, 8   X to move. 6 wins now; 2 forks rows 0 and
        # column 0 and wins two plies later.
        cells = (1, 0, 0, 1, -1, 0, 0, 0, -1)
        scores = score_moves(cells, +1)
        self.assertEqual(scores[6], WIN_SCORE + 4)
        self.assertEqual(scores[2], WIN_SCORE + 2)
        value, best = minimax_value_and_moves(cells, +1)
        self.assertEqual(value, WIN_SCORE + 4)
        self.assertEqual(best, [6])

    def test_slower_loss_beats_faster_loss(self) -> None:
        # X: 0, 4   O: 1   O to move. Not blocking 8 loses at once; blocking
        # it still loses to a fork, but later.
        cells = (1, -1, 0, 0, 1, 0, 0, 0, 0)
        scores = score_moves(cells, -1)
        self.assertEqual(scores.pop(8), -(WIN_SCORE + 2))
        for action, score in scores.items():
            with self.subTest(action=action):
                self.assertEqual(score, -(WIN_SCORE + 4))
        self.assertEqual(minimax_value_and_moves(cells, -1), (-(WIN_SCORE + 2), [8]))

    def test_terminal_board_has_no_moves(self) -> None:
        self.assertEqual(score_moves((1, 1, 1, -1, -1, 0, 0, 0, 0), -1), {})
        value, best = minimax_value_and_moves((1, 1, 1, -1, -1, 0, 0, 0, 0), -1)
        self.assertEqual(best, [])
        self.assertLess(value, 0)

    def test_cache_is_filled_and_cleared(self) -> None:
        self.assertEqual(minimax.cache_size(), 0)
        minimax_value(EMPTY, +1)
        self.assertGreater(minimax.cache_size(), 0)
        # Symmetric boards hit the same entry
        size = minimax.cache_size()
        minimax_value((0, 0, 0, 0, 0, 0, 0, 0, 1), -1)
        minimax_value((1, 0, 0, 0, 0, 0, 0, 0, 0), -1)
        self.assertEqual(minimax.cache_size(), size)
        minimax.clear_cache()
        self.assertEqual(minimax.cache_size(), 0)

    def test_value_is_symmetric(self) -> None:
        cells = (1, 0, 0, 0, -1, 0, 0, 0, 0)
        for k in range(8):
            with self.subTest(sym=k):
                self.assertEqual(
                    minimax_value(apply_symmetry_board(cells, k), +1),
                    minimax_value(cells, +1),
                )


class TestStateEnumeration(unittest.TestCase):
    def test_known_state_count(self) -> None:
        # 5478 legal positions, 958 of them terminal
        states = list(iter_all_legal_nonterminal_states())
        self.assertEqual(len(states), 5478 - 958)

    def test_states_are_non_terminal_with_correct_mover(self) -> None:
        for cells, player in iter_all_legal_nonterminal_states():
            self.assertFalse(is_terminal(cells)[0])
            expected = +1 if cells.count(1) == cells.count(-1) else -1
            self.assertEqual(player, expected)


if __name__ == "__main__":
    unittest.main()
