"""Shared helpers for building games in tests."""

from ttt_engine import Game, Position


def create_game(owned_positions):
    """Create a game where the given (row, col) squares are marked in order."""
    game = Game()
    for position in owned_positions:
        game.do_move(position)
    return game


def game_from_cells(cells):
    """
    Replay a flat X-first board into a Game.

    Only valid for boards without a completed line, so replaying X and O
    squares alternately never ends the game early.
    """
    xs = [Position.from_index(i) for i, v in enumerate(cells) if v == +1]
    os_ = [Position.from_index(i) for i, v in enumerate(cells) if v == -1]
    moves = []
    for i, x in enumerate(xs):
        moves.append(x)
        if i < len(os_):
            moves.append(os_[i])
    return create_game(moves)
