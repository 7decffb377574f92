#!/usr/bin/env python3
"""
Compare the AI difficulties, or play against one.

Usage:
    python eval.py                          # Difficulty table (100 games per battle)
    python eval.py --games 500 --csv results.csv --plot results.png
    python eval.py --play --difficulty hard
"""

import sys
import logging
import argparse
import random
from pathlib import Path

from tqdm.auto import tqdm

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from ttt_engine import (
    ArenaConfig,
    Difficulty,
    Game,
    Mark,
    Opponent,
    Phase,
    Position,
    TicTacToeError,
    compare_difficulties,
)


def print_board(game, hints=None):
    """Pretty print board, optionally with the opponent's score per square."""
    board = game.board
    for row in range(3):
        cells = []
        for col in range(3):
            mark = board.get((row, col))
            if mark is not None:
                cells.append(mark.name)
            elif hints is not None and Position(row, col) in hints:
                score = hints[Position(row, col)]
                cells.append("w" if score > 0 else "l" if score < 0 else "c")
            else:
                cells.append(" ")
        print("|".join(cells))
        if row < 2:
            print("-+-+-")


def play_interactive(opponent, show_hints=False):
    """Play a game against the opponent. The human is X."""
    game = Game()

    print("\n=== Interactive Game ===")
    print("You are X (play first)")
    print("Enter moves as 'row col', both 0-2")
    if show_hints:
        print("Hints show how the opponent sees each square: w(in) l(ose) c(ats game)")
    print()

    while True:
        state = game.state
        if state.is_game_over():
            print_board(game)
            if state.phase is Phase.CATS_GAME:
                print("\nCat's game!")
            elif state.winner() is Mark.X:
                print("\nYou win!")
            else:
                print("\nOpponent wins!")
            if state.line:
                print("Winning line: " + ", ".join(str(p) for p in state.line))
            break

        if state.to_move() is Mark.X:
            print_board(game)
            print()
            try:
                row, col = (int(v) for v in input("Your move: ").split())
                game.do_move((row, col))
            except ValueError:
                print("Enter two numbers, e.g. '1 1'")
            except TicTacToeError as e:
                print(e)
            except (EOFError, KeyboardInterrupt):
                print("\nGame aborted")
                return
        else:
            hints = opponent.evaluate_game(game) if show_hints else None
            if hints is not None:
                print_board(game, hints)
            position = opponent.get_move(game)
            print(f"Opponent plays: {position}")
            game.do_move(position)
        print()


def print_table(rows):
    """Print the comparison table."""
    tqdm.write(f"{'Difficulty':10}  {'None':^18}  {'Unbeatable':^18}")
    tqdm.write(f"{'':=<10}  {'':=<18}  {'':=<18}")
    for row in rows:
        tqdm.write(f"{row['difficulty']:10}  {str(row['vs_none']):18}  {str(row['vs_unbeatable']):18}")
    tqdm.write("(X wins - O wins - cat's games; the listed difficulty plays X)")


def rows_to_frame(rows):
    """Flatten the comparison rows into a DataFrame."""
    import pandas as pd

    records = []
    for row in rows:
        for column in ("vs_none", "vs_unbeatable"):
            scores = row[column]
            records.append({
                "difficulty": row["difficulty"],
                "opponent": column[3:],
                "games": scores.total_games,
                "x_win_pct": scores.player_x_win_percent,
                "o_win_pct": scores.player_o_win_percent,
                "cats_pct": scores.cats_game_percent,
            })
    return pd.DataFrame(records)


def create_plot(df, output_path: Path):
    """Bar chart of outcome percentages per difficulty and opponent."""
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(1, 2, figsize=(14, 6), sharey=True)
    for ax, opponent in zip(axes, ("none", "unbeatable")):
        sub = df[df["opponent"] == opponent].set_index("difficulty")
        sub[["x_win_pct", "o_win_pct", "cats_pct"]].plot.bar(ax=ax, stacked=True)
        ax.set_title(f"vs {opponent.capitalize()}", fontsize=14, fontweight='bold')
        ax.set_xlabel('Difficulty (plays X)', fontsize=12)
        ax.set_ylabel('Games (%)', fontsize=12)
        ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def main():
    parser = argparse.ArgumentParser(description="Compare TicTacToe AI difficulties")
    parser.add_argument("--games", type=int, default=100, help="Games per battle")
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument("--custom", type=float, default=None,
                        help="Also compare a custom mistake probability")
    parser.add_argument("--csv", type=str, default=None, help="Write results to CSV")
    parser.add_argument("--plot", type=str, default=None, help="Save bar chart to file")
    parser.add_argument("--play", action="store_true", help="Play interactive game")
    parser.add_argument("--difficulty", type=str, default="unbeatable",
                        choices=[d.value for d in Difficulty if d is not Difficulty.CUSTOM],
                        help="Opponent difficulty for --play")
    parser.add_argument("--hints", action="store_true", help="Show opponent's view during --play")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    # Interactive play
    if args.play:
        opponent = Opponent.from_difficulty(args.difficulty, rng=random.Random(args.seed))
        play_interactive(opponent, show_hints=args.hints)
        return

    config = ArenaConfig(seed=args.seed, games=args.games)
    if args.custom is not None:
        config.difficulties.insert(-1, Difficulty.CUSTOM)
        config.custom_mistake_probability = args.custom

    tqdm.write(f"\n=== AI Difficulties ({args.games} games per battle) ===\n")
    rows = compare_difficulties(config)
    print_table(rows)

    if args.csv or args.plot:
        df = rows_to_frame(rows)
        if args.csv:
            df.to_csv(args.csv, index=False)
            tqdm.write(f"Results written to {args.csv}")
        if args.plot:
            create_plot(df, Path(args.plot))
            tqdm.write(f"Plot saved to {args.plot}")


if __name__ == "__main__":
    main()
