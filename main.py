#!/usr/bin/env python3
"""
Terminal Minesweeper - Main entry point.

Usage:
    python main.py play [--rows R] [--cols C] [--mines M] [--seed S]
    python main.py auto [--games N] [--seed S]
"""
import argparse
import logging
import sys
import time

import numpy as np

from src.sweeper.field import DEFAULT_CONFIG, FieldConfig, InvalidConfigError
from src.sweeper.environment import MinesweeperEnv
from src.sweeper.terminal import TerminalError, play as play_terminal


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def make_config(args: argparse.Namespace) -> FieldConfig:
    """Build a field configuration from command line arguments."""
    return FieldConfig(rows=args.rows, cols=args.cols, num_mines=args.mines)


def make_rng(seed: int) -> np.random.Generator:
    """Seeded generator, or OS entropy when seed is negative."""
    return np.random.default_rng(None if seed < 0 else seed)


def play(args: argparse.Namespace) -> int:
    """Play a game in the terminal."""
    config = make_config(args)
    game = play_terminal(config, rng=make_rng(args.seed))
    print(game.status_line())
    return 0


def auto(args: argparse.Namespace) -> int:
    """Play random games through the Gymnasium environment."""
    config = make_config(args)
    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = make_rng(args.seed)
    cells = config.total_cells

    wins = 0
    opened = 0
    start_time = time.time()

    for game in range(args.games):
        seed = None if args.seed < 0 else args.seed + game
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            open_actions = np.where(env.get_action_mask()[:cells])[0]
            action = int(rng.choice(open_actions))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WIN":
            wins += 1
        opened += info.get("opened", 0)

        if args.show:
            print(f"=== Game {game + 1}/{args.games} ===")
            print(env.render())
            print()

    elapsed = time.time() - start_time
    print(f"Results over {args.games} random games:")
    print(f"  Win rate: {wins / args.games:.1%}")
    print(f"  Avg opened: {opened / args.games:.1f} cells")
    print(f"  Speed: {args.games / max(elapsed, 1e-9):.1f} games/s")
    return 0


def configure_logging(args: argparse.Namespace) -> None:
    """Log to a file when requested; the terminal belongs to the game."""
    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=getattr(logging, args.log_level),
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


def add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--rows", type=int, default=DEFAULT_CONFIG.rows, help="Number of rows"
    )
    parser.add_argument(
        "--cols", type=int, default=DEFAULT_CONFIG.cols, help="Number of columns"
    )
    parser.add_argument(
        "--mines", type=int, default=DEFAULT_CONFIG.num_mines, help="Number of mines"
    )
    parser.add_argument(
        "--seed", type=int, default=-1, help="RNG seed; <0 uses OS entropy"
    )


def main() -> int:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Terminal Minesweeper")
    parser.add_argument("--log-file", default=None, help="Write logs to this file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level for --log-file",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_field_arguments(play_parser)

    # Auto command
    auto_parser = subparsers.add_parser("auto", help="Play random games")
    add_field_arguments(auto_parser)
    auto_parser.add_argument(
        "--games", type=positive_int, default=100, help="Number of games to play"
    )
    auto_parser.add_argument(
        "--show", action="store_true", help="Print each finished board"
    )

    # Without a command, play with the default field
    parser.set_defaults(
        command="play",
        rows=DEFAULT_CONFIG.rows,
        cols=DEFAULT_CONFIG.cols,
        mines=DEFAULT_CONFIG.num_mines,
        seed=-1,
    )

    args = parser.parse_args()
    configure_logging(args)

    try:
        if args.command == "auto":
            return auto(args)
        return play(args)
    except (InvalidConfigError, TerminalError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
