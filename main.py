#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--rows R --cols C --mines M]
    python main.py auto [--games N] [--seed S]
"""
import argparse
import logging
import sys
from typing import Optional

import numpy as np

from src.sweeper.board import DEFAULT, BoardConfig, InvalidConfiguration
from src.sweeper.clock import ThreadedClock
from src.sweeper.engine import GameSnapshot, GameState, MinesweeperEngine
from src.sweeper.environment import MinesweeperEnv
from src.sweeper.renderer import TextRenderer

HELP = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"


def build_config(args: argparse.Namespace) -> BoardConfig:
    """Build a board config from the reference board and any overrides."""
    return BoardConfig(
        rows=args.rows if args.rows is not None else DEFAULT.rows,
        cols=args.cols if args.cols is not None else DEFAULT.cols,
        mine_count=args.mines if args.mines is not None else DEFAULT.mine_count,
    )


def parse_move(line: str) -> Optional[tuple]:
    """Parse 'r ROW COL' / 'f ROW COL' into (command, row, col)."""
    parts = line.split()
    if len(parts) != 3 or parts[0] not in ("r", "f"):
        return None
    try:
        return parts[0], int(parts[1]), int(parts[2])
    except ValueError:
        return None


def play(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Play an interactive game in the terminal."""
    try:
        config = build_config(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))

    clock = ThreadedClock(interval=1.0)
    engine = MinesweeperEngine(config, clock=clock)
    renderer = TextRenderer(show_coordinates=True)

    last_state = [engine.state]

    def on_change(snapshot: GameSnapshot) -> None:
        if snapshot.state != last_state[0] and snapshot.state != GameState.PLAYING:
            print(f"\n*** {snapshot.state.name} in {snapshot.elapsed_time}s ***")
        last_state[0] = snapshot.state

    unsubscribe = engine.subscribe(on_change)

    print(f"Board: {config.rows}x{config.cols} with {config.mine_count} mines")
    print(HELP)
    print(renderer.render(engine.snapshot()))

    try:
        for line in sys.stdin:
            line = line.strip().lower()
            if not line:
                continue
            if line == "q":
                break
            if line == "n":
                engine.reset()
            else:
                move = parse_move(line)
                if move is None:
                    print(HELP)
                    continue
                command, row, col = move
                if command == "r":
                    engine.reveal_cell(row, col)
                else:
                    engine.toggle_flag(row, col)
            print(renderer.render(engine.snapshot()))
    finally:
        unsubscribe()
        clock.stop()


def auto(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Let a random player reveal cells and report the win rate."""
    try:
        config = build_config(args)
    except InvalidConfiguration as exc:
        parser.error(str(exc))
    if args.games < 1:
        parser.error("--games must be at least 1")

    env = MinesweeperEnv(config=config, render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    wins = 0

    for game in range(args.games):
        seed = None if args.seed is None else args.seed + game
        obs, info = env.reset(seed=seed)
        done = False

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info["game_state"] == GameState.WON.name:
            wins += 1
        print(
            f"Game {game + 1}/{args.games}: {info['game_state']} | "
            f"Steps: {info['steps']} | "
            f"Revealed: {info['revealed']}/{info['total_safe']}"
        )
        if args.show:
            print(env.render())

    print(f"\n=== Final: {wins}/{args.games} wins ({100 * wins / args.games:.0f}%) ===")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rows", type=int, default=None, help="Board height")
    parser.add_argument("--cols", type=int, default=None, help="Board width")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minesweeper - play in the terminal or watch a random player"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play interactively")
    add_board_arguments(play_parser)

    auto_parser = subparsers.add_parser("auto", help="Watch a random player")
    add_board_arguments(auto_parser)
    auto_parser.add_argument(
        "--games", type=int, default=10, help="Number of games to play"
    )
    auto_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )
    auto_parser.add_argument(
        "--show", action="store_true", help="Print the final board of each game"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command == "play":
        play(args, parser)
    elif args.command == "auto":
        auto(args, parser)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
