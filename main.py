#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage (after `pip install -e .`):
    python main.py simulate [--games N] [--preset NAME] [--seed S]
    python main.py simulate --width W --height H --mines M
"""
import argparse
import logging
import sys

import numpy as np

from minefield import GameConfig, InvalidConfigurationError, PRESETS
from minefield.environment import MinesweeperEnv


def build_config(args: argparse.Namespace) -> GameConfig:
    """Resolve the board configuration from command-line arguments."""
    custom = (args.width, args.height, args.mines)
    if any(value is not None for value in custom):
        preset = PRESETS[args.preset]
        return GameConfig(
            width=args.width if args.width is not None else preset.width,
            height=args.height if args.height is not None else preset.height,
            mine_count=args.mines if args.mines is not None else preset.mine_count,
        )
    return PRESETS[args.preset]


def simulate(args: argparse.Namespace) -> None:
    """Play games with uniformly random legal actions."""
    config = build_config(args)
    env = MinesweeperEnv(config=config, max_steps=args.max_steps)
    env.action_space.seed(args.seed)

    print(
        f"Simulating {args.games} games on {config.width}x{config.height} "
        f"with {config.mine_count} mines..."
    )

    wins = losses = 0
    total_steps = 0
    total_revealed = 0

    for game in range(args.games):
        env.reset(seed=args.seed if game == 0 else None)
        done = False
        info = {}

        while not done:
            mask = env.get_action_mask().astype(np.int8)
            action = env.action_space.sample(mask=mask)
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        total_steps += info["steps"]
        total_revealed += info["revealed"]
        if info["game_state"] == "WON":
            wins += 1
        elif info["game_state"] == "LOST":
            losses += 1

    unfinished = args.games - wins - losses
    print(f"Results over {args.games} games:")
    print(f"  Wins: {wins} ({wins / args.games:.1%})")
    print(f"  Losses: {losses}")
    print(f"  Unfinished: {unfinished}")
    print(f"  Avg steps: {total_steps / args.games:.1f}")
    print(f"  Avg revealed: {total_revealed / args.games:.1f} cells")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Grid deduction game core"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log game events"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games through the environment"
    )
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    simulate_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="beginner",
        help="Difficulty preset",
    )
    simulate_parser.add_argument("--width", type=int, help="Custom width")
    simulate_parser.add_argument("--height", type=int, help="Custom height")
    simulate_parser.add_argument("--mines", type=int, help="Custom mine count")
    simulate_parser.add_argument(
        "--max-steps", type=int, default=1000, help="Steps before giving up"
    )
    simulate_parser.add_argument(
        "--seed", type=int, default=None, help="Random seed"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if args.command == "simulate":
        try:
            simulate(args)
        except InvalidConfigurationError as exc:
            print(f"Invalid configuration: {exc}")
            sys.exit(2)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
