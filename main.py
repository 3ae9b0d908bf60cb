#!/usr/bin/env python3
"""
Minesweeper - terminal front end.

Usage:
    python main.py play [--level {easy,medium,hard}] [--seed N]
    python main.py demo [--level {easy,medium,hard}] [--games N] [--delay S]
"""
import argparse
import asyncio
import logging
import random
import time
from typing import Optional, Tuple

import numpy as np

from minesweeper import Game, GamePhase, Level, MinesweeperEnv, Session

HELP_TEXT = """Commands:
  c ROW COL     click a cell
  f ROW COL     toggle a flag
  level NAME    switch level (before the first click)
  reset         start over
  quit          leave"""


def render_session(session: Session) -> str:
    """Board plus status line."""
    return (
        f"{session.board.render()}\n"
        f"Bombs: {session.bombs_remaining}  "
        f"Timer: {session.elapsed_seconds}  "
        f"Level: {session.level.value}  "
        f"[{session.phase.name}]"
    )


def parse_command(line: str) -> Tuple[str, Optional[Tuple]]:
    """
    Parse one line of player input.

    Returns:
        (command, arguments) where command is one of click, flag, level,
        reset, quit, help or invalid.
    """
    parts = line.split()
    if not parts:
        return "help", None
    name, args = parts[0].lower(), parts[1:]

    if name in ("c", "click", "f", "flag") and len(args) == 2:
        try:
            position = (int(args[0]), int(args[1]))
        except ValueError:
            return "invalid", None
        return ("flag" if name.startswith("f") else "click"), position
    if name == "level" and len(args) == 1:
        try:
            return "level", (Level(args[0].lower()),)
        except ValueError:
            return "invalid", None
    if name in ("reset", "quit", "help") and not args:
        return name, None
    return "invalid", None


def handle_command(game: Game, command: str, args: Optional[Tuple]) -> str:
    """Apply a parsed command to the game and return feedback."""
    if command in ("click", "flag"):
        row, col = args
        if not game.board.is_valid_position(row, col):
            return f"({row}, {col}) is off the board"
        before = game.phase
        if command == "click":
            game.click(row, col)
        else:
            game.toggle_flag(row, col)
        if before is not game.phase and game.phase is GamePhase.LOST:
            return "Oops! You clicked a bomb! Game over"
        if before is not game.phase and game.phase is GamePhase.WON:
            return "CONGRATS YOU WIN"
        return ""
    if command == "level":
        (level,) = args
        if game.select_level(level).level is not level:
            return "Level can only change before the first click"
        return ""
    if command == "reset":
        game.reset()
        return ""
    if command == "help":
        return HELP_TEXT
    return "Unrecognized command, type help"


async def play_async(level: Level, seed: Optional[int]) -> None:
    """Interactive game; the clock keeps ticking while waiting for input."""
    loop = asyncio.get_running_loop()
    game = Game(level, scheduler=loop, rng=random.Random(seed))

    print(HELP_TEXT)
    while True:
        print()
        print(render_session(game.session))
        line = await loop.run_in_executor(None, input, "> ")
        command, args = parse_command(line)
        if command == "quit":
            break
        message = handle_command(game, command, args)
        if message:
            print(message)

    game.clock.stop()


def play(args: argparse.Namespace) -> None:
    """Play in the terminal."""
    try:
        asyncio.run(play_async(Level(args.level), args.seed))
    except (EOFError, KeyboardInterrupt):
        print()


def demo(args: argparse.Namespace) -> None:
    """Watch random legal moves play out."""
    env = MinesweeperEnv(level=Level(args.level), render_mode="ansi")
    rng = np.random.default_rng(args.seed)
    wins = 0

    for game in range(args.games):
        env.reset(seed=None if args.seed is None else args.seed + game)
        done = False
        step = 0
        info = {}

        while not done:
            valid_indices = np.where(env.get_action_mask())[0]
            action = int(rng.choice(valid_indices))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1
            if args.delay:
                print(f"=== Game {game + 1}/{args.games} | Step {step} ===")
                print(env.render())
                time.sleep(args.delay)

        if info.get("game_state") == "WON":
            wins += 1
        print(f"Game {game + 1}: {info.get('game_state')} after {step} moves")

    print(f"\n=== Final: {wins}/{args.games} wins ===")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper")
    parser.add_argument(
        "--verbose", action="store_true", help="Log engine debug output"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    levels = [level.value for level in Level]

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--level", choices=levels, default=Level.MEDIUM.value,
        help="Difficulty level",
    )
    play_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for bomb placement"
    )

    demo_parser = subparsers.add_parser(
        "demo", help="Play random legal moves"
    )
    demo_parser.add_argument(
        "--level", choices=levels, default=Level.EASY.value,
        help="Difficulty level",
    )
    demo_parser.add_argument(
        "--games", type=int, default=5, help="Number of games"
    )
    demo_parser.add_argument(
        "--delay", type=float, default=0.0, help="Delay between moves"
    )
    demo_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for layouts and moves"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "demo":
        demo(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
