#!/usr/bin/env python3
"""
tetrabot: a heuristic Tetris placement bot.
Main entry point and command-line interface.
"""

import argparse
import logging
import sys
import time

from .ai.bot import Bot
from .ai.weights import Weights, load_weights
from .core.game import Game
from .exceptions import InvalidWeightsException


def _build_bot(args) -> Bot:
    weights = load_weights(args.weights) if args.weights else Weights()
    game = Game(width=args.width, height=args.height, seed=args.seed)
    return Bot(game, weights)


def demo_game(args):
    """Let the bot play a game and show the board as it goes."""
    print("🧠 tetrabot demo")
    print("=" * 50)

    bot = _build_bot(args)
    start_time = time.time()

    moves = 0
    while moves < args.moves and bot.make_move():
        moves += 1
        if args.show_every and moves % args.show_every == 0:
            print(f"\nMove {moves}")
            print(bot)
            print("-" * 30)

    duration = time.time() - start_time
    game = bot.get_game()

    print("\n" + "=" * 50)
    print("🎮 GAME OVER" if game.game_over else "🏁 MOVE LIMIT REACHED")
    print("=" * 50)
    print(bot)
    print(f"Pieces placed: {game.pieces_placed}")
    print(f"Lines cleared: {game.lines_cleared_total}")
    print(f"Duration: {duration:.2f} seconds")
    if duration > 0:
        print(f"Pieces per second: {game.pieces_placed / duration:.1f}")


def benchmark(args):
    """Time decisions on a fresh game."""
    print("🧠 tetrabot decision benchmark")
    print("=" * 50)

    bot = _build_bot(args)
    start_time = time.time()
    for _ in range(args.decisions):
        bot.get_next_move()
    elapsed = time.time() - start_time

    print(f"{args.decisions} decisions in {elapsed:.3f}s "
          f"({args.decisions / max(elapsed, 1e-9):.1f} decisions/s)")


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="tetrabot: a heuristic Tetris placement bot")
    parser.add_argument('--verbose', '-v', action='store_true', help='Log every decision')
    parser.add_argument('--seed', type=int, default=None, help='Piece sequence seed')
    parser.add_argument('--weights', default=None, help='JSON weight configuration')
    parser.add_argument('--width', type=int, default=10, help='Board width')
    parser.add_argument('--height', type=int, default=20, help='Visible board height')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    demo_parser = subparsers.add_parser('demo', help='Let the bot play a game')
    demo_parser.add_argument('--moves', type=int, default=200, help='Maximum pieces to place')
    demo_parser.add_argument('--show-every', type=int, default=0, help='Print the board every N moves')

    benchmark_parser = subparsers.add_parser('benchmark', help='Time bot decisions')
    benchmark_parser.add_argument('--decisions', type=int, default=100, help='Number of decisions')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(name)s %(message)s")

    try:
        if args.command == 'demo':
            demo_game(args)
        elif args.command == 'benchmark':
            benchmark(args)
        else:
            parser.print_help()
            print("\nFor a quick demo, run: tetrabot demo")
    except (OSError, InvalidWeightsException) as e:
        print(f"✗ Failed to load weights: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
