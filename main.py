"""Main entry point for the heads-up Hold'em table."""

import argparse

import numpy as np

from config import HoldemConfig as cfg, setup_logging
from game import Game
from game_board import GameBoard
from surfaces import ConsoleDisplay, ConsoleInput


def build_parser():
    parser = argparse.ArgumentParser(description="Play heads-up Texas Hold'em against the bot")
    parser.add_argument("--chips", type=int, default=cfg.STARTING_CHIPS,
                        help=f"Starting chips per seat (default: {cfg.STARTING_CHIPS})")
    parser.add_argument("--small-blind", type=int, default=cfg.SMALL_BLIND,
                        help=f"Small blind (default: {cfg.SMALL_BLIND})")
    parser.add_argument("--big-blind", type=int, default=cfg.BIG_BLIND,
                        help=f"Big blind (default: {cfg.BIG_BLIND})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the dealer coin and shuffles")
    parser.add_argument("--log-level", type=str, default=cfg.LOG_LEVEL,
                        help=f"Diagnostic log level (default: {cfg.LOG_LEVEL})")
    return parser


def main(argv=None):
    """Run the game."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    rng = np.random.default_rng(args.seed)
    try:
        board = GameBoard(args.chips, args.small_blind, args.big_blind, rng=rng)
    except ValueError as e:
        parser.error(str(e))
    game = Game(board, display=ConsoleDisplay(), input_source=ConsoleInput(), rng=rng)

    try:
        game.run()
    except (KeyboardInterrupt, EOFError):
        print("\n\nGame interrupted by user.")

    print("\nFinal chip counts:")
    for player in board.players:
        print(f"  {player.name}: ${player.chips + player.current_bet}")
    print("\nThanks for playing!")


if __name__ == "__main__":
    main()
