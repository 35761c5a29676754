"""Play many hands between the bot and a random stand-in for the human."""

import argparse
from collections import Counter

import numpy as np
from loguru import logger
from tqdm import tqdm

from actions import InvalidInputError
from betting_round import BettingRound, RoundState
from config import HoldemConfig as cfg, setup_logging
from game import Game
from game_board import GameBoard


def random_line(betting_round: BettingRound, rng: np.random.Generator, fold_prob: float = 0.1) -> str:
    """Pick a line of input answering whatever the round is asking."""
    if betting_round.state == RoundState.AWAITING_CHOICE:
        keys = [o.key for o in betting_round.options]
        rest = (1.0 - fold_prob) / (len(keys) - 1)
        weights = [fold_prob] + [rest] * (len(keys) - 1)
        return keys[rng.choice(len(keys), p=weights)]

    # a few betting units, sometimes off the unit boundary
    min_bet = betting_round.min_bet
    chips = betting_round.user.chips
    units = int(rng.integers(1, min(chips // min_bet, 3) + 1))
    amount = min(chips, units * min_bet + int(rng.integers(min_bet)))
    return str(amount)


def new_game(rng, starting_chips, small_blind, big_blind) -> Game:
    board = GameBoard(starting_chips, small_blind, big_blind, rng=rng)
    return Game(board, rng=rng)


def simulate(num_hands: int, seed: int = None, starting_chips: int = cfg.STARTING_CHIPS,
             small_blind: int = cfg.SMALL_BLIND, big_blind: int = cfg.BIG_BLIND,
             fold_prob: float = 0.1, show_progress: bool = True) -> dict:
    """
    Play hands until num_hands have been dealt, starting a fresh session
    whenever a seat goes broke.

    Returns:
        Dictionary of outcome counts and exchange statistics

    Raises:
        AssertionError: if chips are created or lost in a hand
        RuntimeError: if a betting round doesn't finish
    """
    rng = np.random.default_rng(seed)
    game = new_game(rng, starting_chips, small_blind, big_blind)
    sessions = 1
    outcomes = Counter()
    winners = Counter()
    exchanges = []

    for hand_num in tqdm(range(num_hands), desc="Simulating", disable=not show_progress):
        if not game.can_continue():
            game = new_game(rng, starting_chips, small_blind, big_blind)
            sessions += 1

        total_before = game.board.total_chips
        betting_round = game.start_hand()

        inputs = 0
        while not betting_round.finished:
            if inputs >= cfg.MAX_ROUND_INPUTS:
                raise RuntimeError(f"Hand {hand_num + 1}: betting round still open after {inputs} inputs")
            try:
                betting_round.submit(random_line(betting_round, rng, fold_prob))
            except InvalidInputError as e:
                game.log.add(str(e))
            inputs += 1

        outcomes[betting_round.outcome.value] += 1
        exchanges.append(betting_round.exchanges)
        winner = game.finish_hand()
        winners[winner.value if winner else "none"] += 1

        total_after = game.board.total_chips
        assert total_after == total_before, \
            f"Hand {hand_num + 1}: chip total changed from {total_before} to {total_after}"
        logger.debug("hand {}: {} in {} exchange(s)", hand_num + 1,
                     betting_round.outcome.value, betting_round.exchanges)

    return {
        'hands': num_hands,
        'sessions': sessions,
        'outcomes': dict(outcomes),
        'winners': dict(winners),
        'mean_exchanges': float(np.mean(exchanges)) if exchanges else 0.0,
        'max_exchanges': int(np.max(exchanges)) if exchanges else 0,
    }


def print_results(results: dict):
    print("\n" + "=" * 60)
    print("SIMULATION RESULTS")
    print("=" * 60)
    print(f"Hands played: {results['hands']} over {results['sessions']} session(s)")
    print("\nRound outcomes:")
    for outcome, count in sorted(results['outcomes'].items()):
        print(f"  {outcome}: {count} ({100 * count / results['hands']:.1f}%)")
    print("\nPot winners:")
    for winner, count in sorted(results['winners'].items()):
        print(f"  {winner}: {count} ({100 * count / results['hands']:.1f}%)")
    print(f"\nAverage exchanges per round: {results['mean_exchanges']:.2f} (max {results['max_exchanges']})")
    print("Chip totals were conserved in every hand.")
    print("=" * 60)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Simulate hands against the bot")
    parser.add_argument("--hands", type=int, default=cfg.SIMULATION_HANDS,
                        help=f"Number of hands to play (default: {cfg.SIMULATION_HANDS})")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--chips", type=int, default=cfg.STARTING_CHIPS,
                        help=f"Starting chips per seat (default: {cfg.STARTING_CHIPS})")
    parser.add_argument("--small-blind", type=int, default=cfg.SMALL_BLIND,
                        help=f"Small blind (default: {cfg.SMALL_BLIND})")
    parser.add_argument("--big-blind", type=int, default=cfg.BIG_BLIND,
                        help=f"Big blind (default: {cfg.BIG_BLIND})")
    parser.add_argument("--fold-prob", type=float, default=0.1,
                        help="Chance the stand-in folds when asked to act (default: 0.1)")
    parser.add_argument("--log-level", type=str, default=cfg.LOG_LEVEL,
                        help=f"Diagnostic log level (default: {cfg.LOG_LEVEL})")
    args = parser.parse_args()

    setup_logging(args.log_level)
    results = simulate(args.hands, args.seed, args.chips, args.small_blind, args.big_blind,
                       args.fold_prob)
    print_results(results)
