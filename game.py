"""Heads-up game session: hand setup, betting and settling."""

from typing import Optional

import numpy as np
from loguru import logger

from betting_round import BettingRound, Seat
from game_board import GameBoard
from game_log import GameLog
from surfaces import Display, InputSource
from config import HoldemConfig as cfg


class Game:
    """Runs hands between the human and the bot until the human stops or a seat is broke."""

    def __init__(self, board: Optional[GameBoard] = None,
                 display: Optional[Display] = None,
                 input_source: Optional[InputSource] = None,
                 rng: Optional[np.random.Generator] = None,
                 log: Optional[GameLog] = None):
        """
        Initialize a session.

        Args:
            board: Table to play on (a default one is built if omitted)
            display: Surface redrawn after each change, or None for no output
            input_source: Where human input comes from; only run() needs it
            rng: Random generator for the dealer coin and a default board's deck
            log: Recent-message log
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.board = board if board is not None else GameBoard(rng=self.rng)
        self.display = display
        self.input_source = input_source
        self.log = log if log is not None else GameLog()

        self.is_user_dealer = False
        self.round: Optional[BettingRound] = None
        self.hands_played = 0
        self.over = False

    def run(self):
        """Run the session until it completes."""
        if self.input_source is None:
            raise ValueError("An input source is required to run the game")

        self.log.add("Welcome to Texas Hold'em heads-up tournament style! We'll be")
        self.log.add("playing with a few house rules. (If you know the standard rules,")
        self.log.add("you'll be fine.)")

        while not self.over:
            if not self.can_continue():
                self._announce_broke()
                self.over = True
                break

            self.log.add("Ready? (y)es (n)o")
            if self._get_choice("y", "n") == "n":
                self.end_session()
                break

            betting_round = self.start_hand()
            betting_round.run(self._get_input)
            self.finish_hand()

        self.draw()

    # Hand lifecycle
    # ------------------------------

    def start_hand(self) -> BettingRound:
        """
        Set up a hand and open its betting round.

        Returns:
            The started round, waiting for the human's first decision unless
            it already ended
        """
        if self.over:
            raise RuntimeError("The session is over")
        if self.round is not None and not self.round.finished:
            raise RuntimeError("A hand is already in progress")
        if not self.can_continue():
            raise RuntimeError("A player is out of chips")

        board = self.board
        user, bot = board.user, board.bot

        self.log.clear()
        for player in board.players:
            player.reset_for_new_hand()
        board.deck.reset()

        if user.chips == bot.chips:
            self.log.add(f"You each have ${user.chips} in chips. The big blind is ${board.big_blind}.")
        else:
            self.log.add(f"You have ${user.chips} and they have ${bot.chips} in chips. "
                         f"The big blind is ${board.big_blind}.")

        # dealer coin
        self.is_user_dealer = bool(self.rng.integers(2))
        if self.is_user_dealer:
            self.log.add("Rolling the dice... you have the dealer coin!")
        else:
            self.log.add("Rolling the dice... they have the dealer coin.")
        logger.info("hand {}: user is dealer: {}", self.hands_played + 1, self.is_user_dealer)

        # blinds and hole cards
        self.log.add("Placing initial bets.")
        self._post_blind(self.dealer, board.small_blind, "small")
        self._post_blind(self.non_dealer, board.big_blind, "big")
        self.log.add("Dealing hole cards.")
        for player in board.players:
            player.hand.add(board.deck.deal(cfg.HOLE_CARDS))
        self.draw()

        self.round = BettingRound(board, board.big_blind, self.is_user_dealer, self.log)
        self.round.start()
        self.hands_played += 1
        return self.round

    def finish_hand(self) -> Optional[Seat]:
        """
        Settle the finished betting round.

        The winner of a fold or a cannot-cover takes both bets. When the bets
        matched there is no showdown at this table: the bot's cards are
        shown and both bets go back to their owners.

        Returns:
            Seat that won the pot, or None when bets were returned
        """
        if self.round is None or not self.round.finished:
            raise RuntimeError("No finished betting round to settle")

        user, bot = self.board.user, self.board.bot
        pot = self.board.pot
        winner = self.round.winner

        if winner == Seat.USER:
            user.chips += pot
            self.log.add(f"You win ${pot}.")
        elif winner == Seat.BOT:
            bot.chips += pot
            self.log.add(f"They win ${pot}.")
        else:
            bot.show_hand()
            user.chips += user.current_bet
            bot.chips += bot.current_bet
            self.log.add(f"Bets matched at ${user.current_bet}. Both bets are returned.")

        for player in self.board.players:
            player.reset_round_bet()

        logger.info("hand {} settled: {} (pot ${}), chips user ${} / bot ${}",
                    self.hands_played, self.round.outcome.value, pot, user.chips, bot.chips)
        self.draw()
        return winner

    def end_session(self):
        self.log.add("Good bye. :)")
        self.over = True
        self.draw()

    def can_continue(self) -> bool:
        """Check if both seats still have chips."""
        return all(player.chips > 0 for player in self.board.players)

    @property
    def dealer(self):
        return self.board.user if self.is_user_dealer else self.board.bot

    @property
    def non_dealer(self):
        return self.board.bot if self.is_user_dealer else self.board.user

    def _post_blind(self, player, amount: int, kind: str):
        posted = player.post_blind(amount)
        if posted < amount:
            who = "You're" if player.is_human else "They're"
            self.log.add(f"{who} all in for the {kind} blind with ${posted}.")
        logger.debug("{} blind posted for {}: ${}", kind, "user" if player.is_human else "bot", posted)

    def _announce_broke(self):
        if self.board.user.chips <= 0:
            self.log.add("You're out of chips. Good game!")
        else:
            self.log.add("They're out of chips. You win the match!")

    # Drawing & input
    # ------------------------------

    def draw(self):
        if self.display is not None:
            self.display.draw(self.board, self.log)

    def _get_input(self) -> str:
        """Redraw, then read one lower-cased line from the user."""
        self.draw()
        return self.input_source.read_line().strip().lower()

    def _get_choice(self, *choices: str) -> str:
        while True:
            choice = self._get_input()
            if choice in choices:
                return choice
            self.log.add("Please enter " + " or ".join(choices) + ".")
