"""Betting round state machine for the human vs. bot table."""

from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from actions import (ActionKind, HumanOption, InvalidInputError, available_options,
                     bet_verb, build_question, parse_bet_amount, parse_choice, round_to_unit)
from bot_policy import BotMove, BotPolicy
from game_board import GameBoard
from game_log import GameLog


class RoundOverError(RuntimeError):
    """Raised when input is submitted to a round that has finished."""


class Seat(Enum):
    USER = "user"
    BOT = "bot"

    @property
    def other(self) -> "Seat":
        return Seat.BOT if self is Seat.USER else Seat.USER


class RoundState(Enum):
    ACTIVE = "active"
    AWAITING_CHOICE = "awaiting_choice"
    AWAITING_AMOUNT = "awaiting_amount"
    FOLDED = "folded"
    SETTLED = "settled"


class RoundOutcome(Enum):
    FOLDED = "folded"
    MATCHED = "matched"
    USER_CANNOT_COVER = "user_cannot_cover"
    BOT_CANNOT_COVER = "bot_cannot_cover"


class BettingRound:
    """
    One round of betting between the human and the bot.

    The seat without the dealer coin acts first in every exchange. An
    exchange is: bot (if user is not dealer), one human decision, bot (if
    user is dealer). The round settles when both bets are equal after an
    exchange, ends at once when the human folds, and ends when either seat
    can't cover what it has to put in.

    The bot's turn is computed synchronously, so the only waiting states are
    the human's choice and bet amount. Drive it with run() for blocking
    input, or start() followed by submit() one line at a time.
    """

    def __init__(self, board: GameBoard, min_bet: int, dealer_is_user: bool, log: GameLog):
        """
        Args:
            board: Table holding both seats
            min_bet: Betting unit for the round
            dealer_is_user: Whether the human has the dealer coin
            log: Log receiving the round's messages
        """
        if min_bet <= 0:
            raise ValueError(f"Minimum bet must be positive, got {min_bet}")
        self.board = board
        self.user = board.user
        self.bot = board.bot
        self.min_bet = min_bet
        self.dealer_is_user = dealer_is_user
        self.log = log

        self.state = RoundState.ACTIVE
        self.outcome: Optional[RoundOutcome] = None
        self.folded_seat: Optional[Seat] = None
        self.user_active = True
        self.bot_active = True
        self.options: List[HumanOption] = []
        self.exchanges = 0

    @property
    def finished(self) -> bool:
        return self.state in (RoundState.FOLDED, RoundState.SETTLED)

    @property
    def winner(self) -> Optional[Seat]:
        """Seat that takes the round, or None while running or when bets matched."""
        if self.outcome == RoundOutcome.FOLDED:
            return self.folded_seat.other
        if self.outcome == RoundOutcome.USER_CANNOT_COVER:
            return Seat.BOT
        if self.outcome == RoundOutcome.BOT_CANNOT_COVER:
            return Seat.USER
        return None

    @property
    def verb(self) -> str:
        return bet_verb(self.user.current_bet, self.bot.current_bet)

    @property
    def prompt(self) -> Optional[str]:
        """The question the human is currently being asked, if any."""
        if self.state == RoundState.AWAITING_CHOICE:
            return build_question(self.options)
        if self.state == RoundState.AWAITING_AMOUNT:
            return f"How much do you want to {self.verb}?"
        return None

    # Driving the round
    # ------------------------------

    def start(self):
        """Run up to the human's first decision (or the end of the round)."""
        if self.state != RoundState.ACTIVE:
            raise RuntimeError("Betting round has already started")
        logger.debug("betting round: min bet ${}, user is dealer: {}", self.min_bet, self.dealer_is_user)
        self._begin_exchange()

    def run(self, read_line: Callable[[], str]) -> RoundOutcome:
        """
        Play the round to the end, blocking on read_line for human input.

        Invalid input is logged and asked again.
        """
        if self.state == RoundState.ACTIVE:
            self.start()
        while not self.finished:
            try:
                self.submit(read_line())
            except InvalidInputError as e:
                self.log.add(str(e))
        return self.outcome

    def submit(self, line: str):
        """Feed one line of human input to whichever question is open."""
        if self.state == RoundState.AWAITING_CHOICE:
            self.submit_choice(line)
        elif self.state == RoundState.AWAITING_AMOUNT:
            self.submit_amount(line)
        elif self.finished:
            raise RoundOverError("The betting round is over.")
        else:
            raise RuntimeError("Betting round hasn't started")

    def submit_choice(self, text: str):
        """Apply the human's fold / check-call / bet-raise choice."""
        self._expect(RoundState.AWAITING_CHOICE)
        option = parse_choice(text, self.options)

        if option.kind == ActionKind.FOLD:
            self.log.add("You folded.")
            self._user_folds()
            return

        if option.kind == ActionKind.CHECK_OR_CALL:
            if self.bot.current_bet > self.user.current_bet:
                amount = self.bot.current_bet - self.user.current_bet
                if not self.user.place_bet(amount):
                    self.log.add("You don't have enough chips to call.")
                    self._settle(RoundOutcome.USER_CANNOT_COVER)
                    return
                self.log.add(f"You called for ${amount}.")
            else:
                self.log.add("You checked.")
            self._finish_exchange()
            return

        self.log.add(f"How much do you want to {self.verb}?")
        self.state = RoundState.AWAITING_AMOUNT

    def submit_amount(self, text: str):
        """Apply the human's bet/raise amount, rounded down to the betting unit."""
        self._expect(RoundState.AWAITING_AMOUNT)
        amount = parse_bet_amount(text, self.min_bet, self.user.chips, self.verb)
        amount = round_to_unit(amount, self.min_bet)

        self.log.add(f"You bet ${amount}.")
        self.user.place_bet(amount)
        self._finish_exchange()

    # Exchange steps
    # ------------------------------

    def _begin_exchange(self):
        self.exchanges += 1

        # bot goes first when it has the dealer coin
        if not self.dealer_is_user and not self._bot_turn():
            return

        required = self.min_bet - (self.user.current_bet % self.min_bet)
        if self.user.chips < required:
            self.log.add("You don't have enough chips to bet.")
            self._settle(RoundOutcome.USER_CANNOT_COVER)
            return

        self.options = available_options(self.user.current_bet, self.bot.current_bet,
                                         can_bet=self.user.chips >= self.min_bet)
        self.log.add(build_question(self.options))
        self.state = RoundState.AWAITING_CHOICE

    def _finish_exchange(self):
        if self.dealer_is_user and not self._bot_turn():
            return

        if self.user.current_bet == self.bot.current_bet:
            self._settle(RoundOutcome.MATCHED)
        else:
            self._begin_exchange()

    def _bot_turn(self) -> bool:
        """Let the bot act. Returns False if it couldn't cover and the round ended."""
        decision = BotPolicy.act(self.bot, self.user, self.min_bet)
        if decision.move == BotMove.CALL:
            self.log.add("They called.")
        elif decision.move == BotMove.BET:
            self.log.add(f"They bet ${decision.amount}.")
        else:
            self.log.add("They don't have enough chips to bet.")
            self._settle(RoundOutcome.BOT_CANNOT_COVER)
            return False
        return True

    def _user_folds(self):
        self.user_active = False
        self.folded_seat = Seat.USER
        self._finish(RoundState.FOLDED, RoundOutcome.FOLDED)

    def _settle(self, outcome: RoundOutcome):
        if outcome == RoundOutcome.USER_CANNOT_COVER:
            self.user_active = False
        elif outcome == RoundOutcome.BOT_CANNOT_COVER:
            self.bot_active = False
        self._finish(RoundState.SETTLED, outcome)

    def _finish(self, state: RoundState, outcome: RoundOutcome):
        self.state = state
        self.outcome = outcome
        self.options = []
        logger.info("betting round over: {} after {} exchange(s), bets user ${} / bot ${}",
                    outcome.value, self.exchanges, self.user.current_bet, self.bot.current_bet)

    def _expect(self, state: RoundState):
        if self.finished:
            raise RoundOverError("The betting round is over.")
        if self.state != state:
            raise RuntimeError(f"Betting round is {self.state.value}, not {state.value}")
