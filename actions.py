"""Human action choices, their labels and input validation."""

from enum import IntEnum
from typing import List, NamedTuple


class InvalidInputError(ValueError):
    """Input that should be re-prompted; the message tells the user why."""


class ActionKind(IntEnum):
    """What the human can do on their turn."""
    FOLD = 0
    CHECK_OR_CALL = 1
    BET_OR_RAISE = 2


class HumanOption(NamedTuple):
    kind: ActionKind
    key: str
    label: str


def _option(kind: ActionKind, verb: str) -> HumanOption:
    return HumanOption(kind, verb[0], f"({verb[0]}){verb[1:]}")


def call_verb(user_bet: int, bot_bet: int) -> str:
    """'call' when the bot is ahead, otherwise 'check'."""
    return "call" if bot_bet > user_bet else "check"


def bet_verb(user_bet: int, bot_bet: int) -> str:
    """'raise' once either seat has chips in this round, otherwise 'bet'."""
    return "raise" if (bot_bet + user_bet) > 0 else "bet"


def available_options(user_bet: int, bot_bet: int, can_bet: bool = True) -> List[HumanOption]:
    """
    Get the options offered to the human for the current bet state.

    Args:
        user_bet: Human's bet this round
        bot_bet: Bot's bet this round
        can_bet: Whether the human has enough chips to bet the minimum

    Returns:
        Options in display order
    """
    options = [_option(ActionKind.FOLD, "fold"),
               _option(ActionKind.CHECK_OR_CALL, call_verb(user_bet, bot_bet))]
    if can_bet:
        options.append(_option(ActionKind.BET_OR_RAISE, bet_verb(user_bet, bot_bet)))
    return options


def build_question(options: List[HumanOption]) -> str:
    return "Do you want to " + " or ".join(o.label for o in options) + "?"


def parse_choice(text: str, options: List[HumanOption]) -> HumanOption:
    """Match a line of input against the offered options (case-insensitive)."""
    choice = text.strip().lower()
    for option in options:
        if option.key == choice:
            return option

    keys = [o.key for o in options]
    hint = ", ".join(keys[:-1]) + " or " + keys[-1] if len(keys) > 1 else keys[0]
    raise InvalidInputError(f"Please enter {hint}.")


def parse_bet_amount(text: str, min_bet: int, chips: int, verb: str = "bet") -> int:
    """
    Validate a typed bet amount.

    The amount is checked as typed; rounding to the betting unit happens
    afterwards, so it never drops below min_bet.

    Raises:
        InvalidInputError: non-numeric, below the minimum or above the stack
    """
    text = text.strip()
    if not text.isdecimal():
        raise InvalidInputError(f"Please enter a numeric {verb}.")
    # more digits than the stack can't be covered, however long the input
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(chips)):
        raise InvalidInputError(f"You don't have that many chips to {verb}.")
    amount = int(digits)

    if amount < min_bet:
        raise InvalidInputError(f"The minimum {verb} is ${min_bet}.")
    if amount > chips:
        raise InvalidInputError(f"You don't have that many chips to {verb}.")
    return amount


def round_to_unit(amount: int, unit: int) -> int:
    """Round down to the nearest multiple of the betting unit."""
    return amount - amount % unit
