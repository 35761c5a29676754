"""The bot's betting rule."""

from enum import IntEnum
from typing import NamedTuple

from loguru import logger

from player import Player


class BotMove(IntEnum):
    CALL = 0
    BET = 1
    CANNOT_COVER = 2


class BotDecision(NamedTuple):
    move: BotMove
    amount: int


class BotPolicy:
    """
    Deterministic bot. It calls whatever is outstanding, but once its own bet
    is more than one betting unit it tops up by (its bet - min bet) instead
    when that is larger. This is a fixed heuristic, not a strategy.
    """

    @staticmethod
    def decide(bot_bet: int, user_bet: int, bot_chips: int, min_bet: int) -> BotDecision:
        """
        Decide the bot's action for a bet state.

        Args:
            bot_bet: Bot's bet this round
            user_bet: Human's bet this round
            bot_chips: Bot's remaining stack
            min_bet: Betting unit for the round

        Returns:
            CALL with amount 0, BET with the amount to add, or CANNOT_COVER
            with the amount the bot would have needed
        """
        call_amount = max(user_bet - bot_bet, 0)
        amount = max(call_amount, bot_bet - min_bet, 0)

        if amount == 0:
            return BotDecision(BotMove.CALL, 0)
        if bot_chips < amount:
            return BotDecision(BotMove.CANNOT_COVER, amount)
        return BotDecision(BotMove.BET, amount)

    @staticmethod
    def act(bot: Player, user: Player, min_bet: int) -> BotDecision:
        """Decide for the bot seat and place the bet if there is one."""
        decision = BotPolicy.decide(bot.current_bet, user.current_bet, bot.chips, min_bet)
        if decision.move == BotMove.BET:
            bot.place_bet(decision.amount)
        logger.debug("bot {} ${} (bot bet ${}, user bet ${}, min ${})",
                     decision.move.name, decision.amount, bot.current_bet, user.current_bet, min_bet)
        return decision
