"""The table: both seats, the blinds and the shared deck."""

from typing import Optional

import numpy as np

from card import Deck
from player import Player
from config import HoldemConfig as cfg


class GameBoard:
    """Holds the two players, blind amounts and deck for a session."""

    def __init__(self, starting_chips: int = cfg.STARTING_CHIPS,
                 small_blind: int = cfg.SMALL_BLIND,
                 big_blind: int = cfg.BIG_BLIND,
                 deck: Optional[Deck] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize the board.

        Args:
            starting_chips: Chips each seat starts the session with
            small_blind: Small blind amount
            big_blind: Big blind amount, also the first round's betting unit
            deck: Deck to deal from (a new one shuffled by rng if omitted)
            rng: Random generator for a new deck
        """
        if small_blind <= 0 or big_blind <= 0:
            raise ValueError(f"Blinds must be positive, got {small_blind}/{big_blind}")
        if small_blind > big_blind:
            raise ValueError(f"Small blind ${small_blind} is larger than big blind ${big_blind}")
        if starting_chips <= 0:
            raise ValueError(f"Starting chips must be positive, got {starting_chips}")

        self.small_blind = small_blind
        self.big_blind = big_blind
        self.deck = deck if deck is not None else Deck(rng)
        self.user = Player(True, cfg.USER_NAME, starting_chips)
        self.bot = Player(False, cfg.BOT_NAME, starting_chips)

    @property
    def players(self):
        return [self.user, self.bot]

    @property
    def pot(self) -> int:
        """Chips committed by both seats in the current round."""
        return self.user.current_bet + self.bot.current_bet

    @property
    def total_chips(self) -> int:
        return sum(p.chips + p.current_bet for p in self.players)
