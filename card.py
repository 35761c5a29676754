"""Cards, the shared deck and player hands."""

from enum import IntEnum
from typing import Iterable, List, Optional

import numpy as np


class DeckExhaustedError(ValueError):
    """Raised when more cards are requested than the deck holds."""


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Card:
    """Represents a single playing card."""

    SUIT_SYMBOLS = {
        Suit.CLUBS: '♣',
        Suit.DIAMONDS: '♦',
        Suit.HEARTS: '♥',
        Suit.SPADES: '♠'
    }

    RANK_NAMES = {
        Rank.TWO: '2', Rank.THREE: '3', Rank.FOUR: '4', Rank.FIVE: '5',
        Rank.SIX: '6', Rank.SEVEN: '7', Rank.EIGHT: '8', Rank.NINE: '9',
        Rank.TEN: '10', Rank.JACK: 'J', Rank.QUEEN: 'Q',
        Rank.KING: 'K', Rank.ACE: 'A'
    }

    def __init__(self, rank: Rank, suit: Suit):
        self.rank = rank
        self.suit = suit

    def __str__(self) -> str:
        return f"{self.RANK_NAMES[self.rank]}{self.SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        return self.__str__()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))


class Deck:
    """A 52-card deck shuffled from an injected random source."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        """
        Initialize a shuffled deck.

        Args:
            rng: Random generator used for shuffling. A fresh unseeded
                generator is used when omitted.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cards: List[Card] = []
        self.reset()

    def reset(self):
        """Reset the deck to a full 52-card deck and shuffle."""
        self.cards = [Card(rank, suit) for suit in Suit for rank in Rank]
        self.shuffle()

    def shuffle(self):
        order = self.rng.permutation(len(self.cards))
        self.cards = [self.cards[i] for i in order]

    def draw_card(self) -> Card:
        """Take the top card off the deck."""
        if not self.cards:
            raise DeckExhaustedError("Cannot draw from an empty deck")
        return self.cards.pop(0)

    def deal(self, num_cards: int = 1) -> List[Card]:
        """Deal a specified number of cards from the deck."""
        if num_cards > len(self.cards):
            raise DeckExhaustedError(
                f"Not enough cards in deck. Requested {num_cards}, available {len(self.cards)}")
        return [self.draw_card() for _ in range(num_cards)]

    def __len__(self) -> int:
        return len(self.cards)


class Hand:
    """A player's private cards."""

    def __init__(self, hidden: bool = False):
        """
        Args:
            hidden: Whether the cards are face down to the other seat.
        """
        self.hidden = hidden
        self.cards: List[Card] = []

    def add(self, cards: Iterable[Card]):
        self.cards.extend(cards)

    def clear(self):
        self.cards = []

    def show(self):
        """Turn the cards face up."""
        self.hidden = False

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __str__(self) -> str:
        if self.hidden:
            return " ".join("??" for _ in self.cards)
        return " ".join(str(card) for card in self.cards)
