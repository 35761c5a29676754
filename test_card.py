"""Tests for the deck and hands."""

import numpy as np
import pytest

from card import Card, Deck, DeckExhaustedError, Hand, Rank, Suit


def test_deck_has_52_distinct_cards():
    deck = Deck(np.random.default_rng(1))
    assert len(deck) == 52
    assert len(set(deck.cards)) == 52


def test_seeded_decks_shuffle_the_same():
    first = Deck(np.random.default_rng(7))
    second = Deck(np.random.default_rng(7))
    assert first.cards == second.cards


def test_draw_card_removes_top_card():
    deck = Deck(np.random.default_rng(3))
    top = deck.cards[0]
    assert deck.draw_card() == top
    assert len(deck) == 51
    assert top not in deck.cards


def test_drawing_from_empty_deck_fails():
    deck = Deck(np.random.default_rng(0))
    deck.deal(52)
    with pytest.raises(DeckExhaustedError):
        deck.draw_card()


def test_deal_more_than_remaining_fails():
    deck = Deck(np.random.default_rng(0))
    deck.deal(50)
    with pytest.raises(DeckExhaustedError):
        deck.deal(3)
    assert len(deck) == 2


def test_reset_restores_full_deck():
    deck = Deck(np.random.default_rng(0))
    deck.deal(10)
    deck.reset()
    assert len(deck) == 52


def test_card_str():
    assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
    assert str(Card(Rank.TEN, Suit.HEARTS)) == "10♥"


def test_hand_accumulates_and_hides():
    hand = Hand(hidden=True)
    hand.add([Card(Rank.KING, Suit.CLUBS)])
    hand.add([Card(Rank.TWO, Suit.DIAMONDS)])
    assert len(hand) == 2
    assert str(hand) == "?? ??"

    hand.show()
    assert str(hand) == "K♣ 2♦"

    hand.clear()
    assert len(hand) == 0
