"""
This module contains the Deck class, which represents a single 52-card deck.

>>> import random
>>> deck = Deck(rng=random.Random(7))
>>> deck.size
52
>>> card = deck.draw()
>>> deck.size
51
"""

import random
from typing import List, Optional

from twentyone.common.card import Card, Rank, Suit


class DeckEmptyError(IndexError):
    """Raised when a card is drawn from an empty deck."""


class Deck:
    """
    A class representing a deck of cards.

    The deck is built full and shuffled. Cards are drawn from the end of the
    sequence. Once exhausted the deck must be reset and shuffled again by its
    owner; the deck itself never refills.
    """

    # Suit-major, rank-minor
    _default_deck = [Card(suit, rank) for suit in Suit for rank in Rank]

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: A list of Card instances to populate the deck (optional).
                      If provided the deck is used exactly as given, unshuffled.
                      If not provided, a full deck is built and shuffled.
        :param rng: Random source used for shuffling. Defaults to a fresh
                    ``random.Random()``; pass a seeded one for reproducible play.
        """
        self.rng = rng if rng is not None else random.Random()
        if cards is None:
            self.cards: List[Card] = self.initialize_default_deck()
            self.shuffle()
        else:
            self.cards = list(cards)

    def initialize_default_deck(self) -> List[Card]:
        """
        Construct the 52 rank and suit combinations in their fixed order.

        :return: A list of Card instances representing the default deck.
        """
        return self._default_deck.copy()

    def reset(self) -> None:
        """
        Repopulate the deck with all 52 cards in their fixed order. The deck
        is left unshuffled.
        """
        self.cards = self.initialize_default_deck()

    def shuffle(self) -> "Deck":
        """
        Shuffle the deck in place with a Fisher-Yates pass, walking from the
        last position down and swapping each with a uniformly chosen position
        at or before it.
        """
        cards = self.cards
        for i in range(len(cards) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            cards[i], cards[j] = cards[j], cards[i]
        return self

    def draw(self) -> Card:
        """
        Remove and return the last card of the deck.

        :raises DeckEmptyError: If the deck has no cards left.
        """
        if not self.cards:
            raise DeckEmptyError("Cannot draw from an empty deck")
        return self.cards.pop()

    @property
    def size(self) -> int:
        """Number of cards remaining."""
        return len(self.cards)

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards"
