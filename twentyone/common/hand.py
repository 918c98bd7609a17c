"""
This module contains the Hand class, the cards held by one participant for
one round, along with its blackjack total.
"""

from typing import List

from twentyone.common.card import Card
from twentyone.constants import BLACKJACK, INITIAL_CARDS


class Hand:
    """
    An ordered collection of cards. Cards are only ever appended during a
    round; the hand is cleared before the next one.
    """

    __slots__ = ("_cards",)

    def __init__(self):
        self._cards: List[Card] = []

    @property
    def cards(self) -> List[Card]:
        """Returns a copy of the cards in the hand."""
        return list(self._cards)

    def add_card(self, card: Card) -> None:
        """
        Adds a card to the hand. No limit is enforced; bust detection belongs
        to whoever reads the value.
        """
        self._cards.append(card)

    def clear(self) -> None:
        self._cards.clear()

    def _total_and_soft_aces(self):
        total = 0
        aces = 0
        for card in self._cards:
            total += card.value
            if card.is_ace:
                aces += 1

        while total > BLACKJACK and aces > 0:
            total -= 10
            aces -= 1

        return total, aces

    def value(self) -> int:
        """
        The best total of the hand: every ace starts at 11, and aces drop to 1
        one at a time while the total is over 21.
        """
        return self._total_and_soft_aces()[0]

    @property
    def is_soft(self) -> bool:
        """True if an ace is still being counted as 11."""
        return self._total_and_soft_aces()[1] > 0

    @property
    def is_blackjack(self) -> bool:
        """True for a two-card 21."""
        return len(self._cards) == INITIAL_CARDS and self.value() == BLACKJACK

    @property
    def is_bust(self) -> bool:
        return self.value() > BLACKJACK

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(self._cards)

    def __repr__(self) -> str:
        return f"Hand({self._cards!r})"

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self._cards)
