"""
This module defines the `Suit`, `Rank`, and `Card` classes, which are used to represent playing cards.

- `Suit`: An enum representing the four suits of a standard deck of playing
cards: Hearts, Diamonds, Clubs, and Spades.

- `Rank`: An enum representing the thirteen ranks of a standard deck, Ace
through King, each carrying its blackjack value.

- `Card`: An immutable playing card. A card is identified by its rank and
suit only; two cards with the same rank and suit compare equal.
"""

from enum import Enum, unique


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck, in dealing order.
    """

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    def __str__(self) -> str:
        return self.symbol


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck, in dealing order. The value is the label
    printed in the corner of the card.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def rank_value(self) -> int:
        """
        The blackjack value of the rank. Aces count 11 here; reducing an ace
        to 1 is the hand's job.
        """
        if self is Rank.ACE:
            return 11
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING):
            return 10
        return int(self.value)

    @property
    def rank_str(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "Rank":
        """
        Look up a rank by its corner label.

        >>> Rank.from_label("k")
        <Rank.KING: 'K'>
        """
        try:
            return cls(str(label).strip().upper())
        except ValueError as exc:
            raise ValueError(f"Invalid rank label: {label!r}") from exc

    def __str__(self) -> str:
        return self.rank_str


class Card:
    """
    Class representing a playing card. Cards are immutable values.

    >>> card = Card(Suit.HEARTS, Rank.TEN)
    >>> print(card)
    10♥
    >>> card.value
    10
    """

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        """
        Initialize a Card instance.

        :param suit: Suit of the card (one of the Suit enums)
        :param rank: Rank of the card (one of the Rank enums)
        """
        if not isinstance(suit, Suit):
            raise TypeError(f"Invalid suit: {suit}")
        if not isinstance(rank, Rank):
            raise TypeError(f"Invalid rank: {rank}")
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(self, "_rank", rank)

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def value(self) -> int:
        """Blackjack value of the card, with aces at 11."""
        return self._rank.rank_value

    @property
    def is_ace(self) -> bool:
        return self._rank is Rank.ACE

    @property
    def is_red(self) -> bool:
        return self._suit.is_red

    @property
    def label(self) -> str:
        """Short label such as ``"A♠"``."""
        return f"{self._rank.rank_str}{self._suit.symbol}"

    def to_dict(self) -> dict:
        return {
            "rank": self._rank.value,
            "suit": self._suit.value,
            "value": self.value,
            "is_red": self.is_red,
            "label": self.label,
        }

    def __eq__(self, other):
        """
        Checks if this card is equal to another card.

        :param other: The other card to compare to.
        :return: True if the cards have the same rank and suit, False otherwise.
        """
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return NotImplemented

    def __hash__(self):
        return hash((self._suit, self._rank))

    def __repr__(self) -> str:
        return f"Card(Suit.{self._suit.name}, Rank.{self._rank.name})"

    def __str__(self) -> str:
        return self.label
