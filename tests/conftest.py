"""
Pytest configuration for tests at the root level.

Provides seeded random sources and a stacked deck so rounds can be played with
known cards.
"""

import random
from itertools import cycle

import pytest

from twentyone.adapters import DummyAdapter
from twentyone.common.card import Card, Rank, Suit
from twentyone.common.deck import Deck
from twentyone.engine import RoundEngine, RoundLogger


def make_cards(*labels):
    """Build cards from rank labels, cycling through the suits."""
    suits = cycle(Suit)
    return [Card(next(suits), Rank.from_label(label)) for label in labels]


class StackedDeck(Deck):
    """
    A deck that deals prepared stacks. Each reset loads the next stack, dealt
    in the order given; once the stacks run out a reset gives a normal full
    deck. Shuffling leaves the order alone.
    """

    def __init__(self, *stacks):
        self._stacks = [list(stack) for stack in stacks]
        self.resets = 0
        self.shuffles = 0
        super().__init__(cards=[], rng=random.Random(0))

    def reset(self):
        self.resets += 1
        if self._stacks:
            # draw() takes from the end
            self.cards = list(reversed(self._stacks.pop(0)))
        else:
            super().reset()

    def shuffle(self):
        self.shuffles += 1
        return self


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def adapter():
    return DummyAdapter()


@pytest.fixture
def quiet_logger():
    round_logger = RoundLogger("twentyone.rounds.test")
    round_logger.set_level("ERROR")
    return round_logger


@pytest.fixture
def stacked_engine(adapter, quiet_logger):
    """Factory building an engine whose rounds are dealt from given labels."""

    def build(names, *stacks, config=None):
        deck = StackedDeck(*(make_cards(*stack) for stack in stacks))
        return RoundEngine(
            names,
            config,
            deck=deck,
            adapter=adapter,
            round_logger=quiet_logger,
        )

    return build


@pytest.fixture
def cards():
    return make_cards


@pytest.fixture
def stacked_deck():
    def build(*stacks):
        return StackedDeck(*(make_cards(*stack) for stack in stacks))

    return build
