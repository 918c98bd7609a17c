"""
This module contains the Participant class, shared by the players and the
dealer at a blackjack table.

A participant owns exactly one hand, a round status and a win counter that
survives from round to round. Players and the dealer are the same class told
apart by a `Role` tag; the dealer also carries the policy that decides when it
draws. Players have no policy, since their decisions come from outside the
engine.
"""

from enum import Enum
from typing import Callable, Optional

from twentyone.common.hand import Hand
from twentyone.constants import BLACKJACK, DEALER_STANDS_ON

HitPolicy = Callable[[Hand], bool]


class Role(Enum):
    PLAYER = "player"
    DEALER = "dealer"


class Status(Enum):
    """Where a participant stands within the current round."""

    WAITING = "waiting"
    STAND = "stand"
    BUST = "bust"


def stands_on(threshold: int = DEALER_STANDS_ON) -> HitPolicy:
    """
    Build the fixed dealer policy: hit below `threshold`, stand on it or
    anything above. Soft and hard totals are treated alike.

    >>> policy = stands_on(17)
    >>> hand = Hand()
    >>> policy(hand)
    True
    """
    if not 2 <= threshold <= BLACKJACK:
        raise ValueError(f"Dealer threshold must be between 2 and 21, got {threshold}")

    def should_hit(hand: Hand) -> bool:
        return hand.value() < threshold

    return should_hit


class Participant:
    """
    A named seat at the table.

    :param name: Name of the participant, fixed for the session
    :param role: Whether this seat is a player or the dealer
    :param hit_policy: Callable deciding whether to draw, dealer only
    """

    def __init__(
        self,
        name: str,
        role: Role = Role.PLAYER,
        hit_policy: Optional[HitPolicy] = None,
    ):
        if role is Role.DEALER and hit_policy is None:
            raise ValueError("A dealer needs a hit policy")
        if role is Role.PLAYER and hit_policy is not None:
            raise ValueError("Players are driven by input, not by a hit policy")
        self._name = name
        self.role = role
        self.hit_policy = hit_policy
        self.hand = Hand()
        self.wins = 0
        self.status = Status.WAITING
        self.natural = False

    @classmethod
    def player(cls, name: str) -> "Participant":
        return cls(name, Role.PLAYER)

    @classmethod
    def dealer(
        cls, name: str = "Dealer", stands_on_total: int = DEALER_STANDS_ON
    ) -> "Participant":
        return cls(name, Role.DEALER, stands_on(stands_on_total))

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_dealer(self) -> bool:
        return self.role is Role.DEALER

    def reset_for_round(self) -> None:
        """
        Clear the hand and put the participant back to waiting. Wins are kept.
        """
        self.hand.clear()
        self.status = Status.WAITING
        self.natural = False

    def receive_card(self, card) -> None:
        self.hand.add_card(card)

    def value(self) -> int:
        return self.hand.value()

    def is_bust(self) -> bool:
        return self.hand.value() > BLACKJACK

    def is_done(self) -> bool:
        return self.status is Status.STAND or self.is_bust()

    def should_hit(self) -> bool:
        """
        Ask the dealer policy whether to draw another card.

        :raises TypeError: If called on a player.
        """
        if self.hit_policy is None:
            raise TypeError(f"{self._name} is a player and has no hit policy")
        return self.hit_policy(self.hand)

    def __repr__(self) -> str:
        return (
            f"Participant({self._name!r}, role={self.role.value}, "
            f"status={self.status.value}, wins={self.wins})"
        )

    def __str__(self) -> str:
        return self._name
