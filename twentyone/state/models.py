"""
Immutable state models for the round engine.

The engine itself works on mutable participants and a mutable deck. What it
hands to the outside world are frozen snapshots built from those objects, so a
presentation layer can keep, compare or serialise a view of the table without
being able to change the game through it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from enum import Enum, auto
import time

from twentyone.common.card import Card


class GameStage(Enum):
    """Stages of a round, in order."""

    IDLE = auto()
    DEALING = auto()
    PLAYER_TURNS = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()


class Outcome(Enum):
    """Result of one player's hand against the dealer."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"


@dataclass(frozen=True)
class ParticipantState:
    """
    Immutable representation of one seat at the table.

    Attributes:
        name: Name of the participant
        role: "player" or "dealer"
        cards: Cards in hand, in the order they were received
        value: Best total of the hand
        is_soft: Whether an ace is still counted as 11
        status: "waiting", "stand" or "bust"
        wins: Wins accumulated over the session
        natural: Whether the hand was dealt as a blackjack this round
    """

    name: str
    role: str
    cards: Tuple[Card, ...] = ()
    value: int = 0
    is_soft: bool = False
    status: str = "waiting"
    wins: int = 0
    natural: bool = False

    @property
    def is_bust(self) -> bool:
        return self.status == "bust" or self.value > 21

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role,
            "cards": [card.to_dict() for card in self.cards],
            "value": self.value,
            "is_soft": self.is_soft,
            "status": self.status,
            "wins": self.wins,
            "natural": self.natural,
        }


@dataclass(frozen=True)
class PlayerResult:
    """Outcome of one player's hand in a resolved round."""

    name: str
    outcome: Outcome
    total: int
    dealer_total: int
    natural: bool = False

    @property
    def is_bust(self) -> bool:
        return self.total > 21

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "total": self.total,
            "dealer_total": self.dealer_total,
            "natural": self.natural,
            "bust": self.is_bust,
        }


@dataclass(frozen=True)
class RoundResult:
    """
    Immutable summary of a resolved round.

    Attributes:
        round_number: 1-based number of the round within the session
        results: One entry per player, in seating order
        dealer_total: Final dealer total
        dealer_bust: Whether the dealer went over 21
        dealer_won_round: Whether the round counted as a dealer win
    """

    round_number: int
    results: Tuple[PlayerResult, ...]
    dealer_total: int
    dealer_bust: bool
    dealer_won_round: bool

    @property
    def winners(self) -> Tuple[str, ...]:
        return tuple(r.name for r in self.results if r.outcome is Outcome.WIN)

    @property
    def is_tie(self) -> bool:
        """Nobody won, and the dealer did not take the round either."""
        return not self.winners and not self.dealer_won_round

    def outcome_for(self, name: str) -> Optional[Outcome]:
        for result in self.results:
            if result.name == name:
                return result.outcome
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round_number": self.round_number,
            "results": [r.to_dict() for r in self.results],
            "dealer_total": self.dealer_total,
            "dealer_bust": self.dealer_bust,
            "dealer_won_round": self.dealer_won_round,
            "winners": list(self.winners),
        }


@dataclass(frozen=True)
class TableState:
    """
    Immutable snapshot of the whole table.

    The dealer's hand is always complete here. Whether the hole card is shown
    is a presentation decision, typically keyed on `round_active`.
    """

    players: Tuple[ParticipantState, ...]
    dealer: ParticipantState
    stage: GameStage = GameStage.IDLE
    round_active: bool = False
    current_player_index: Optional[int] = None
    rounds_played: int = 0
    deck_remaining: int = 52
    last_result: Optional[RoundResult] = None
    timestamp: float = field(default_factory=lambda: time.time())

    @property
    def current_player(self) -> Optional[ParticipantState]:
        if self.current_player_index is None:
            return None
        return self.players[self.current_player_index]

    @property
    def participants(self) -> Tuple[ParticipantState, ...]:
        """Players followed by the dealer, in scoreboard order."""
        return self.players + (self.dealer,)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the table state to a dictionary suitable for serialization.
        """
        current = self.current_player
        return {
            "stage": self.stage.name,
            "round_active": self.round_active,
            "current_player_index": self.current_player_index,
            "current_player": current.name if current else None,
            "rounds_played": self.rounds_played,
            "deck_remaining": self.deck_remaining,
            "timestamp": self.timestamp,
            "players": [p.to_dict() for p in self.players],
            "dealer": self.dealer.to_dict(),
            "last_result": self.last_result.to_dict() if self.last_result else None,
        }

    def to_adapter_format(self) -> Dict[str, Any]:
        """
        Convert the table state to the flatter format platform adapters use.
        """
        current = self.current_player
        return {
            "stage": self.stage.name,
            "round_active": self.round_active,
            "current_player": current.name if current else None,
            "rounds_played": self.rounds_played,
            "dealer": {
                "name": self.dealer.name,
                "hand": [card.label for card in self.dealer.cards],
                "value": self.dealer.value,
                "wins": self.dealer.wins,
            },
            "players": [
                {
                    "name": player.name,
                    "hand": [card.label for card in player.cards],
                    "value": player.value,
                    "status": player.status,
                    "natural": player.natural,
                    "wins": player.wins,
                }
                for player in self.players
            ],
            "result": self.last_result.to_dict() if self.last_result else None,
        }
