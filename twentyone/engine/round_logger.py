"""
Logging of the round flow: deals, player actions, dealer draws and outcomes.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class ActionRecord:
    """A single hit or stand taken by a player, or a dealer draw."""

    timestamp: datetime
    round_number: int
    participant: str
    action: str
    total_before: int
    total_after: int
    card: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "round": self.round_number,
            "participant": self.participant,
            "action": self.action,
            "total_before": self.total_before,
            "total_after": self.total_after,
            "card": self.card,
        }


@dataclass
class RoundRecord:
    round_number: int
    players: List[str]
    actions: List[ActionRecord] = field(default_factory=list)
    outcomes: Dict[str, str] = field(default_factory=dict)
    dealer_total: Optional[int] = None
    reshuffles: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "round": self.round_number,
            "players": self.players,
            "actions": [a.to_dict() for a in self.actions],
            "outcomes": self.outcomes,
            "dealer_total": self.dealer_total,
            "reshuffles": self.reshuffles,
        }


class RoundLogger:
    """Logs every step of every round and keeps the history in memory."""

    def __init__(self, name: str = "twentyone.rounds", log_level=logging.NOTSET):
        self.logger = logging.getLogger(name)
        # Quiet mode for simulations
        if os.environ.get("TWENTYONE_DISABLE_LOGGING", "").lower() in (
            "1",
            "true",
            "yes",
        ):
            self.logger.setLevel(logging.ERROR)
        else:
            self.logger.setLevel(log_level)

        self.history: List[RoundRecord] = []
        self.current_round: Optional[RoundRecord] = None

    def set_level(self, level):
        self.logger.setLevel(level)

    def log_round_start(self, round_number: int, players: List[str]):
        self.logger.info(
            f"=== Round {round_number} starting with players: {players} ==="
        )
        self.current_round = RoundRecord(round_number=round_number, players=players)

    def log_natural(self, player_name: str):
        self.logger.info(f"{player_name} was dealt a blackjack")

    def log_action(
        self,
        participant: str,
        action: str,
        total_before: int,
        total_after: int,
        card: Optional[str] = None,
    ):
        if self.current_round is None:
            return
        record = ActionRecord(
            timestamp=datetime.now(),
            round_number=self.current_round.round_number,
            participant=participant,
            action=action,
            total_before=total_before,
            total_after=total_after,
            card=card,
        )
        self.current_round.actions.append(record)
        if card:
            self.logger.debug(
                f"{participant} {action}: {card} ({total_before} -> {total_after})"
            )
        else:
            self.logger.debug(f"{participant} {action} on {total_after}")

    def log_ignored(self, participant: str, action: str, reason: str):
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Ignored {action} from {participant}: {reason}")

    def log_reshuffle(self):
        self.logger.info("Deck exhausted, reshuffling a fresh deck")
        if self.current_round is not None:
            self.current_round.reshuffles += 1

    def log_round_end(self, outcomes: Dict[str, str], dealer_total: int):
        self.logger.info(f"=== Round ended, dealer on {dealer_total} ===")
        for player, outcome in outcomes.items():
            self.logger.info(f"{player}: {outcome}")

        if self.current_round is not None:
            self.current_round.outcomes = dict(outcomes)
            self.current_round.dealer_total = dealer_total
            self.history.append(self.current_round)
        self.current_round = None

    def get_summary(self) -> Dict[str, Any]:
        """Counts of rounds, actions and outcomes over the whole history."""
        summary: Dict[str, Any] = {
            "rounds": len(self.history),
            "by_action": {},
            "by_outcome": {},
            "reshuffles": 0,
        }

        for record in self.history:
            summary["reshuffles"] += record.reshuffles
            for action in record.actions:
                summary["by_action"][action.action] = (
                    summary["by_action"].get(action.action, 0) + 1
                )
            for outcome in record.outcomes.values():
                summary["by_outcome"][outcome] = (
                    summary["by_outcome"].get(outcome, 0) + 1
                )

        return summary

    def export_history(self, filepath: str):
        """Write the round history and its summary to a JSON file."""
        data = {
            "rounds": [r.to_dict() for r in self.history],
            "summary": self.get_summary(),
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        self.logger.info(f"Exported {len(self.history)} rounds to {filepath}")
