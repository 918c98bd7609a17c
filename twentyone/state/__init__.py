"""
Immutable snapshots of the table for presentation layers.
"""

from twentyone.state.models import (
    GameStage,
    Outcome,
    ParticipantState,
    PlayerResult,
    RoundResult,
    TableState,
)

__all__ = [
    "GameStage",
    "Outcome",
    "ParticipantState",
    "PlayerResult",
    "RoundResult",
    "TableState",
]
