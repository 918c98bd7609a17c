"""
Round engine for the blackjack table.

This package holds the engine that runs rounds, the settlement rules it applies
and the logger that records what happened.
"""

from twentyone.engine.round import RoundEngine
from twentyone.engine.round_logger import RoundLogger
from twentyone.engine.rules import dealer_wins_round, resolve_outcome

__all__ = ["RoundEngine", "RoundLogger", "dealer_wins_round", "resolve_outcome"]
