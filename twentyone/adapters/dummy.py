"""
Dummy adapter for the round engine, used for testing and simulation.

This adapter renders nothing. It keeps every snapshot and event it receives so
tests and simulations can inspect them afterwards.
"""

from typing import Any, Dict, List, Union
from enum import Enum

from twentyone.adapters.base import TableAdapter
from twentyone.state.models import TableState


class DummyAdapter(TableAdapter):
    """
    Recording adapter for tests and simulations.

    Args:
        verbose: Whether to print events to stdout (useful for debugging)
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.events = []
        self.rendered_states: List[TableState] = []

    def render_state(self, state: TableState) -> None:
        self.rendered_states.append(state)

        if self.verbose:
            print("\n=== Table ===")
            print(f"{state.dealer.name}: {[c.label for c in state.dealer.cards]}")
            for player in state.players:
                print(f"{player.name}: {[c.label for c in player.cards]} - {player.value}")
            print("=============\n")

    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    @property
    def last_state(self) -> TableState:
        return self.rendered_states[-1]

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]

    def event_types(self) -> List[str]:
        return [typ for typ, _ in self.events]

    def clear(self) -> None:
        """Clear all stored events and states."""
        self.events.clear()
        self.rendered_states.clear()
