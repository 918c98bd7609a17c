"""
Base adapter interface for the round engine.

An adapter is the presentation side of the table. The engine pushes a fresh
snapshot after every change it applies and forwards each event as it happens;
the adapter decides what to show, and what to keep hidden, from there.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Union

from twentyone.state.models import TableState


class TableAdapter(ABC):
    """
    Base interface for presentation adapters.

    Implementations bridge the engine and a concrete surface such as a
    console, a test recorder or a web page.
    """

    @abstractmethod
    def render_state(self, state: TableState) -> None:
        """
        Render the current table.

        Args:
            state: Snapshot taken right after the last applied change
        """

    @abstractmethod
    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
