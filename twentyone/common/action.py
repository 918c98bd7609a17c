"""Defines the Action enum for the decisions a player can make on their turn."""
from enum import Enum


class Action(Enum):
    """Enum for the possible actions a player can take at the table."""

    HIT = "hit"
    STAND = "stand"

    @classmethod
    def parse(cls, text: str) -> "Action":
        """
        Read an action typed by a player: the full name or its first letter.

        >>> Action.parse(" H ")
        <Action.HIT: 'hit'>
        """
        choice = text.strip().lower()
        for action in cls:
            if choice in (action.value, action.value[0]):
                return action
        raise ValueError(f"Unknown action: {text!r}")
