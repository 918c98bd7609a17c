"""
Session setup for a blackjack table.

A `GameSession` takes the names typed in at the start, checks them, and builds
the one `RoundEngine` the session plays with. The session is an ordinary object
passed to whatever drives the presentation; there is no global table.
"""

import logging
import random
from typing import Any, Dict, Iterable, List, Optional, Tuple

from twentyone.adapters.base import TableAdapter
from twentyone.constants import DEFAULT_CONFIG
from twentyone.engine.round import RoundEngine
from twentyone.events import EventEmitter

logger = logging.getLogger("twentyone.session")


def clean_names(names: Iterable[str]) -> List[str]:
    """
    Strip surrounding whitespace and drop blank entries, keeping order.

    >>> clean_names([" Ana ", "", "Bruno"])
    ['Ana', 'Bruno']
    """
    return [name.strip() for name in names if name and name.strip()]


class GameSession:
    """
    One sitting at the table, from entering the names to leaving.

    Args:
        names: Player names as entered; blanks are ignored
        config: Configuration options, merged over the defaults
        adapter: Optional presentation adapter attached to the engine
        rng: Optional random source for the deck
        event_bus: Optional emitter for the engine's events

    Raises:
        ValueError: If the names are too few, too many or not unique
    """

    def __init__(
        self,
        names: Iterable[str],
        config: Optional[Dict[str, Any]] = None,
        adapter: Optional[TableAdapter] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})

        self.player_names = self.validate_names(names)
        self.adapter = adapter
        self.engine = RoundEngine(
            self.player_names,
            self.config,
            rng=rng,
            event_bus=event_bus,
            adapter=adapter,
        )
        logger.info(f"Session started with players: {self.player_names}")

    def validate_names(self, names: Iterable[str]) -> List[str]:
        cleaned = clean_names(names)
        min_players = self.config.get("min_players", DEFAULT_CONFIG["min_players"])
        max_players = self.config.get("max_players", DEFAULT_CONFIG["max_players"])

        if len(cleaned) < min_players:
            raise ValueError(f"At least {min_players} players are required")
        if len(cleaned) > max_players:
            raise ValueError(f"At most {max_players} players can sit at the table")

        seen = set()
        for name in cleaned:
            key = name.casefold()
            if key in seen:
                raise ValueError(f"Duplicate player name: {name}")
            seen.add(key)

        dealer_name = self.config.get("dealer_name", DEFAULT_CONFIG["dealer_name"])
        if dealer_name.casefold() in seen:
            raise ValueError(f"{dealer_name} is reserved for the dealer")

        return cleaned

    def player(self, name: str):
        """Look up a player by name."""
        for player in self.engine.players:
            if player.name == name:
                return player
        raise KeyError(name)

    def scoreboard(self) -> List[Tuple[str, int]]:
        """Wins per participant, players in seating order then the dealer."""
        return [(p.name, p.wins) for p in self.engine.participants]
