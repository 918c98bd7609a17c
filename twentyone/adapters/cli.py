"""
Command-line interface adapter for the round engine.

Renders the table as text and turns engine events into short messages. The
table's presentation rules live here, not in the engine: the
dealer's second card stays face down while the players are still playing, and
a player's cards are only shown to everyone once it is their turn or the round
is over.
"""

from collections import deque
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from twentyone.adapters.base import TableAdapter
from twentyone.common.io_interface import ConsoleIOInterface, IOInterface
from twentyone.constants import EVENT_LOG_SIZE
from twentyone.state.models import ParticipantState, TableState

HIDDEN_CARD = "??"


class CLIAdapter(TableAdapter):
    """
    Console adapter.

    Args:
        io_interface: Where to write; defaults to the console
        hide_other_hands: Hide the cards of players who are not on turn
        log_size: Number of event messages kept in the on-screen log
    """

    def __init__(
        self,
        io_interface: Optional[IOInterface] = None,
        hide_other_hands: bool = True,
        log_size: int = EVENT_LOG_SIZE,
    ):
        self.io_interface = io_interface or ConsoleIOInterface()
        self.hide_other_hands = hide_other_hands
        self.event_log = deque(maxlen=log_size)
        self._unread: List[str] = []
        self.player_messages: Dict[str, str] = {}

    def render_state(self, state: TableState) -> None:
        out = self.io_interface.output
        out("\n=== Table ===")
        out(self._format_dealer(state))

        current = state.current_player
        for player in state.players:
            show = (
                not self.hide_other_hands
                or not state.round_active
                or (current is not None and current.name == player.name)
            )
            out(self._format_player(player, show))

        if self.event_log:
            out("--- log ---")
            for message in self.event_log:
                out(f"  {message}")

        out(self._round_status(state))
        out("=============")

    def _format_dealer(self, state: TableState) -> str:
        dealer = state.dealer
        cards = [card.label for card in dealer.cards]
        if state.round_active and len(cards) > 1:
            cards = cards[:1] + [HIDDEN_CARD] * (len(cards) - 1)
            total = f"{dealer.cards[0].value} + ?"
        else:
            total = str(dealer.value)
        return f"{dealer.name}: {' '.join(cards)} (Total: {total})"

    def _format_player(self, player: ParticipantState, show: bool) -> str:
        if show:
            cards = " ".join(card.label for card in player.cards)
            total = player.value
        else:
            cards = " ".join(HIDDEN_CARD for _ in player.cards)
            total = "?"
        line = f"{player.name}: {cards} (Total: {total})"
        message = self.player_messages.get(player.name)
        if message:
            line += f" - {message}"
        return line

    @staticmethod
    def _round_status(state: TableState) -> str:
        current = state.current_player
        if current is not None:
            return f"{current.name}'s turn: hit or stand."
        result = state.last_result
        if result is None:
            return "Waiting for the next round."
        if result.winners:
            return f"Round winners: {', '.join(result.winners)}."
        if result.dealer_won_round:
            return f"{state.dealer.name} won this round."
        # Every player and the dealer busted
        return "Round tied!"

    def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            self.event_log.append(message)
            self._unread.append(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        if event_type == "ROUND_STARTED":
            self.player_messages.clear()
            return "A new round has started!"

        if event_type == "CARD_DEALT":
            if data["role"] == "dealer":
                if data["face_down"]:
                    return f"{data['participant']} takes a face-down card."
                return f"{data['participant']} receives {data['card']}."
            return f"{data['participant']} receives a card."

        if event_type == "NATURAL_BLACKJACK":
            self.player_messages[data["player"]] = "Blackjack!"
            return f"{data['player']} starts with a blackjack!"

        if event_type == "PLAYER_ACTION":
            if data["action"] == "hit":
                return f"{data['player']} hits ({data['card']})."
            self.player_messages[data["player"]] = f"Stands on {data['total']}."
            return f"{data['player']} stands on {data['total']}."

        if event_type == "HAND_BUSTED":
            self.player_messages[data["participant"]] = f"Bust with {data['total']}."
            return f"{data['participant']} busts with {data['total']}."

        if event_type == "DECK_RESHUFFLED":
            return "Deck empty! Reshuffling."

        if event_type == "CARD_REVEALED":
            return f"{data['participant']} reveals {data['card']}."

        if event_type == "DEALER_ACTION":
            if data["action"] == "hit":
                return f"{data['dealer']} draws {data['card']}."
            return f"{data['dealer']} stays on {data['total']}."

        if event_type == "HAND_RESULT":
            self.player_messages[data["name"]] = self._result_message(data)
            return None

        if event_type == "ROUND_ENDED":
            if data["winners"]:
                return f"Won by: {', '.join(data['winners'])}."
            if data["dealer_won_round"]:
                return "The dealer won the round."
            # Every player and the dealer busted
            return "The round ended in a tie."

        return None

    @staticmethod
    def _result_message(data: Dict[str, Any]) -> str:
        outcome = data["outcome"]
        if outcome == "win":
            if data["natural"]:
                return f"Blackjack! Wins with {data['total']}."
            if data["dealer_total"] > 21:
                return "Wins! The dealer busted."
            return f"Wins with {data['total']} against {data['dealer_total']}."
        if outcome == "push":
            return f"Push on {data['total']}."
        if data["bust"]:
            return "Busted."
        return f"Loses with {data['total']} against {data['dealer_total']}."

    def drain_log(self) -> List[str]:
        """Return the messages logged since the previous call."""
        messages, self._unread = self._unread, []
        return messages

    def render_scoreboard(self, scores: List[tuple]) -> None:
        out = self.io_interface.output
        out("--- score ---")
        for name, wins in scores:
            out(f"{name:<16}{wins:>4}")
