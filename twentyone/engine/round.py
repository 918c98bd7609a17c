"""
Round engine implementation.

This module provides the RoundEngine class, which runs the rounds of a
multi-player blackjack table: it deals, hands the turn from player to player,
plays the dealer's hand and settles every player against the dealer.

The engine is synchronous. Waiting for a player simply means returning to the
caller with `current_player` set; the next `hit` or `stand` picks the round up
from there.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging
import random

from twentyone.adapters.base import TableAdapter
from twentyone.common.card import Card
from twentyone.common.deck import Deck
from twentyone.common.participant import Participant, Status
from twentyone.constants import BLACKJACK, DEFAULT_CONFIG, INITIAL_CARDS
from twentyone.engine.round_logger import RoundLogger
from twentyone.engine.rules import dealer_wins_round, resolve_outcome
from twentyone.events import EngineEventType, EventEmitter
from twentyone.state.models import (
    GameStage,
    Outcome,
    ParticipantState,
    PlayerResult,
    RoundResult,
    TableState,
)

logger = logging.getLogger("twentyone.engine")


class RoundEngine:
    """
    Engine for one blackjack table.

    Owns the deck, the players in seating order and the dealer. Only three
    calls drive it from outside: `start_round`, `hit` and `stand`. Everything
    else, dealer play and settlement included, follows from those.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        config: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        deck: Optional[Deck] = None,
        event_bus: Optional[EventEmitter] = None,
        adapter: Optional[TableAdapter] = None,
        round_logger: Optional[RoundLogger] = None,
    ):
        """
        Initialize the round engine.

        Args:
            player_names: Names of the players, in seating order
            config: Configuration options, see `twentyone.constants.DEFAULT_CONFIG`
            rng: Random source for shuffling; built from ``config["seed"]`` if omitted
            deck: Deck to play with; a new one is built from `rng` if omitted
            event_bus: Emitter receiving the engine's events
            adapter: Optional presentation adapter
            round_logger: Logger keeping the round history
        """
        if not player_names:
            raise ValueError("At least one player is required")

        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})

        self.players: List[Participant] = [
            Participant.player(name) for name in player_names
        ]
        self.dealer = Participant.dealer(
            self.config.get("dealer_name", "Dealer"),
            self.config.get("dealer_stands_on", DEFAULT_CONFIG["dealer_stands_on"]),
        )

        if rng is None:
            rng = random.Random(self.config.get("seed"))
        self.deck = deck if deck is not None else Deck(rng=rng)

        self.event_bus = event_bus if event_bus is not None else EventEmitter()
        self.round_logger = round_logger if round_logger is not None else RoundLogger()

        self.stage = GameStage.IDLE
        self.round_active = False
        self.rounds_played = 0
        self.last_result: Optional[RoundResult] = None
        self._current_index: Optional[int] = None

        self.adapter = None
        if adapter is not None:
            self.attach_adapter(adapter)

    def attach_adapter(self, adapter: TableAdapter) -> None:
        """
        Connect a presentation adapter: it receives every event and a fresh
        snapshot after every applied change.
        """
        self.detach_adapter()
        self.adapter = adapter
        self._detach_adapter = self.event_bus.on_any(
            lambda event: adapter.notify_game_event(*event)
        )

    def detach_adapter(self) -> None:
        if self.adapter is not None:
            self._detach_adapter()
            self.adapter = None

    @property
    def current_player_index(self) -> Optional[int]:
        return self._current_index

    @property
    def current_player(self) -> Optional[Participant]:
        if self._current_index is None:
            return None
        return self.players[self._current_index]

    @property
    def participants(self) -> List[Participant]:
        return self.players + [self.dealer]

    def start_round(self) -> TableState:
        """
        Start a new round: clear every hand, rebuild and shuffle the deck, deal
        two cards to everybody and give the turn to the first player who still
        has a decision to make.

        Returns:
            Snapshot of the table once control goes back to the caller
        """
        if self.round_active:
            logger.debug("Starting a new round over an unfinished one")

        for participant in self.participants:
            participant.reset_for_round()

        self.stage = GameStage.DEALING
        self.round_active = True
        self._current_index = None
        self.last_result = None

        self.deck.reset()
        self.deck.shuffle()

        round_number = self.rounds_played + 1
        self.round_logger.log_round_start(round_number, [p.name for p in self.players])
        self.event_bus.emit(
            EngineEventType.ROUND_STARTED,
            {
                "round_number": round_number,
                "players": [p.name for p in self.players],
                "dealer": self.dealer.name,
            },
        )

        self._deal_initial_cards()
        self._handle_naturals()
        self.advance_turn()

        self._render()
        return self.snapshot()

    def _deal_initial_cards(self) -> None:
        # Two passes round the table, the dealer last in each pass
        for deal_pass in range(INITIAL_CARDS):
            for player in self.players:
                self._deal_to(player)
            self._deal_to(self.dealer, face_down=deal_pass == 1)

    def _deal_to(self, participant: Participant, face_down: bool = False) -> Card:
        card = self._draw_card()
        participant.receive_card(card)
        self.event_bus.emit(
            EngineEventType.CARD_DEALT,
            {
                "participant": participant.name,
                "role": participant.role.value,
                "card": card.label,
                "face_down": face_down,
                "cards_in_hand": len(participant.hand),
            },
        )
        return card

    def _handle_naturals(self) -> None:
        for player in self.players:
            if player.value() == BLACKJACK:
                player.status = Status.STAND
                player.natural = True
                self.round_logger.log_natural(player.name)
                self.event_bus.emit(
                    EngineEventType.NATURAL_BLACKJACK,
                    {
                        "player": player.name,
                        "cards": [card.label for card in player.hand],
                    },
                )

    def _is_current(self, player: Participant) -> bool:
        return self.round_active and player is self.current_player

    def hit(self, player: Participant) -> bool:
        """
        Give the current player one more card. A total over 21 busts the
        player and passes the turn on.

        Args:
            player: The participant asking for a card

        Returns:
            True if the action was applied, False if it was ignored because it
            did not come from the current player of an active round
        """
        if not self._is_current(player):
            self.round_logger.log_ignored(
                getattr(player, "name", player), "hit", "not the current player"
            )
            return False

        before = player.value()
        card = self._draw_card()
        player.receive_card(card)
        after = player.value()

        self.round_logger.log_action(player.name, "hit", before, after, card.label)
        self.event_bus.emit(
            EngineEventType.PLAYER_ACTION,
            {
                "player": player.name,
                "action": "hit",
                "card": card.label,
                "total": after,
            },
        )

        if player.is_bust():
            player.status = Status.BUST
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED,
                {"participant": player.name, "total": after},
            )
            self.advance_turn()

        self._render()
        return True

    def stand(self, player: Participant) -> bool:
        """
        End the current player's turn on their present total.

        Returns:
            True if the action was applied, False if it was ignored
        """
        if not self._is_current(player):
            self.round_logger.log_ignored(
                getattr(player, "name", player), "stand", "not the current player"
            )
            return False

        player.status = Status.STAND
        total = player.value()
        self.round_logger.log_action(player.name, "stand", total, total)
        self.event_bus.emit(
            EngineEventType.PLAYER_ACTION,
            {"player": player.name, "action": "stand", "total": total},
        )
        self.advance_turn()

        self._render()
        return True

    def advance_turn(self) -> Optional[Participant]:
        """
        Move the turn to the next player who is not done. When no such player
        is left the dealer plays and the round is settled.

        A player still on turn keeps it; only a stand or a bust passes it on.

        Returns:
            The current player, or None once the players are all done
        """
        if self.stage not in (GameStage.DEALING, GameStage.PLAYER_TURNS):
            return None
        current = self.current_player
        if current is not None and not current.is_done():
            return current

        index = 0 if self._current_index is None else self._current_index + 1
        while index < len(self.players) and self.players[index].is_done():
            index += 1

        if index >= len(self.players):
            self._current_index = None
            self._play_dealer_turn()
            return None

        self._current_index = index
        self.stage = GameStage.PLAYER_TURNS
        player = self.players[index]
        self.event_bus.emit(
            EngineEventType.TURN_CHANGED,
            {"player": player.name, "index": index, "total": player.value()},
        )
        return player

    def _play_dealer_turn(self) -> None:
        self.stage = GameStage.DEALER_TURN
        self.round_active = False

        self.event_bus.emit(
            EngineEventType.DEALER_TURN_STARTED,
            {"dealer": self.dealer.name, "total": self.dealer.value()},
        )
        if len(self.dealer.hand) >= INITIAL_CARDS:
            self.event_bus.emit(
                EngineEventType.CARD_REVEALED,
                {
                    "participant": self.dealer.name,
                    "card": self.dealer.hand.cards[1].label,
                    "cards": [card.label for card in self.dealer.hand],
                    "total": self.dealer.value(),
                },
            )

        while self.dealer.should_hit():
            before = self.dealer.value()
            card = self._draw_card()
            self.dealer.receive_card(card)
            after = self.dealer.value()
            self.round_logger.log_action(self.dealer.name, "hit", before, after, card.label)
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION,
                {
                    "dealer": self.dealer.name,
                    "action": "hit",
                    "card": card.label,
                    "total": after,
                },
            )

        total = self.dealer.value()
        if self.dealer.is_bust():
            self.dealer.status = Status.BUST
            self.event_bus.emit(
                EngineEventType.HAND_BUSTED,
                {"participant": self.dealer.name, "total": total},
            )
        else:
            self.dealer.status = Status.STAND
            self.event_bus.emit(
                EngineEventType.DEALER_ACTION,
                {"dealer": self.dealer.name, "action": "stand", "total": total},
            )

        self.resolve_round()

    def resolve_round(self) -> RoundResult:
        """
        Settle every player against the dealer and update the win counters.

        Only valid once the dealer has played; the engine calls it itself at
        the end of the dealer's turn.

        Raises:
            RuntimeError: If the dealer has not played yet this round
        """
        if self.stage is not GameStage.DEALER_TURN:
            raise RuntimeError(f"Cannot resolve a round during {self.stage.name}")

        dealer_total = self.dealer.value()
        dealer_bust = dealer_total > BLACKJACK

        results = []
        for player in self.players:
            total = player.value()
            outcome = resolve_outcome(total, dealer_total)
            if outcome is Outcome.WIN:
                player.wins += 1
            result = PlayerResult(
                name=player.name,
                outcome=outcome,
                total=total,
                dealer_total=dealer_total,
                natural=player.natural,
            )
            results.append(result)
            self.event_bus.emit(EngineEventType.HAND_RESULT, result.to_dict())

        dealer_won = dealer_wins_round((r.outcome for r in results), dealer_total)
        if dealer_won:
            self.dealer.wins += 1

        self.rounds_played += 1
        self.last_result = RoundResult(
            round_number=self.rounds_played,
            results=tuple(results),
            dealer_total=dealer_total,
            dealer_bust=dealer_bust,
            dealer_won_round=dealer_won,
        )
        self.stage = GameStage.RESOLVED
        self.round_active = False

        self.round_logger.log_round_end(
            {r.name: r.outcome.value for r in results}, dealer_total
        )
        self.event_bus.emit(
            EngineEventType.ROUND_ENDED,
            dict(
                self.last_result.to_dict(),
                scores={p.name: p.wins for p in self.participants},
            ),
        )
        return self.last_result

    def _draw_card(self) -> Card:
        if self.deck.is_empty():
            self.deck.reset()
            self.deck.shuffle()
            self.round_logger.log_reshuffle()
            self.event_bus.emit(
                EngineEventType.DECK_RESHUFFLED, {"cards_remaining": self.deck.size}
            )
        return self.deck.draw()

    def snapshot(self) -> TableState:
        """
        Take an immutable snapshot of the table. The dealer's hand is given in
        full whatever the stage.
        """
        return TableState(
            players=tuple(self._participant_state(p) for p in self.players),
            dealer=self._participant_state(self.dealer),
            stage=self.stage,
            round_active=self.round_active,
            current_player_index=self._current_index,
            rounds_played=self.rounds_played,
            deck_remaining=self.deck.size,
            last_result=self.last_result,
        )

    @staticmethod
    def _participant_state(participant: Participant) -> ParticipantState:
        return ParticipantState(
            name=participant.name,
            role=participant.role.value,
            cards=tuple(participant.hand.cards),
            value=participant.value(),
            is_soft=participant.hand.is_soft,
            status=participant.status.value,
            wins=participant.wins,
            natural=participant.natural,
        )

    def _render(self) -> None:
        if self.adapter is not None:
            self.adapter.render_state(self.snapshot())
