"""
Settlement rules for a round.

Plain functions of totals; the engine collects the totals and applies them.
"""

from typing import Iterable

from twentyone.constants import BLACKJACK
from twentyone.state.models import Outcome


def resolve_outcome(player_total: int, dealer_total: int) -> Outcome:
    """
    Settle one player's hand against the dealer's.

    A player who busted loses even when the dealer busted too.

    >>> resolve_outcome(24, 24)
    <Outcome.LOSE: 'lose'>
    >>> resolve_outcome(19, 18)
    <Outcome.WIN: 'win'>
    """
    if player_total > BLACKJACK:
        return Outcome.LOSE
    if dealer_total > BLACKJACK:
        return Outcome.WIN
    if player_total > dealer_total:
        return Outcome.WIN
    if player_total == dealer_total:
        return Outcome.PUSH
    return Outcome.LOSE


def dealer_wins_round(outcomes: Iterable[Outcome], dealer_total: int) -> bool:
    """
    Whether the dealer is credited with the round.

    The dealer scores once per round, not once per beaten player, and only when
    no player won and the dealer stayed at 21 or under. Pushes do not stop the
    dealer from taking the round.
    """
    if dealer_total > BLACKJACK:
        return False
    return not any(outcome is Outcome.WIN for outcome in outcomes)
