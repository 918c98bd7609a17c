import pytest

from twentyone.common.card import Card, Suit, Rank
from twentyone.common.hand import Hand


def hand_of(cards, *labels):
    hand = Hand()
    for card in cards(*labels):
        hand.add_card(card)
    return hand


def test_hand_initialization():
    hand = Hand()
    assert hand.cards == []
    assert hand.value() == 0
    assert len(hand) == 0


def test_add_card_keeps_order():
    hand = Hand()
    cards = [Card(Suit.HEARTS, Rank.EIGHT), Card(Suit.CLUBS, Rank.ACE)]
    for card in cards:
        hand.add_card(card)
    assert hand.cards == cards


def test_cards_is_a_copy():
    hand = Hand()
    hand.add_card(Card(Suit.HEARTS, Rank.EIGHT))
    hand.cards.append(Card(Suit.HEARTS, Rank.NINE))
    assert len(hand) == 1


def test_clear():
    hand = Hand()
    hand.add_card(Card(Suit.HEARTS, Rank.EIGHT))
    hand.clear()
    assert hand.cards == []
    assert hand.value() == 0


@pytest.mark.parametrize(
    "labels, total",
    [
        (("10", "9"), 19),
        (("K", "Q", "J"), 30),
        (("2", "3", "4", "5"), 14),
        (("9", "8", "4"), 21),
        (("10", "9", "5"), 24),
    ],
)
def test_value_without_aces_is_the_sum(cards, labels, total):
    hand = hand_of(cards, *labels)
    assert hand.value() == total
    assert hand.value() == sum(card.value for card in hand)


@pytest.mark.parametrize(
    "labels, total",
    [
        (("A", "K"), 21),
        (("A", "A"), 12),
        (("A", "A", "9"), 21),
        (("A", "6"), 17),
        (("A", "6", "10"), 17),
        (("A", "A", "A"), 13),
        (("A", "A", "A", "A"), 14),
        (("A", "9", "A", "K"), 21),
        (("A", "K", "K"), 21),
        (("A", "A", "K", "K"), 22),
    ],
)
def test_value_with_aces(cards, labels, total):
    assert hand_of(cards, *labels).value() == total


def test_value_is_best_total_not_over_21_when_possible(cards):
    # Every possible count of aces at 11, lowest to highest
    for labels in [("A", "A", "9"), ("A", "5", "A"), ("A", "A", "A", "8")]:
        hand = hand_of(cards, *labels)
        aces = sum(1 for card in hand if card.is_ace)
        low = sum(card.value for card in hand) - 10 * aces
        totals = [low + 10 * n for n in range(aces + 1)]
        best = max((t for t in totals if t <= 21), default=low)
        assert hand.value() == best


def test_is_soft(cards):
    assert hand_of(cards, "A", "2").is_soft
    assert hand_of(cards, "A", "6").is_soft
    assert not hand_of(cards, "A", "6", "10").is_soft
    assert not hand_of(cards, "10", "7").is_soft


def test_is_blackjack(cards):
    assert hand_of(cards, "A", "K").is_blackjack
    assert hand_of(cards, "10", "A").is_blackjack
    assert not hand_of(cards, "7", "7", "7").is_blackjack
    assert not hand_of(cards, "A", "9").is_blackjack


def test_is_bust(cards):
    assert hand_of(cards, "10", "9", "5").is_bust
    assert not hand_of(cards, "A", "A", "K", "9").is_bust


def test_hand_repr_and_str():
    hand = Hand()
    card = Card(Suit.HEARTS, Rank.EIGHT)
    hand.add_card(card)
    assert repr(hand) == f"Hand([{card!r}])"
    assert str(hand) == "8♥"


def test_empty_hand_repr():
    assert repr(Hand()) == "Hand([])"
    assert str(Hand()) == ""
