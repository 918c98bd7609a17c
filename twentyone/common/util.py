from typing import List


def calculate_chi_square(
    observed_values: List[float], expected_values: List[float]
) -> float:
    """
    Calculate the chi-square statistic given lists of observed and expected values.

    :param observed_values: A list of observed values
    :param expected_values: A list of expected values
    :return: The calculated chi-square statistic
    :raises ValueError: If the observed_values and expected_values lists do not have the same length
    """
    if len(observed_values) != len(expected_values):
        raise ValueError("Observed and expected value lists must have the same length.")

    return sum((o - e) ** 2 / e for o, e in zip(observed_values, expected_values))


def position_counts(decks, card) -> List[int]:
    """
    Count how often `card` sits at each position across a series of decks.

    :param decks: An iterable of card sequences of equal length
    :param card: The card to track
    :return: A list with one count per position
    """
    counts: List[int] = []
    for cards in decks:
        if not counts:
            counts = [0] * len(cards)
        counts[list(cards).index(card)] += 1
    return counts
