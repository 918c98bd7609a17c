"""
twentyone: a turn-based engine for multi-player blackjack.

One dealer plays against any number of independent players. The engine deals,
sequences player turns, plays the dealer's hand and resolves the round; what
the table looks like is left to a platform adapter.
"""

__version__ = "0.1.0"
