"""Table-wide constants and default configuration."""

BLACKJACK = 21

# Dealer draws while below this total and stands on it or above, soft or hard.
DEALER_STANDS_ON = 17

INITIAL_CARDS = 2

# Seats at the table, dealer not included.
MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Number of messages the console event log keeps on screen.
EVENT_LOG_SIZE = 8

DEFAULT_CONFIG = {
    "dealer_name": "Dealer",
    "dealer_stands_on": DEALER_STANDS_ON,
    "seed": None,
    "min_players": MIN_PLAYERS,
    "max_players": MAX_PLAYERS,
}
