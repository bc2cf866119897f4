"""Constants and configuration values for blackjack_table."""

from __future__ import annotations

# Table
MAX_PLAYER_COUNT = 3
MAX_HAND_SIZE = 12
DECK_SIZE = 52
NUMBER_OF_DECKS = 6
STARTING_CARDS = 2
RESHUFFLE_THRESHOLD = 75

# Scoring
BLACKJACK = 21
FACE_CARD_VALUE = 10
ACE_HIGH = 11
ACE_LOW = 1
DEALER_STAND = 17

# Participants
DEALER_NAME = "Dealer"
PLAYER_NAME_FORMAT = "Player {index}"

# Decisions
HIT_TOKENS = {"hit"}
STAND_TOKENS = {"stand"}
REPLAY_TOKENS = {"yes", "y"}

# Display pacing in seconds (console only)
DEAL_PAUSE = 0.5
REVEAL_PAUSE = 2.0
HAND_PAUSE = 1.0
SHUFFLE_PAUSE = 1.0

# Agents
SIM_AGENTS = {"basic", "dealer", "random"}

# Default run parameters
DEFAULT_ROUNDS = 1000
DEFAULT_SIM_SEED = 42
DEFAULT_SIM_PLAYERS = 1

# Event logs
JSONL_EXTENSION = ".jsonl"
