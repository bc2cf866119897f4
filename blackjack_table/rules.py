from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    DEALER_STAND,
    MAX_HAND_SIZE,
    MAX_PLAYER_COUNT,
    NUMBER_OF_DECKS,
    RESHUFFLE_THRESHOLD,
    STARTING_CARDS,
)


@dataclass(frozen=True)
class Rules:
    num_decks: int = NUMBER_OF_DECKS
    reshuffle_threshold: int = RESHUFFLE_THRESHOLD  # undealt tail left in the shoe
    dealer_stand: int = DEALER_STAND  # dealer draws below this, stands at or above
    starting_cards: int = STARTING_CARDS
    max_hand_size: int = MAX_HAND_SIZE  # one slot stays reserved
    max_players: int = MAX_PLAYER_COUNT
    # dealer blackjack settles the round even when a player also has one;
    # False lets the remaining hands play out before the showdown
    end_round_on_dealer_blackjack: bool = True
