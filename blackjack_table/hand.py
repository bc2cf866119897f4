from __future__ import annotations

from typing import List, Optional, Tuple

from .cards import Card, card_value
from .constants import ACE_HIGH, ACE_LOW, BLACKJACK, DEALER_NAME, MAX_HAND_SIZE


def hand_totals(cards: List[Card]) -> Tuple[int, bool]:
    total = 0
    aces = 0
    for c in cards:
        if c.rank == "A":
            aces += 1
        total += card_value(c.rank)
    # downgrade aces from 11 to 1 as needed
    while total > BLACKJACK and aces > 0:
        total -= ACE_HIGH - ACE_LOW
        aces -= 1
    # soft if at least one ace remains valued as 11
    is_soft = aces > 0
    return total, is_soft


class Hand:
    """Cards held by one participant for the length of a round.

    Holds at most ``max_hand_size - 1`` cards; anything past that, or an empty
    card, is dropped without complaint.
    """

    def __init__(self, owner: str, max_hand_size: int = MAX_HAND_SIZE):
        self.owner = owner
        self.max_hand_size = max_hand_size
        self.cards: List[Card] = []

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    @property
    def is_dealer(self) -> bool:
        return self.owner == DEALER_NAME

    def add_card(self, card: Card) -> bool:
        if self.num_cards < self.max_hand_size - 1 and not card.is_empty():
            self.cards.append(card)
            return True
        return False

    def clear(self) -> None:
        self.cards.clear()

    def score(self) -> int:
        total, _ = hand_totals(self.cards)
        return total

    @property
    def is_soft(self) -> bool:
        _, soft = hand_totals(self.cards)
        return soft

    @property
    def is_blackjack(self) -> bool:
        return self.num_cards == 2 and self.score() == BLACKJACK

    @property
    def is_busted(self) -> bool:
        return self.score() > BLACKJACK

    @property
    def up_card(self) -> Optional[Card]:
        # the dealer's first card is the hole card
        if self.num_cards < 2:
            return None
        return self.cards[1]

    def labels(self) -> List[str]:
        return [c.label() for c in self.cards]

    def __repr__(self) -> str:
        return f"Hand({self.owner!r}, {self.labels()}, score={self.score()})"
