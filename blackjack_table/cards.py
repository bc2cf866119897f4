from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .constants import ACE_HIGH, DECK_SIZE, FACE_CARD_VALUE, NUMBER_OF_DECKS, RESHUFFLE_THRESHOLD


RANKS = ["A", "K", "Q", "J", "T", "9", "8", "7", "6", "5", "4", "3", "2"]
SUITS = ["C", "D", "H", "S"]
SUIT_SYMBOLS = {"C": "♣", "D": "♦", "H": "♥", "S": "♠"}

_RANK_VALUES = {
    "A": ACE_HIGH,
    "K": FACE_CARD_VALUE,
    "Q": FACE_CARD_VALUE,
    "J": FACE_CARD_VALUE,
    "T": 10,
    "9": 9,
    "8": 8,
    "7": 7,
    "6": 6,
    "5": 5,
    "4": 4,
    "3": 3,
    "2": 2,
}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    def is_empty(self) -> bool:
        return self.rank == "" or self.suit == ""


def pretty_label(label: str) -> str:
    """'AS' -> 'A♠'; masked ('??') and empty labels pass through."""
    if label == "??" or len(label) < 2:
        return label
    return label[:-1] + SUIT_SYMBOLS.get(label[-1], label[-1])


def card_value(rank: str) -> int:
    """Ace counts high here; hand scoring demotes it when needed."""
    return _RANK_VALUES[rank]


def parse_card(label: str) -> Card:
    """Build a card from a label like 'AS', 'TH' or '10H'."""
    label = label.strip().upper()
    rank, suit = label[:-1], label[-1:]
    if rank == "10":
        rank = "T"
    if rank not in _RANK_VALUES or suit not in SUITS:
        raise ValueError(f"Invalid card label: {label!r}")
    return Card(rank, suit)


class Shoe:
    """Multi-deck card supply dealt front to back through a cursor.

    The shoe is never depleted. Once the cursor reaches
    ``capacity - reshuffle_threshold`` the whole shoe is reshuffled and dealing
    restarts at position 0; the undealt tail stands in for the burned cards.
    """

    def __init__(
        self,
        num_decks: int = NUMBER_OF_DECKS,
        seed: Optional[int] = None,
        reshuffle_threshold: int = RESHUFFLE_THRESHOLD,
        log_fn: Optional[Callable[[Dict], None]] = None,
    ):
        if num_decks < 1:
            raise ValueError(f"num_decks must be at least 1, got {num_decks}")
        capacity = DECK_SIZE * num_decks
        if reshuffle_threshold < 0 or reshuffle_threshold >= capacity:
            raise ValueError(
                f"reshuffle_threshold must be in [0, {capacity}), got {reshuffle_threshold}"
            )
        self.num_decks = num_decks
        self.reshuffle_threshold = reshuffle_threshold
        self.rng = random.Random(seed)
        self.log_fn = log_fn
        self.reshuffles = 0
        self.current_card = 0
        self.cards: List[Card] = []
        self._build()

    @property
    def capacity(self) -> int:
        return DECK_SIZE * self.num_decks

    def _build(self):
        self.cards = [Card(rank, suit) for _ in range(self.num_decks) for suit in SUITS for rank in RANKS]
        self.shuffle(reason="initial")

    def _emit(self, event: Dict) -> None:
        if self.log_fn is not None:
            self.log_fn(event)

    def shuffle(self, reason: str = "manual") -> None:
        # swap each slot with any slot in the full range (not Fisher-Yates)
        n = len(self.cards)
        for i in range(n):
            j = self.rng.randrange(n)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]
        self._emit({"event": "shuffle", "reason": reason, "cards": n})

    def _reshuffle(self, reason: str) -> None:
        self.shuffle(reason=reason)
        self.current_card = 0
        self.reshuffles += 1

    def draw(self) -> Card:
        if self.current_card >= self.capacity - self.reshuffle_threshold:
            self._reshuffle("threshold")
        elif self.current_card >= len(self.cards):
            self._reshuffle("exhausted")
        card = self.cards[self.current_card]
        self.current_card += 1
        return card

    def until_reshuffle(self) -> int:
        return max(self.capacity - self.reshuffle_threshold - self.current_card, 0)
