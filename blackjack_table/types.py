from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from .constants import HIT_TOKENS, STAND_TOKENS


class Action(Enum):
    HIT = auto()
    STAND = auto()


class Outcome(Enum):
    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


class Phase(Enum):
    DEALING = auto()
    BLACKJACK_CHECK = auto()
    PLAYER_TURNS = auto()
    DEALER_TURN = auto()
    SHOWDOWN = auto()
    COLLECT = auto()


@dataclass
class HandView:
    owner: str
    cards: List[str]
    total: int
    is_soft: bool


@dataclass
class Observation:
    player: HandView
    dealer_upcard: str
    player_index: int
    num_players: int
    allowed_actions: List[Action]
    cards_until_reshuffle: Optional[int] = None


def parse_action(decision) -> Optional[Action]:
    """Map an agent reply to an Action, or None when it is not a valid choice."""
    if isinstance(decision, Action):
        return decision
    if not isinstance(decision, str):
        return None
    token = decision.strip().lower()
    if token in HIT_TOKENS:
        return Action.HIT
    if token in STAND_TOKENS:
        return Action.STAND
    return None
