from .cards import Card, Shoe
from .env import BlackjackTable, play_round
from .hand import Hand
from .rules import Rules
from .stats import GameStats
from .types import Action, Observation, HandView, Outcome, Phase

__all__ = [
    "BlackjackTable",
    "play_round",
    "Card",
    "Shoe",
    "Hand",
    "Rules",
    "GameStats",
    "Action",
    "Observation",
    "HandView",
    "Outcome",
    "Phase",
]
