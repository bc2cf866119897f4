"""Shared utilities for agent implementations."""

from __future__ import annotations

from typing import Any, Dict

from .cards import card_value
from .types import Action, Observation


def parse_dealer_upcard(observation: Observation) -> int:
    """Extract dealer upcard value from observation.

    Args:
        observation: Observation containing the dealer upcard label (e.g. 'TS')

    Returns:
        Numeric value of the upcard (11 for Ace, 10 for T/J/Q/K), 0 when unknown
    """
    rank = observation.dealer_upcard[:-1]
    if not rank:
        return 0
    return card_value(rank)


class AgentMetrics:
    """Helper class for tracking agent decisions across a simulation."""

    def __init__(self):
        self.decisions = 0
        self.invalid = 0
        self.hits = 0
        self.stands = 0

    def record_decision(self, decision: Dict[str, Any]) -> None:
        """Record one traced decision from a round summary."""
        self.decisions += 1
        if not decision.get("valid", True):
            self.invalid += 1
        elif decision.get("decision") == Action.HIT.name:
            self.hits += 1
        elif decision.get("decision") == Action.STAND.name:
            self.stands += 1

    def invalid_rate(self) -> float:
        """Calculate invalid decision rate."""
        return (self.invalid / self.decisions) if self.decisions > 0 else 0.0

    def hit_rate(self) -> float:
        """Share of valid decisions that were hits."""
        valid = self.decisions - self.invalid
        return (self.hits / valid) if valid > 0 else 0.0
