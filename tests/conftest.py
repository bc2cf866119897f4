from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from blackjack_table.cards import Shoe, parse_card


def stacked_shoe(labels: Sequence[str], seed: int = 0, num_decks: int = 6, log_fn=None) -> Shoe:
    """A shoe whose next draws are ``labels`` in order."""
    shoe = Shoe(num_decks, seed=seed, log_fn=log_fn)
    for i, label in enumerate(labels):
        shoe.cards[i] = parse_card(label)
    shoe.current_card = 0
    return shoe


class ScriptedAgent:
    """Replies from a fixed list per player; stands once the list runs out."""

    def __init__(self, *scripts: Sequence[str]):
        self.scripts: List[List[str]] = [list(s) for s in scripts]
        self.calls: List[int] = []

    def act(self, observation, info):
        self.calls.append(observation.player_index)
        script = self.scripts[observation.player_index]
        if script:
            return script.pop(0)
        return "stand"


class EventRecorder:
    def __init__(self):
        self.events: List[Dict] = []

    def __call__(self, event: Dict) -> None:
        self.events.append(event)

    def of(self, kind: str) -> List[Dict]:
        return [e for e in self.events if e.get("event") == kind]


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()
