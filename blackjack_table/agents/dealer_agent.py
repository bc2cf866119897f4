from __future__ import annotations

from typing import Any

from ..constants import DEALER_STAND
from ..types import Action, Observation


class DealerMimicAgent:
    """Plays a player seat with the dealer's fixed rule: hit below ``stand_on``."""

    def __init__(self, stand_on: int = DEALER_STAND):
        self.stand_on = stand_on

    def act(self, observation: Observation, info: Any) -> Action:
        if observation.player.total < self.stand_on:
            return Action.HIT
        return Action.STAND
