from __future__ import annotations

from typing import Any

from ..agent_utils import parse_dealer_upcard
from ..types import Action, Observation


class BasicStrategyAgent:
    """Hit/stand basic strategy for a six-deck shoe, dealer stands on all 17s.

    Notes:
    - Hard and soft totals only; there is no doubling or splitting at this table,
      so hands a full chart would double are hit instead.
    - The dealer's up card is its second card; the hole card is never seen.
    """

    def act(self, observation: Observation, info: Any) -> Action:
        if observation.player.is_soft:
            return self._soft_total_decision(observation)
        return self._hard_total_decision(observation)

    def _soft_total_decision(self, obs: Observation) -> Action:
        up = parse_dealer_upcard(obs)
        total = obs.player.total
        if total <= 17:  # A,6 or lower
            return Action.HIT
        if total == 18:  # A,7
            if up in (9, 10, 11):
                return Action.HIT
            return Action.STAND
        # A,8 or better: stand
        return Action.STAND

    def _hard_total_decision(self, obs: Observation) -> Action:
        up = parse_dealer_upcard(obs)
        total = obs.player.total

        if total <= 11:
            return Action.HIT
        if total == 12:
            if up in (4, 5, 6):
                return Action.STAND
            return Action.HIT
        if 13 <= total <= 16:
            if up in (2, 3, 4, 5, 6):
                return Action.STAND
            return Action.HIT
        return Action.STAND
