from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .agent_utils import AgentMetrics
from .agents.basic import BasicStrategyAgent
from .cards import Shoe
from .env import BlackjackTable
from .rules import Rules
from .stats import GameStats
from .types import Action, HandView, Observation, parse_action


@dataclass
class SimMetrics:
    rounds: int
    players: int
    decisions: int
    invalid_decisions: int
    invalid_rate: float
    hit_rate: float
    mistakes: int
    mistake_rate: float
    skipped_turn_rounds: int
    # threshold reshuffles inside a round; collect rewinds the shoe every round
    mid_round_reshuffles: int


def _baseline_observation(decision: Dict, num_players: int) -> Observation:
    return Observation(
        player=HandView(
            owner="",
            cards=decision["cards"],
            total=decision["total"],
            is_soft=decision["is_soft"],
        ),
        dealer_upcard=decision["dealer_upcard"],
        player_index=decision["player_index"],
        num_players=num_players,
        allowed_actions=[Action.HIT, Action.STAND],
    )


def run_simulation(
    agent: Any,
    rounds: int = 1000,
    num_players: int = 1,
    seed: int | None = 42,
    rules: Rules | None = None,
    *,
    log_fn: Optional[Callable[[Dict], None]] = None,
) -> Dict:
    """Play ``rounds`` rounds with automated agents and report session metrics.

    Valid decisions are compared with basic strategy; a disagreement counts as
    a mistake.
    """
    rules = rules or Rules()
    shoe = Shoe(rules.num_decks, seed=seed, reshuffle_threshold=rules.reshuffle_threshold, log_fn=log_fn)
    stats = GameStats(num_players, max_players=rules.max_players)
    table = BlackjackTable(shoe, num_players, stats, rules=rules, log_fn=log_fn)
    baseline = BasicStrategyAgent()
    agent_metrics = AgentMetrics()
    mistakes = 0
    skipped = 0
    traces: List[Dict] = []

    for _ in range(rounds):
        summary = table.play_round(agent)
        if summary["turns_skipped"]:
            skipped += 1
        for d in summary["trace"].get("decisions", []):
            agent_metrics.record_decision(d)
            if not d["valid"]:
                continue
            baseline_action = parse_action(baseline.act(_baseline_observation(d, num_players), info={}))
            if baseline_action is None or baseline_action.name != d["decision"]:
                mistakes += 1
        if len(traces) < 10:
            traces.append(summary)

    valid = agent_metrics.decisions - agent_metrics.invalid
    return {
        "track": "sim",
        "metrics": SimMetrics(
            rounds=stats.total_rounds,
            players=num_players,
            decisions=agent_metrics.decisions,
            invalid_decisions=agent_metrics.invalid,
            invalid_rate=agent_metrics.invalid_rate(),
            hit_rate=agent_metrics.hit_rate(),
            mistakes=mistakes,
            mistake_rate=(mistakes / valid) if valid else 0.0,
            skipped_turn_rounds=skipped,
            mid_round_reshuffles=shoe.reshuffles,
        ).__dict__,
        "stats": stats.as_dict(),
        "samples": len(traces),
        "trace_preview": traces,
    }
