from blackjack_table.agent_utils import AgentMetrics, parse_dealer_upcard
from blackjack_table.agents import BasicStrategyAgent, ConsoleAgent, DealerMimicAgent, RandomAgent
from blackjack_table.types import Action, HandView, Observation, parse_action


def obs(total, up, is_soft=False, owner="Player 1"):
    return Observation(
        player=HandView(owner=owner, cards=[], total=total, is_soft=is_soft),
        dealer_upcard=up,
        player_index=0,
        num_players=1,
        allowed_actions=[Action.HIT, Action.STAND],
    )


def test_parse_dealer_upcard():
    assert parse_dealer_upcard(obs(12, "AS")) == 11
    assert parse_dealer_upcard(obs(12, "TD")) == 10
    assert parse_dealer_upcard(obs(12, "KD")) == 10
    assert parse_dealer_upcard(obs(12, "6C")) == 6
    assert parse_dealer_upcard(obs(12, "")) == 0


def test_basic_strategy_hard_totals():
    agent = BasicStrategyAgent()
    assert agent.act(obs(11, "TS"), {}) == Action.HIT
    assert agent.act(obs(12, "4S"), {}) == Action.STAND
    assert agent.act(obs(12, "2S"), {}) == Action.HIT
    assert agent.act(obs(16, "6S"), {}) == Action.STAND
    assert agent.act(obs(16, "7S"), {}) == Action.HIT
    assert agent.act(obs(17, "AS"), {}) == Action.STAND


def test_basic_strategy_soft_totals():
    agent = BasicStrategyAgent()
    assert agent.act(obs(17, "5S", is_soft=True), {}) == Action.HIT
    assert agent.act(obs(18, "9S", is_soft=True), {}) == Action.HIT
    assert agent.act(obs(18, "8S", is_soft=True), {}) == Action.STAND
    assert agent.act(obs(19, "TS", is_soft=True), {}) == Action.STAND


def test_dealer_mimic():
    agent = DealerMimicAgent()
    assert agent.act(obs(16, "TS"), {}) == Action.HIT
    assert agent.act(obs(17, "TS"), {}) == Action.STAND
    assert DealerMimicAgent(stand_on=15).act(obs(15, "TS"), {}) == Action.STAND


def test_random_agent_is_seeded_and_legal():
    a = RandomAgent(seed=3)
    b = RandomAgent(seed=3)
    picks_a = [a.act(obs(12, "TS"), {}) for _ in range(20)]
    picks_b = [b.act(obs(12, "TS"), {}) for _ in range(20)]
    assert picks_a == picks_b
    assert set(picks_a) <= {Action.HIT, Action.STAND}


def test_console_agent_normalizes_reply():
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return "  HiT \n"

    info = {}
    decision = ConsoleAgent(input_fn=fake_input).act(obs(12, "TS", owner="Player 2"), info)
    assert decision == "hit"
    assert prompts == ["Player 2: Would you like to hit or stand? "]
    assert info["raw_input"] == "  HiT \n"


def test_parse_action():
    assert parse_action("stand") == Action.STAND
    assert parse_action(" Hit") == Action.HIT
    assert parse_action(Action.HIT) == Action.HIT
    assert parse_action("h") is None
    assert parse_action(None) is None


def test_agent_metrics_rates():
    m = AgentMetrics()
    assert m.invalid_rate() == 0.0
    assert m.hit_rate() == 0.0
    m.record_decision({"decision": "HIT", "valid": True})
    m.record_decision({"decision": "STAND", "valid": True})
    m.record_decision({"decision": "x", "valid": False})
    assert m.decisions == 3
    assert m.invalid_rate() == 1 / 3
    assert m.hit_rate() == 0.5
