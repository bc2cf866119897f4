import json

import pytest

from blackjack_table.cli import build_agent, main
from blackjack_table.cli_helpers import HeartbeatTracker, prompt_player_count, prompt_replay
from blackjack_table.display import ConsoleDisplay, JsonlLogger, fan_out


def feeder(*replies):
    replies = list(replies)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return replies.pop(0)

    fake_input.prompts = prompts
    return fake_input


def test_prompt_player_count_retries_until_valid():
    printed = []
    fake = feeder("abc", "5", "0", " 2 ")
    assert prompt_player_count(input_fn=fake, print_fn=printed.append) == 2
    assert len(fake.prompts) == 4
    assert printed == ["Invalid input. Please enter a number between 1 and 3."] * 3


@pytest.mark.parametrize("answer,expected", [("yes", True), ("Y", True), (" y ", True), ("no", False), ("", False), ("yep", False)])
def test_prompt_replay(answer, expected):
    assert prompt_replay(input_fn=feeder(answer)) is expected


def test_build_agent_rejects_unknown_name():
    with pytest.raises(ValueError):
        build_agent("psychic")


def test_console_display_renders_masked_dealer():
    lines = []
    display = ConsoleDisplay(print_fn=lines.append)
    display({
        "event": "reveal",
        "final": False,
        "hands": [
            {"owner": "Player 1", "cards": ["AS", "TH"], "total": 21, "masked": False},
            {"owner": "Dealer", "cards": ["??", "9D"], "total": None, "masked": True},
        ],
    })
    assert lines == ["Player 1's hand: A♠ T♥ (Score: 21)", "Dealer's hand: ?? 9♦ (Score: XX)"]


def test_console_display_pace_uses_sleep():
    naps = []
    display = ConsoleDisplay(print_fn=lambda *a: None, pace=2.0, sleep_fn=naps.append)
    display({"event": "deal", "owner": "Player 1", "cards_in_hand": 1})
    assert naps == [1.0]
    ConsoleDisplay(print_fn=lambda *a: None, sleep_fn=naps.append)({"event": "deal", "owner": "Dealer", "cards_in_hand": 1})
    assert naps == [1.0]


def test_console_display_ignores_unknown_events():
    lines = []
    ConsoleDisplay(print_fn=lines.append)({"event": "something_else"})
    assert lines == []


def test_console_display_reports_discarded_card():
    lines = []
    ConsoleDisplay(print_fn=lines.append)({"event": "card_dropped", "owner": "Player 2", "card": "5S", "total": 21})
    assert lines == ["Player 2's hand is full; 5♠ is discarded."]


def test_jsonl_logger_and_fan_out(tmp_path):
    path = tmp_path / "events.jsonl"
    logger = JsonlLogger(str(path))
    seen = []
    emit = fan_out(None, seen.append, logger)
    emit({"event": "deal", "owner": "Dealer"})
    logger.close()
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert records[0]["event"] == "deal"
    assert "timestamp" in records[0]
    assert seen == [{"event": "deal", "owner": "Dealer"}]
    assert fan_out(None, None) is None


def test_heartbeat_counts_rounds():
    lines = []
    hb = HeartbeatTracker(10, heartbeat_seconds=0, print_fn=lines.append)
    hb({"event": "deal"})
    hb({"event": "round_complete"})
    assert hb.rounds_seen == 1
    assert lines == []


def test_sim_command_prints_metrics(capsys, tmp_path):
    report = tmp_path / "report.json"
    main(["sim", "--rounds", "25", "--players", "2", "--heartbeat-secs", "0", "--report", str(report)])
    out = capsys.readouterr().out
    assert '"rounds": 25' in out
    data = json.loads(report.read_text(encoding="utf-8"))
    assert data["stats"]["total_rounds"] == 25


def test_sim_command_rejects_bad_player_count(capsys):
    with pytest.raises(SystemExit):
        main(["sim", "--rounds", "1", "--players", "5", "--heartbeat-secs", "0"])
    assert "--players" in capsys.readouterr().err


def test_play_command_runs_one_round(monkeypatch, capsys, tmp_path):
    def fake_input(prompt):
        if "hit or stand" in prompt:
            return "stand"
        return "no"

    monkeypatch.setattr("builtins.input", fake_input)
    log = tmp_path / "play.jsonl"
    main(["play", "--players", "1", "--seed", "3", "--pace", "0", "--log-jsonl", str(log)])
    out = capsys.readouterr().out
    assert "Round complete." in out
    assert "Thanks for playing Blackjack! Goodbye!" in out
    events = [json.loads(line)["event"] for line in log.read_text(encoding="utf-8").splitlines()]
    assert events.count("round_complete") == 1
