from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from .agents.basic import BasicStrategyAgent
from .agents.console import ConsoleAgent
from .agents.dealer_agent import DealerMimicAgent
from .agents.random_agent import RandomAgent
from .cards import Shoe
from .cli_helpers import HeartbeatTracker, default_log_path, prompt_player_count, prompt_replay
from .constants import (
    DEALER_STAND,
    DEFAULT_ROUNDS,
    DEFAULT_SIM_PLAYERS,
    DEFAULT_SIM_SEED,
    MAX_PLAYER_COUNT,
    NUMBER_OF_DECKS,
    RESHUFFLE_THRESHOLD,
    SIM_AGENTS,
)
from .display import ConsoleDisplay, JsonlLogger, fan_out
from .env import play_round
from .eval import run_simulation
from .rules import Rules
from .stats import GameStats


def build_agent(name: str, args: argparse.Namespace | None = None) -> Any:
    if name == "console":
        return ConsoleAgent()
    if name == "basic":
        return BasicStrategyAgent()
    if name == "dealer":
        stand_on = getattr(args, "dealer_stand", DEALER_STAND) if args else DEALER_STAND
        return DealerMimicAgent(stand_on=stand_on)
    if name == "random":
        seed = getattr(args, "seed", None) if args else None
        return RandomAgent(seed=seed)
    raise ValueError(f"Unknown agent: {name}")


def build_rules(args: argparse.Namespace) -> Rules:
    return Rules(
        num_decks=args.decks,
        reshuffle_threshold=args.reshuffle_threshold,
        dealer_stand=args.dealer_stand,
        end_round_on_dealer_blackjack=not args.legacy_blackjack_turns,
    )


def _open_event_log(args: argparse.Namespace, command: str):
    log_file = getattr(args, "log_jsonl", None)
    if log_file == "auto":
        log_file = default_log_path(command)
    if not log_file:
        return None
    return JsonlLogger(log_file)


def cmd_play(args: argparse.Namespace) -> None:
    rules = build_rules(args)
    event_log = _open_event_log(args, "play")
    display = ConsoleDisplay(pace=args.pace, verbose=args.verbose)
    log_fn = fan_out(display, event_log)
    try:
        shoe = Shoe(rules.num_decks, seed=args.seed, reshuffle_threshold=rules.reshuffle_threshold, log_fn=log_fn)
        num_players = args.players or prompt_player_count(max_players=rules.max_players)
        stats = GameStats(num_players, max_players=rules.max_players)
        agent = build_agent("console", args)
        play_again = True
        while play_again:
            play_round(shoe, num_players, stats, agent, rules=rules, log_fn=log_fn)
            play_again = prompt_replay()
            if play_again:
                print("\nStarting a new round...")
    except (KeyboardInterrupt, EOFError):
        print("\n[interrupted]")
    finally:
        if event_log is not None:
            event_log.close()
            print(f"event log written to {event_log.path}")
    print("Thanks for playing Blackjack! Goodbye!")


def cmd_sim(args: argparse.Namespace) -> None:
    rules = build_rules(args)
    if args.players < 1 or args.players > rules.max_players:
        raise ValueError(f"--players must be between 1 and {rules.max_players}")
    agent = build_agent(args.agent, args)
    event_log = _open_event_log(args, f"sim_{args.agent}")
    heartbeat = HeartbeatTracker(args.rounds, heartbeat_seconds=args.heartbeat_secs)
    display = ConsoleDisplay(pace=0.0, verbose=True) if args.debug else None
    log_fn = fan_out(heartbeat, display, event_log)
    try:
        result = run_simulation(agent, rounds=args.rounds, num_players=args.players, seed=args.seed, rules=rules, log_fn=log_fn)
    finally:
        if event_log is not None:
            event_log.close()

    if args.report:
        with open(args.report, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
    print(json.dumps(result["metrics"], indent=2))
    print(json.dumps(result["stats"], indent=2))
    if event_log is not None:
        print(f"event log written to {event_log.path}")


def _add_table_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--decks", type=int, default=NUMBER_OF_DECKS, help="Decks in the shoe")
    p.add_argument("--reshuffle-threshold", type=int, default=RESHUFFLE_THRESHOLD, help="Reshuffle once fewer than this many cards remain")
    p.add_argument("--dealer-stand", type=int, default=DEALER_STAND, help="Dealer draws below this total")
    p.add_argument(
        "--legacy-blackjack-turns",
        action="store_true",
        help="When dealer and a player both have Blackjack, still play the other hands out",
    )
    p.add_argument("--log-jsonl", type=str, default=None, help="Append every table event to this JSONL file ('auto' for ./logs)")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(prog="blackjack_table", description="Multi-player Blackjack table")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_play = sub.add_parser("play", help="Play interactively at the terminal")
    p_play.add_argument("--players", type=int, choices=range(1, MAX_PLAYER_COUNT + 1), default=None, help="Skip the player-count prompt")
    p_play.add_argument("--seed", type=int, default=None, help="Seed the shoe for a reproducible game")
    p_play.add_argument("--pace", type=float, default=1.0, help="Scale deal/reveal pauses (0 disables them)")
    p_play.add_argument("--verbose", action="store_true", help="Show round phase markers")
    _add_table_args(p_play)
    p_play.set_defaults(func=cmd_play)

    p_sim = sub.add_parser("sim", help="Run automated rounds and report statistics")
    p_sim.add_argument("--agent", choices=sorted(SIM_AGENTS), default="basic")
    p_sim.add_argument("--rounds", type=int, default=DEFAULT_ROUNDS)
    p_sim.add_argument("--players", type=int, default=DEFAULT_SIM_PLAYERS)
    p_sim.add_argument("--seed", type=int, default=DEFAULT_SIM_SEED)
    p_sim.add_argument("--report", type=str, default=None, help="Write the full result JSON here")
    p_sim.add_argument("--heartbeat-secs", type=int, default=60, help="Print a heartbeat line every N seconds (0 to disable)")
    p_sim.add_argument("--debug", action="store_true", help="Print every table event to stdout")
    _add_table_args(p_sim)
    p_sim.set_defaults(func=cmd_sim)

    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
