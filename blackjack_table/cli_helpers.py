"""Helper functions for CLI operations."""

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .constants import JSONL_EXTENSION, MAX_PLAYER_COUNT, REPLAY_TOKENS


def prompt_player_count(
    input_fn: Optional[Callable[[str], str]] = None,
    print_fn: Optional[Callable[..., None]] = None,
    max_players: int = MAX_PLAYER_COUNT,
) -> int:
    """Ask for the number of players until an integer in [1, max_players] arrives."""
    input_fn = input_fn or input
    print_fn = print_fn or print
    while True:
        reply = input_fn(f"Welcome to Blackjack! How many players are there? (1-{max_players}): ")
        try:
            num_players = int(reply.strip())
        except ValueError:
            num_players = 0
        if 1 <= num_players <= max_players:
            return num_players
        print_fn(f"Invalid input. Please enter a number between 1 and {max_players}.")


def prompt_replay(input_fn: Optional[Callable[[str], str]] = None) -> bool:
    """Return True when the answer to the replay question is yes."""
    input_fn = input_fn or input
    answer = input_fn("Would you like to play again? (yes/no): ")
    return answer.strip().lower() in REPLAY_TOKENS


def default_log_path(command: str) -> str:
    """Timestamped JSONL path under ./logs for a run of ``command``."""
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    Path("logs").mkdir(parents=True, exist_ok=True)
    return str(Path("logs") / f"{ts}_{command}{JSONL_EXTENSION}")


class HeartbeatTracker:
    """Print a progress line at most every ``heartbeat_seconds`` during a simulation."""

    def __init__(self, total_rounds: int, heartbeat_seconds: int = 60, print_fn: Callable[..., None] = print):
        self.total_rounds = total_rounds
        self.heartbeat_seconds = heartbeat_seconds
        self.print_fn = print_fn
        self.last_heartbeat = time.monotonic()
        self.start_time = self.last_heartbeat
        self.rounds_seen = 0

    def should_print_heartbeat(self) -> bool:
        """Check if it's time to print a heartbeat."""
        if self.heartbeat_seconds <= 0:
            return False
        now = time.monotonic()
        return now - self.last_heartbeat >= self.heartbeat_seconds

    def __call__(self, event: dict) -> None:
        if event.get("event") != "round_complete":
            return
        self.rounds_seen += 1
        if self.should_print_heartbeat():
            now = time.monotonic()
            elapsed = now - self.start_time
            pct = (self.rounds_seen / self.total_rounds) * 100 if self.total_rounds else 0
            self.print_fn(f"[heartbeat] {elapsed:.0f}s sim: round={self.rounds_seen}/{self.total_rounds} ({pct:.1f}%)")
            self.last_heartbeat = now
