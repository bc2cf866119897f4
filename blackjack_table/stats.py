from __future__ import annotations

from typing import Dict, List

from .constants import MAX_PLAYER_COUNT
from .types import Outcome


class GameStats:
    """Per-session tallies for every player and the dealer.

    Cumulative counters only ever grow; the per-round blackjack flags are
    reset by ``record_round_start`` and read during the showdown.
    """

    def __init__(self, num_players: int, max_players: int = MAX_PLAYER_COUNT):
        if num_players < 1 or num_players > max_players:
            raise ValueError(f"num_players must be between 1 and {max_players}, got {num_players}")
        self.num_players = num_players
        self.player_wins: List[int] = [0] * num_players
        self.player_losses: List[int] = [0] * num_players
        self.player_ties: List[int] = [0] * num_players
        self.player_blackjacks: List[int] = [0] * num_players
        self.player_blackjack: List[bool] = [False] * num_players
        self.dealer_wins = 0
        self.dealer_blackjacks = 0
        self.dealer_blackjack = False
        self.total_rounds = 0

    def record_round_start(self) -> None:
        self.player_blackjack = [False] * self.num_players
        self.dealer_blackjack = False

    def record_outcome(self, index: int, outcome: Outcome, blackjack: bool = False) -> None:
        if outcome == Outcome.WIN:
            self.player_wins[index] += 1
            if blackjack:
                self.player_blackjacks[index] += 1
        elif outcome == Outcome.LOSS:
            self.player_losses[index] += 1
        else:
            self.player_ties[index] += 1

    def finalize_round(self) -> None:
        self.total_rounds += 1

    def percentages(self, index: int) -> Dict[str, float]:
        rounds = self.total_rounds
        if rounds == 0:
            return {"win": 0.0, "loss": 0.0, "tie": 0.0}
        return {
            "win": self.player_wins[index] / rounds * 100,
            "loss": self.player_losses[index] / rounds * 100,
            "tie": self.player_ties[index] / rounds * 100,
        }

    def as_dict(self) -> Dict:
        players = []
        for i in range(self.num_players):
            players.append({
                "player": i + 1,
                "wins": self.player_wins[i],
                "losses": self.player_losses[i],
                "ties": self.player_ties[i],
                "blackjacks": self.player_blackjacks[i],
                "percentages": self.percentages(i),
            })
        return {
            "total_rounds": self.total_rounds,
            "players": players,
            "dealer": {"wins": self.dealer_wins, "blackjacks": self.dealer_blackjacks},
        }

    def summary_lines(self) -> List[str]:
        lines = []
        for i in range(self.num_players):
            pct = self.percentages(i)
            lines.append(
                f"Player {i + 1} - Wins: {self.player_wins[i]} ({pct['win']:.2f}%), "
                f"Losses: {self.player_losses[i]} ({pct['loss']:.2f}%), "
                f"Ties: {self.player_ties[i]} ({pct['tie']:.2f}%), "
                f"Blackjacks: {self.player_blackjacks[i]}"
            )
        lines.append(f"Dealer - Wins: {self.dealer_wins} Blackjacks: {self.dealer_blackjacks}")
        return lines
