"""Display sinks for table events.

Every sink is a callable taking one event dict (``{"event": ..., ...}``) and
returning nothing; the table never reads anything back.
"""

from __future__ import annotations

import json
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional

from .cards import pretty_label
from .constants import DEAL_PAUSE, DEALER_NAME, HAND_PAUSE, REVEAL_PAUSE, SHUFFLE_PAUSE


class ConsoleDisplay:
    """Render table events as terminal text.

    ``pace`` scales the pauses between deals and reveals; 0 disables them.
    Phase markers are shown only with ``verbose``.
    """

    def __init__(
        self,
        print_fn: Callable[..., None] = print,
        pace: float = 0.0,
        verbose: bool = False,
        sleep_fn: Callable[[float], None] = time.sleep,
    ):
        self.print_fn = print_fn
        self.pace = pace
        self.verbose = verbose
        self.sleep_fn = sleep_fn

    def _pause(self, seconds: float) -> None:
        if self.pace > 0:
            self.sleep_fn(seconds * self.pace)

    def __call__(self, event: Dict) -> None:
        kind = event.get("event")
        handler = getattr(self, f"_on_{kind}", None)
        if handler is not None:
            handler(event)

    def _on_shuffle(self, event: Dict) -> None:
        if event.get("reason") == "exhausted":
            self.print_fn("No more cards to deal, reshuffling.")
        else:
            self.print_fn("\nShuffling the deck...\n")
        self._pause(SHUFFLE_PAUSE)

    def _on_phase(self, event: Dict) -> None:
        if self.verbose:
            self.print_fn(f"[phase] {event.get('phase')}")

    def _on_round_start(self, event: Dict) -> None:
        self.print_fn(f"\n=== Round {event.get('round')} ===")

    def _on_deal(self, event: Dict) -> None:
        self.print_fn(f"{event.get('owner')} was dealt a card. (Cards in hand: {event.get('cards_in_hand')})")
        self._pause(DEAL_PAUSE)

    def _on_deal_complete(self, event: Dict) -> None:
        self.print_fn("Initial deal completed.")

    def _on_reveal(self, event: Dict) -> None:
        if event.get("final"):
            self.print_fn("\n**** HAND REVEAL ****")
            self._pause(REVEAL_PAUSE)
        for view in event.get("hands", []):
            self.print_fn(self.format_hand(view))
            if event.get("final"):
                self._pause(HAND_PAUSE)

    def _on_blackjack(self, event: Dict) -> None:
        self.print_fn(f"{event.get('owner')} has Blackjack!")

    def _on_turn(self, event: Dict) -> None:
        cards = " ".join(pretty_label(c) for c in event.get("cards", []))
        self.print_fn(f"\n{event.get('owner')}'s hand: {cards} (Score: {event.get('total')})")
        self.print_fn(f"Dealer's up card: {pretty_label(event.get('dealer_upcard', ''))}")

    def _on_invalid_decision(self, event: Dict) -> None:
        self.print_fn("Invalid input. Please enter 'hit' or 'stand'.")

    def _on_hit(self, event: Dict) -> None:
        self.print_fn(f"{event.get('owner')} draws {pretty_label(event.get('card', ''))} (Score: {event.get('total')})")

    def _on_card_dropped(self, event: Dict) -> None:
        self.print_fn(f"{event.get('owner')}'s hand is full; {pretty_label(event.get('card', ''))} is discarded.")

    def _on_stand(self, event: Dict) -> None:
        self.print_fn(f"{event.get('owner')} stands at {event.get('total')}.")

    def _on_bust(self, event: Dict) -> None:
        if event.get("owner") == DEALER_NAME:
            self.print_fn(f"Dealer busts with {event.get('total')}!")
        else:
            self.print_fn("You busted! Better luck next time!")

    def _on_dealer_draw(self, event: Dict) -> None:
        self.print_fn(f"Dealer draws {pretty_label(event.get('card', ''))} (Score: {event.get('total')})")

    def _on_outcome(self, event: Dict) -> None:
        self.print_fn(event.get("detail", ""))

    def _on_round_complete(self, event: Dict) -> None:
        self.print_fn("\nRound complete.")
        for line in event.get("lines", []):
            self.print_fn(line)

    def _on_collect(self, event: Dict) -> None:
        self.print_fn("\nCollecting cards back to the shoe...")

    @staticmethod
    def format_hand(view: Dict) -> str:
        cards = " ".join(pretty_label(c) for c in view.get("cards", []))
        if view.get("masked"):
            return f"{view.get('owner')}'s hand: {cards} (Score: XX)"
        return f"{view.get('owner')}'s hand: {cards} (Score: {view.get('total')})"


class JsonlLogger:
    """Append every event as one timestamped JSON line."""

    def __init__(self, path: str):
        self.path = path
        self._fh = open(path, "a", encoding="utf-8")

    def __call__(self, event: Dict) -> None:
        record = dict(event)
        record["timestamp"] = datetime.now().isoformat()
        self._fh.write(json.dumps(record) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()


def fan_out(*sinks: Optional[Callable[[Dict], None]]) -> Optional[Callable[[Dict], None]]:
    """Combine sinks into one; None entries are skipped."""
    active: List[Callable[[Dict], None]] = [s for s in sinks if s is not None]
    if not active:
        return None
    if len(active) == 1:
        return active[0]

    def emit(event: Dict) -> None:
        for sink in active:
            sink(event)

    return emit
