from __future__ import annotations

from typing import Any, Callable, Optional

from ..types import Observation


class ConsoleAgent:
    """Asks a human at the terminal for each hit/stand decision.

    Returns the trimmed, lower-cased reply; the table rejects anything other
    than ``hit``/``stand`` and asks again.
    """

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None):
        self.input_fn = input_fn or input

    def act(self, observation: Observation, info: Any) -> str:
        reply = self.input_fn(f"{observation.player.owner}: Would you like to hit or stand? ")
        decision = reply.strip().lower()
        if isinstance(info, dict):
            info["raw_input"] = reply
        return decision
