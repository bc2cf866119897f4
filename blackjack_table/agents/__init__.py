from .basic import BasicStrategyAgent
from .console import ConsoleAgent
from .dealer_agent import DealerMimicAgent
from .random_agent import RandomAgent

__all__ = ["BasicStrategyAgent", "ConsoleAgent", "DealerMimicAgent", "RandomAgent"]
