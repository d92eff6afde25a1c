"""
Memory Spiel - card matching game logic.

The Streamlit app only renders what lives here:
- the deck of cards and the palette they are drawn from
- the game session (flip, compare, match/mismatch, reset, completion)
- generation-keyed deferred flip-backs
"""

from .cards import Card, InvalidPairCount, PALETTE, PAIR_COUNT_CHOICES, deal, validate_pair_count
from .config import get_config
from .scheduler import DeferredTasks
from .session import CardView, GameSession

__version__ = "0.1.0"

__all__ = [
    "Card",
    "CardView",
    "DeferredTasks",
    "GameSession",
    "InvalidPairCount",
    "PALETTE",
    "PAIR_COUNT_CHOICES",
    "deal",
    "get_config",
    "validate_pair_count",
]
