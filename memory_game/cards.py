"""
Cards and dealing.

A card is identified by `card_id`, never by its position in the deck, so
deferred work can target it even after the deck has been replaced.
"""

import itertools
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

PALETTE = ["🐶", "🐱", "🦊", "🐻", "🐼", "🐨", "🦁", "🐸", "🐵", "🐯"]

# Pair counts offered by the UI
PAIR_COUNT_CHOICES = (3, 6, 10)

_ids = itertools.count(1)


class InvalidPairCount(ValueError):
    """Raised when a game is requested with an unusable number of pairs."""


@dataclass(eq=False)
class Card:
    card_id: int
    content: str
    is_face_up: bool = False
    is_matched: bool = False
    flip_count: int = 0  # bumped on every selection

    def __setattr__(self, name, value):
        if name in ("card_id", "content") and name in self.__dict__:
            raise AttributeError(f"Card.{name} is immutable")
        super().__setattr__(name, value)

    def turn_up(self) -> None:
        self.is_face_up = True
        self.flip_count += 1


def validate_pair_count(pair_count: int, palette: Sequence[str] = PALETTE) -> None:
    '''Reject anything that is not an int in 1..len(palette).'''
    if isinstance(pair_count, bool) or not isinstance(pair_count, int):
        raise InvalidPairCount(f"pair count must be an integer, got {pair_count!r}")
    if not 1 <= pair_count <= len(palette):
        raise InvalidPairCount(
            f"pair count must be between 1 and {len(palette)}, got {pair_count}"
        )


def deal(pair_count: int, rng: Optional[random.Random] = None,
         palette: Sequence[str] = PALETTE) -> List[Card]:
    '''Pick pair_count distinct symbols, two cards each, shuffled and face-down.'''
    validate_pair_count(pair_count, palette)
    rng = rng or random.Random()
    symbols = rng.sample(list(palette), pair_count)
    contents = symbols * 2
    rng.shuffle(contents)
    return [Card(card_id=next(_ids), content=c) for c in contents]
