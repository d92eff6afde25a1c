"""
Pytest fixtures for Memory Spiel tests.
"""

import random

import pytest

from memory_game.cards import Card
from memory_game.config import get_config
from memory_game.session import GameSession


class ManualClock:
    """Time source that only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def session(clock, rng) -> GameSession:
    """A random 3-pair game on the manual clock."""
    return GameSession(3, rng=rng, clock=clock, flip_back_delay=1.0)


@pytest.fixture
def fixed_session(session) -> GameSession:
    """
    A 3-pair game with a known layout:

        index:   0  1  2  3  4  5
        content: A  A  B  B  C  C
    """
    session.cards = [
        Card(card_id=900 + i, content=content)
        for i, content in enumerate(["A", "A", "B", "B", "C", "C"])
    ]
    return session


@pytest.fixture(autouse=True)
def fresh_config():
    """get_config() is cached per process; every test starts clean."""
    get_config.cache_clear()
    yield
    get_config.cache_clear()
