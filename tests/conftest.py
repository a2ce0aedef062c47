"""Pytest fixtures for round engine tests."""

import pytest
from random import Random

from config import GameConfig
from core.cards import Deck
from core.game import RoundEngine
from helpers import make_hand


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled deck."""
    return Deck(rng=rng)


@pytest.fixture
def game_config():
    """Default table configuration, independent of the environment."""
    return GameConfig(starting_balance=100, rng_seed=None)


@pytest.fixture
def engine(game_config, rng):
    """A new engine awaiting a bet."""
    return RoundEngine(config=game_config, rng=rng)


@pytest.fixture
def dealt_engine(engine):
    """An engine with a round of 10 in play."""
    engine.place_bet(10)
    return engine


@pytest.fixture
def special_hand():
    """One special card: K♠ 7♦ 3♣."""
    return make_hand("K♠", "7♦", "3♣")


@pytest.fixture
def plain_hand():
    """No special cards, remainder 6: 5♥ 9♠ 2♣."""
    return make_hand("5♥", "9♠", "2♣")
