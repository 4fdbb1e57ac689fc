import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from breaker.balls import Playfield
from breaker.combo import Combo
from breaker.game_config import GameConfig
from breaker.game_entities import Paddle
from breaker.grid import Grid
from breaker.powerups import PowerupManager


class FixedRandom(random.Random):
    """randrange always answers the same value; everything else is seeded."""
    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def randrange(self, *args, **kwargs):
        return self.value


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def cfg():
    return GameConfig()


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def field(cfg):
    """Empty block field; power-up rolls never hit."""
    return Playfield(cfg, Grid(cfg), Paddle(cfg), Combo(), [], PowerupManager(cfg, random.Random(1)),
                     FixedRandom(1))
