import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import math

import pytest
from pygame.math import Vector2 as Vec2

from sparkbreak.engine.round_controller import RoundController, RoundState
from sparkbreak.engine.tick_driver import TickDriver


@pytest.fixture
def state():
    return RoundState(launch_origin=Vec2(300, 750), angle=math.pi / 4)


@pytest.fixture
def controller():
    c = RoundController(seed=1234)
    c.start_session()
    return c


@pytest.fixture
def driver(controller):
    return TickDriver(controller)
