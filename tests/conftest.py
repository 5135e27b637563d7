import random

import pytest

from krushka.config.settings import (
    LevelConfig,
    PhysicsSettings,
    Settings,
)
from krushka.game.physics import PhysicsBody
from krushka.game.session import SessionController


class ScriptedRandom(random.Random):
    """random.Random whose random() replays a fixed script, then repeats the last value."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)

    def random(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def quiet_settings() -> Settings:
    """Default constants but no random spawning at any level."""
    levels = tuple(
        LevelConfig(name=f"L{i}", speed_multiplier=1.0 + 0.2 * i, spawn_rate_base=0.0)
        for i in range(5)
    )
    return Settings(_env_file=None, levels=levels)


@pytest.fixture
def body(settings) -> PhysicsBody:
    return PhysicsBody(settings.physics)


@pytest.fixture
def controller(quiet_settings) -> SessionController:
    return SessionController(settings=quiet_settings, rng=random.Random(1234))


@pytest.fixture
def fast_charge_body() -> PhysicsBody:
    """Charge rate that lands exactly on the bounds."""
    return PhysicsBody(PhysicsSettings(charge_rate=0.25))
