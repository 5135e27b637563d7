"""Configuration for KRUSHKA."""

from .settings import (
    AutopilotSettings,
    LevelConfig,
    PhysicsSettings,
    SessionSettings,
    Settings,
    SimulatorSettings,
    SpawnSettings,
    get_settings,
    load_settings,
)

__all__ = [
    "AutopilotSettings",
    "LevelConfig",
    "PhysicsSettings",
    "SessionSettings",
    "Settings",
    "SimulatorSettings",
    "SpawnSettings",
    "get_settings",
    "load_settings",
]
