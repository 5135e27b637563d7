"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Every group is frozen: the session controller receives one immutable
Settings object at construction and never reads ambient state.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from krushka.exceptions import ConfigurationError

Color = tuple[int, int, int]


class PhysicsSettings(BaseModel):
    """Player kinematics, per-frame units."""

    model_config = ConfigDict(frozen=True)

    gravity: float = Field(default=0.8, gt=0)
    # Negative = upward. MIN is the weakest jump, MAX the strongest.
    jump_strength_min: float = -15.0
    jump_strength_max: float = -28.0
    charge_rate: float = Field(default=0.02, gt=0, le=1)  # ~0.8s to full at 60fps

    ground_y: float = 350.0
    player_width: float = 40.0
    player_height: float = 50.0
    player_x: float = 380.0  # Centered on an 800px field

    @model_validator(mode="after")
    def _check_jump_order(self) -> "PhysicsSettings":
        if not self.jump_strength_max < self.jump_strength_min < 0:
            raise ValueError(
                "jump strengths must be negative with max stronger than min"
            )
        return self


class SpawnSettings(BaseModel):
    """Obstacle sizes and spacing rules."""

    model_config = ConfigDict(frozen=True)

    field_width: float = 800.0
    field_height: float = 450.0

    obstacle_width: float = 40.0   # Fire
    obstacle_height: float = 40.0
    pit_width: float = 80.0
    pit_height: float = 100.0

    # Player max jump distance is roughly 250-300px
    min_spacing: float = 280.0
    safe_spacing: float = 320.0
    fire_sequence_spacing: float = 200.0
    initial_last_end_x: float = -1000.0

    fire_chance: float = Field(default=0.4, ge=0, le=1)
    pit_chance: float = Field(default=0.3, ge=0, le=1)

    spawn_rate_scale: float = 2.0
    demo_spawn_scale: float = 0.85

    @model_validator(mode="after")
    def _check_spacing_order(self) -> "SpawnSettings":
        if not self.fire_sequence_spacing <= self.min_spacing <= self.safe_spacing:
            raise ValueError(
                "spacing must satisfy fire_sequence <= min <= safe"
            )
        return self


class AutopilotSettings(BaseModel):
    """Demo-mode jump policy."""

    model_config = ConfigDict(frozen=True)

    trigger_distance_pit: float = Field(default=180.0, gt=0)  # Pits need a longer run-up
    trigger_distance_fire: float = Field(default=120.0, gt=0)
    charge_min: float = Field(default=0.4, ge=0, le=1)
    charge_max: float = Field(default=0.9, ge=0, le=1)
    jitter: float = Field(default=0.1, ge=0)  # Full width, applied as +/- jitter/2


class SessionSettings(BaseModel):
    """Scoring, lives and timers."""

    model_config = ConfigDict(frozen=True)

    base_speed: float = Field(default=3.0, gt=0)
    lives: int = Field(default=3, ge=1)
    target_score: int = Field(default=750, gt=0)
    score_divisor: float = Field(default=10.0, gt=0)
    demo_speed_scale: float = 0.9
    demo_collisions: bool = False  # Demo plays forever by default
    idle_timeout_ms: float = Field(default=30000.0, gt=0)
    ground_texture_size: float = Field(default=20.0, gt=0)
    frame_ms: float = 1000.0 / 60.0


class LevelConfig(BaseModel):
    """One level's pacing plus its palette."""

    model_config = ConfigDict(frozen=True)

    name: str
    speed_multiplier: float = Field(gt=0)
    spawn_rate_base: float = Field(ge=0, le=1)

    sky_color: Color = (135, 206, 235)
    sky_color_2: Color = (224, 246, 255)
    ground_color: Color = (139, 115, 85)


DEFAULT_LEVELS: tuple[LevelConfig, ...] = (
    LevelConfig(name="Morning", speed_multiplier=1.0, spawn_rate_base=0.008,
                sky_color=(135, 206, 235), sky_color_2=(224, 246, 255),
                ground_color=(139, 115, 85)),
    LevelConfig(name="Day", speed_multiplier=1.2, spawn_rate_base=0.01,
                sky_color=(74, 144, 226), sky_color_2=(135, 206, 235),
                ground_color=(155, 125, 95)),
    LevelConfig(name="Sunrise", speed_multiplier=1.4, spawn_rate_base=0.012,
                sky_color=(255, 107, 53), sky_color_2=(255, 179, 71),
                ground_color=(160, 130, 109)),
    LevelConfig(name="Sunset", speed_multiplier=1.6, spawn_rate_base=0.015,
                sky_color=(139, 0, 0), sky_color_2=(255, 69, 0),
                ground_color=(139, 111, 71)),
    LevelConfig(name="Night", speed_multiplier=1.8, spawn_rate_base=0.018,
                sky_color=(25, 25, 112), sky_color_2=(75, 0, 130),
                ground_color=(92, 74, 55)),
)


class SimulatorSettings(BaseModel):
    """Desktop window settings."""

    model_config = ConfigDict(frozen=True)

    title: str = "Krushka - Knight Rider"
    scale: int = Field(default=1, ge=1)
    fps: int = Field(default=60, gt=0)
    fullscreen: bool = False


class Settings(BaseSettings):
    """Main game settings."""

    model_config = SettingsConfigDict(
        env_prefix="KRUSHKA_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False
    seed: Optional[int] = None

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    spawn: SpawnSettings = Field(default_factory=SpawnSettings)
    autopilot: AutopilotSettings = Field(default_factory=AutopilotSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    simulator: SimulatorSettings = Field(default_factory=SimulatorSettings)
    levels: tuple[LevelConfig, ...] = Field(default=DEFAULT_LEVELS, min_length=1)

    @property
    def level_count(self) -> int:
        """Number of configured levels."""
        return len(self.levels)

    def level_speed(self, index: int) -> float:
        """Scroll speed in pixels per frame for a level."""
        return self.session.base_speed * self.levels[index].speed_multiplier


def load_settings(**overrides) -> Settings:
    """Build settings, turning validation failures into ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
