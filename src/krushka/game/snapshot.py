"""Immutable post-tick views handed to the renderer."""

from dataclasses import dataclass
from typing import Optional

from krushka.core.state import Phase
from krushka.game.obstacles import Obstacle, ObstacleType
from krushka.game.physics import PhysicsBody


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    velocity_y: float
    on_ground: bool
    is_jumping: bool
    charging: bool
    charge_power: float

    @classmethod
    def of(cls, body: PhysicsBody) -> "PlayerView":
        return cls(
            x=body.x,
            y=body.y,
            width=body.width,
            height=body.height,
            velocity_y=body.velocity_y,
            on_ground=body.on_ground,
            is_jumping=body.is_jumping,
            charging=body.charge.charging,
            charge_power=body.charge.power,
        )


@dataclass(frozen=True)
class ObstacleView:
    type: ObstacleType
    x: float
    width: float
    height: float

    @classmethod
    def of(cls, obstacle: Obstacle) -> "ObstacleView":
        return cls(obstacle.type, obstacle.x, obstacle.width, obstacle.height)


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs after one tick."""
    phase: Phase
    current_level: int
    level_name: str
    level_count: int
    score: int
    target_score: int
    distance: float
    lives: int
    demo_mode: bool
    player: Optional[PlayerView]
    obstacles: tuple[ObstacleView, ...]
    ground_offset: float
    demo_countdown_s: Optional[int]
    frame: int

    @property
    def charge_power(self) -> float:
        return self.player.charge_power if self.player else 0.0

    @property
    def is_last_level(self) -> bool:
        return self.current_level >= self.level_count - 1
