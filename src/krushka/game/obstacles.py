"""Obstacle stream: procedural spawning, spacing and scrolling.

Two hazards exist. Pits are holes in the ground the player must not land
in; fires stand on the ground and must be jumped over. New obstacles enter
at the right edge of the field and scroll left at the level speed.

Spacing is measured from ``last_end_x``, the trailing edge recorded when
the most recent obstacle was spawned. It is a watermark rather than a live
position: it does not scroll, and is only pulled left when an obstacle
leaves the field.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from krushka.config.settings import SpawnSettings

logger = logging.getLogger(__name__)


class ObstacleType(Enum):
    PIT = "pit"
    FIRE = "fire"

    @property
    def other(self) -> "ObstacleType":
        return ObstacleType.FIRE if self is ObstacleType.PIT else ObstacleType.PIT


@dataclass
class Obstacle:
    type: ObstacleType
    x: float
    width: float
    height: float

    @property
    def end_x(self) -> float:
        """Trailing (right) edge."""
        return self.x + self.width

    @property
    def off_field(self) -> bool:
        return self.x + self.width < 0


class ObstacleStream:
    """Ordered live obstacles plus the spawn bookkeeping behind them."""

    HISTORY = 3  # Run-length rules look back this many spawns

    def __init__(self, settings: SpawnSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()

        self.obstacles: list[Obstacle] = []
        self.last_end_x = settings.initial_last_end_x
        # Types of the most recent spawns, oldest first
        self._recent: deque[ObstacleType] = deque(maxlen=self.HISTORY)

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self):
        return iter(self.obstacles)

    @property
    def recent_types(self) -> tuple[ObstacleType, ...]:
        return tuple(self._recent)

    @property
    def distance_from_last(self) -> float:
        """Gap between the spawn edge and the last trailing-edge watermark."""
        return self.settings.field_width - self.last_end_x

    @property
    def in_fire_sequence(self) -> bool:
        recent = self._recent
        return (
            len(recent) >= 2
            and recent[-1] is ObstacleType.FIRE
            and recent[-2] is ObstacleType.FIRE
        )

    def reset(self) -> None:
        self.obstacles.clear()
        self.last_end_x = self.settings.initial_last_end_x
        self._recent.clear()

    # Spawning

    def spawn(self, spawn_chance: float) -> Optional[Obstacle]:
        """Roll for a spawn this frame.

        Args:
            spawn_chance: Per-frame probability of attempting a spawn

        Returns:
            The new obstacle, or None when nothing was placed
        """
        if self.rng.random() >= spawn_chance:
            return None

        s = self.settings
        distance = self.distance_from_last
        if distance < s.min_spacing:
            # Never stack obstacles, whatever the dice say
            return None

        in_sequence = self.in_fire_sequence
        obstacle_type = self._choose_type(distance, in_sequence)

        if distance < s.safe_spacing and not in_sequence:
            logger.debug(f"Spawn suppressed: spacing {distance:.1f} < {s.safe_spacing}")
            return None

        assert distance >= s.fire_sequence_spacing, "obstacle spacing below sequence minimum"
        obstacle = self.add(obstacle_type, s.field_width)
        logger.debug(
            f"Spawned {obstacle_type.value} at x={obstacle.x:.1f} "
            f"(spacing {distance:.1f})"
        )
        return obstacle

    def _choose_type(self, distance: float, in_sequence: bool) -> ObstacleType:
        s = self.settings
        recent = self._recent
        rng = self.rng

        # Cap every run at three
        if len(recent) == self.HISTORY and len(set(recent)) == 1:
            return recent[-1].other

        if not in_sequence and rng.random() < s.fire_chance and distance >= s.fire_sequence_spacing:
            return ObstacleType.FIRE
        if not in_sequence and rng.random() < s.pit_chance and distance >= s.min_spacing:
            return ObstacleType.PIT
        if in_sequence and distance >= s.fire_sequence_spacing:
            return ObstacleType.FIRE

        if len(recent) >= 2:
            last, second = recent[-1], recent[-2]
            if last is ObstacleType.PIT and second is ObstacleType.PIT:
                return ObstacleType.FIRE
            if (
                last is ObstacleType.FIRE
                and second is ObstacleType.FIRE
                and distance < s.fire_sequence_spacing
            ):
                return ObstacleType.PIT
            return last.other

        if recent:
            return recent[-1].other

        return ObstacleType.PIT if rng.random() < 0.5 else ObstacleType.FIRE

    def add(self, obstacle_type: ObstacleType, x: float) -> Obstacle:
        """Append an obstacle at x and record it as the latest spawn."""
        s = self.settings
        if obstacle_type is ObstacleType.PIT:
            obstacle = Obstacle(obstacle_type, x, s.pit_width, s.pit_height)
        else:
            obstacle = Obstacle(obstacle_type, x, s.obstacle_width, s.obstacle_height)

        self.obstacles.append(obstacle)
        self.last_end_x = obstacle.end_x
        self._recent.append(obstacle_type)
        return obstacle

    # Lifecycle

    def tick(self, speed: float) -> int:
        """Scroll every obstacle left and drop the ones that left the field.

        Returns:
            Number of obstacles removed
        """
        for obstacle in self.obstacles:
            obstacle.x -= speed

        kept = []
        for obstacle in self.obstacles:
            if obstacle.off_field:
                self.last_end_x = min(self.last_end_x, obstacle.end_x)
            else:
                kept.append(obstacle)

        removed = len(self.obstacles) - len(kept)
        self.obstacles = kept
        return removed

    def remove_at(self, index: int) -> Obstacle:
        """Remove one obstacle by position (grace removal)."""
        return self.obstacles.pop(index)
