"""Demo-mode autopilot.

Looks at the nearest obstacle ahead of the player and, once it is inside
a type-specific trigger distance, picks a charge power and jumps at once.
Pits trigger earlier than fires and get a stronger jump the closer they
are; fires get a moderate jump regardless of distance. Each obstacle
triggers at most one jump, even if the player lands short of it.
"""

import logging
import random
from typing import Iterable, Optional

from krushka.config.settings import AutopilotSettings
from krushka.game.obstacles import Obstacle, ObstacleType
from krushka.game.physics import PhysicsBody

logger = logging.getLogger(__name__)


class AutopilotAgent:

    def __init__(self, settings: AutopilotSettings, rng: Optional[random.Random] = None):
        self.settings = settings
        self.rng = rng or random.Random()
        # Obstacle of the last launch; no second trigger while it is still ahead
        self._target: Optional[Obstacle] = None

    def nearest_ahead(
        self,
        player: PhysicsBody,
        obstacles: Iterable[Obstacle],
    ) -> tuple[Optional[Obstacle], float]:
        """Nearest obstacle in front of the player's leading edge and its gap."""
        leading_edge = player.x + player.width
        nearest: Optional[Obstacle] = None
        nearest_gap = float("inf")

        for obstacle in obstacles:
            gap = obstacle.x - leading_edge
            if 0 < gap < nearest_gap:
                nearest = obstacle
                nearest_gap = gap

        return nearest, nearest_gap

    def charge_power(self, obstacle_type: ObstacleType, gap: float) -> float:
        """Charge power for an obstacle at the given gap, before jitter."""
        s = self.settings
        span = s.charge_max - s.charge_min

        if obstacle_type is ObstacleType.PIT:
            ratio = max(0.0, min(1.0, gap / s.trigger_distance_pit))
            # Closer pit needs a stronger jump
            return s.charge_min + span * (1 - ratio * 0.5)

        ratio = max(0.0, min(1.0, gap / s.trigger_distance_fire))
        return s.charge_min + span * (0.5 + ratio * 0.3)

    def decide(self, player: PhysicsBody, obstacles: Iterable[Obstacle]) -> Optional[float]:
        """Launch velocity to apply this frame, or None to keep running."""
        if not player.can_launch:
            return None

        nearest, gap = self.nearest_ahead(player, obstacles)
        if nearest is None:
            return None
        if nearest is self._target:
            return None

        s = self.settings
        trigger = (
            s.trigger_distance_pit if nearest.type is ObstacleType.PIT
            else s.trigger_distance_fire
        )
        if gap >= trigger:
            return None

        power = self.charge_power(nearest.type, gap)
        power += (self.rng.random() - 0.5) * s.jitter
        power = max(s.charge_min, min(s.charge_max, power))

        velocity = player.jump_velocity(power)
        self._target = nearest
        logger.debug(
            f"Autopilot jump over {nearest.type.value}: gap={gap:.1f} "
            f"power={power:.2f} vy={velocity:.2f}"
        )
        return velocity
