"""Player versus obstacle hit testing."""

from typing import Optional, Sequence

from krushka.game.obstacles import Obstacle, ObstacleType
from krushka.game.physics import PhysicsBody


class CollisionResolver:
    """Finds the first obstacle the player is touching.

    A pit only counts once the player's feet are on (or below) the ground
    line while over its opening; a player still in the air above it is
    safe. Fires use a plain rectangle overlap. The resolver never mutates
    anything, so the life-loss policy stays with the session.
    """

    def __init__(self, ground_y: float):
        self.ground_y = ground_y

    def hits(self, player: PhysicsBody, obstacle: Obstacle) -> bool:
        px, py, pw, ph = player.bounds()
        overlaps_x = px < obstacle.x + obstacle.width and px + pw > obstacle.x

        if obstacle.type is ObstacleType.PIT:
            return overlaps_x and player.y >= self.ground_y

        # Fire stands on the ground line
        fire_top = self.ground_y - obstacle.height
        return (
            overlaps_x
            and py < fire_top + obstacle.height
            and py + ph > fire_top
        )

    def find_index(self, player: PhysicsBody, obstacles: Sequence[Obstacle]) -> Optional[int]:
        """Index of the first colliding obstacle in insertion order."""
        for index, obstacle in enumerate(obstacles):
            if self.hits(player, obstacle):
                return index
        return None

    def check(self, player: PhysicsBody, obstacles: Sequence[Obstacle]) -> Optional[Obstacle]:
        index = self.find_index(player, obstacles)
        return None if index is None else obstacles[index]
