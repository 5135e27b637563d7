"""Simulation core: player physics, obstacles, collisions, autopilot, session."""

from krushka.game.physics import PhysicsBody, JumpCharge
from krushka.game.obstacles import Obstacle, ObstacleStream, ObstacleType
from krushka.game.collision import CollisionResolver
from krushka.game.autopilot import AutopilotAgent
from krushka.game.session import SessionController, SessionState
from krushka.game.snapshot import Snapshot, PlayerView, ObstacleView

__all__ = [
    "PhysicsBody",
    "JumpCharge",
    "Obstacle",
    "ObstacleStream",
    "ObstacleType",
    "CollisionResolver",
    "AutopilotAgent",
    "SessionController",
    "SessionState",
    "Snapshot",
    "PlayerView",
    "ObstacleView",
]
