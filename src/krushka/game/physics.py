"""Player kinematics and the hold-to-charge jump.

Coordinates follow the screen: y grows downward and the player's ``y`` is
the feet baseline, so a grounded player sits exactly at ``ground_y`` and a
negative velocity moves upward.

Holding the jump intent builds charge power that sweeps 0 -> 1 -> 0 as a
triangle wave; releasing launches with a velocity interpolated between the
configured minimum and maximum jump strengths.
"""

import logging
from dataclasses import dataclass

from krushka.config.settings import PhysicsSettings

logger = logging.getLogger(__name__)


@dataclass
class JumpCharge:
    """Charge sub-state of the player."""
    charging: bool = False
    power: float = 0.0     # 0..1
    direction: int = 1     # +1 increasing, -1 decreasing

    def clear(self) -> None:
        self.charging = False
        self.power = 0.0
        self.direction = 1


class PhysicsBody:
    """The player: position, vertical velocity and jump charge."""

    def __init__(self, settings: PhysicsSettings):
        self.settings = settings

        self.x = settings.player_x
        self.y = settings.ground_y
        self.width = settings.player_width
        self.height = settings.player_height
        self.velocity_y = 0.0

        self.is_jumping = False
        self.on_ground = True
        self.charge = JumpCharge()

    @property
    def can_launch(self) -> bool:
        """Grounded and not already in a jump."""
        return self.on_ground and not self.is_jumping

    @property
    def charge_power(self) -> float:
        return self.charge.power

    def bounds(self) -> tuple[float, float, float, float]:
        """Axis-aligned box as (left, top, width, height)."""
        return (self.x, self.y - self.height, self.width, self.height)

    def jump_velocity(self, power: float) -> float:
        """Launch velocity for a normalized charge power."""
        power = max(0.0, min(1.0, power))
        s = self.settings
        return s.jump_strength_min + (s.jump_strength_max - s.jump_strength_min) * power

    # Charge state machine

    def start_charge(self) -> bool:
        if not self.can_launch:
            return False
        self.charge.charging = True
        self.charge.power = 0.0
        self.charge.direction = 1
        return True

    def advance_charge(self) -> None:
        """Step the charge triangle wave by one frame."""
        charge = self.charge
        if charge.charging and self.can_launch:
            charge.power += self.settings.charge_rate * charge.direction

            # Reverse at the bounds
            if charge.power >= 1.0:
                charge.power = 1.0
                charge.direction = -1
            elif charge.power <= 0.0:
                charge.power = 0.0
                charge.direction = 1
        elif not charge.charging:
            charge.power = 0.0
            charge.direction = 1

    def release_jump(self) -> bool:
        """Launch with the current charge.

        Returns:
            True if the player left the ground
        """
        if self.can_launch:
            # A quick tap still has power 0 and gets the minimum jump
            self._launch(self.jump_velocity(self.charge.power))
            self.charge.clear()
            return True

        if self.charge.charging:
            # Airborne: drop the charge without jumping
            self.charge.clear()
        return False

    def launch(self, velocity: float) -> bool:
        """Apply a launch velocity directly, bypassing the charge."""
        if not self.can_launch:
            return False
        self._launch(velocity)
        return True

    def quick_jump(self) -> bool:
        """Minimum-strength jump."""
        return self.launch(self.settings.jump_strength_min)

    def _launch(self, velocity: float) -> None:
        self.velocity_y = velocity
        self.is_jumping = True
        self.on_ground = False
        logger.debug(f"Jump launched: vy={velocity:.2f}")

    # Integration

    def tick(self) -> None:
        """Advance one frame: charge, gravity, ground contact."""
        self.advance_charge()

        self.velocity_y += self.settings.gravity
        self.y += self.velocity_y

        if self.y >= self.settings.ground_y:
            self.y = self.settings.ground_y
            self.velocity_y = 0.0
            self.is_jumping = False
            self.on_ground = True
            # A held charge survives landing
            if not self.charge.charging:
                self.charge.power = 0.0
                self.charge.direction = 1
