"""Paints a session Snapshot into an RGB frame buffer.

Pure shapes only; the simulator window overlays the HUD text. Sprites
use the procedural knight / pit / fire drawings, so no assets are needed.
"""

import logging
import math

import numpy as np

from krushka.config.settings import Settings
from krushka.core.state import Phase
from krushka.game.obstacles import ObstacleType
from krushka.game.snapshot import ObstacleView, PlayerView, Snapshot
from krushka.graphics.primitives import (
    Buffer, dim, draw_rect, fill, new_buffer, vertical_gradient,
)

logger = logging.getLogger(__name__)

# Colors
PIT_EDGE = (74, 74, 74)
PIT_RIM = (26, 26, 26)
PIT_HOLE = (0, 0, 0)
KNIGHT_BODY = (44, 62, 80)
KNIGHT_FACE = (255, 219, 172)
KNIGHT_HELMET = (52, 73, 94)
HORSE = (139, 69, 19)
HEART = (231, 76, 60)
METER_BG = (40, 40, 40)
METER_LOW = (46, 204, 113)
METER_HIGH = (231, 76, 60)
MENU_BG = (26, 26, 46)


class SnapshotRenderer:
    """Draws the playfield for one snapshot."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.width = int(settings.spawn.field_width)
        self.height = int(settings.spawn.field_height)
        self.ground_y = settings.physics.ground_y

    def new_buffer(self) -> Buffer:
        return new_buffer(self.width, self.height)

    def render(self, buffer: Buffer, snapshot: Snapshot) -> None:
        if snapshot.phase is Phase.MENU:
            fill(buffer, MENU_BG)
            self._draw_ground(buffer, snapshot)
            return

        self._draw_sky(buffer, snapshot)
        self._draw_ground(buffer, snapshot)

        for obstacle in snapshot.obstacles:
            self._draw_obstacle(buffer, obstacle, snapshot.frame)

        if snapshot.player is not None:
            self._draw_player(buffer, snapshot.player)

        self._draw_lives(buffer, snapshot.lives)

        if snapshot.player is not None and snapshot.player.charging:
            self._draw_charge_meter(buffer, snapshot.player.charge_power)

        if snapshot.phase is not Phase.PLAYING:
            # Overlay screens sit on a darkened playfield
            dim(buffer, 0.35)

    def _level_colors(self, snapshot: Snapshot):
        index = min(snapshot.current_level, snapshot.level_count - 1)
        return self.settings.levels[index]

    def _draw_sky(self, buffer: Buffer, snapshot: Snapshot) -> None:
        level = self._level_colors(snapshot)
        vertical_gradient(buffer, level.sky_color, level.sky_color_2, 0, int(self.ground_y))

    def _draw_ground(self, buffer: Buffer, snapshot: Snapshot) -> None:
        level = self._level_colors(snapshot)
        top = int(self.ground_y)
        draw_rect(buffer, 0, top, self.width, self.height - top, level.ground_color)

        # Scrolling texture seams
        texture = self.settings.session.ground_texture_size
        seam = tuple(max(0, c - 30) for c in level.ground_color)
        start = -snapshot.ground_offset
        for x in np.arange(start, self.width + texture, texture):
            draw_rect(buffer, x, top, 2, self.height - top, seam)

    def _draw_obstacle(self, buffer: Buffer, obstacle: ObstacleView, frame: int) -> None:
        if obstacle.type is ObstacleType.PIT:
            x, y = obstacle.x, self.ground_y
            draw_rect(buffer, x, y, obstacle.width, obstacle.height, PIT_RIM)
            draw_rect(buffer, x + 5, y + 5, obstacle.width - 10, obstacle.height - 10, PIT_HOLE)
            draw_rect(buffer, x, y, obstacle.width, 3, PIT_EDGE)
            return

        # Flickering fire
        t = frame * 0.16
        outer = (255, int(90 + 40 * math.sin(t)), 0)
        inner = (255, int(180 + 40 * math.sin(t * 1.5)), 40)
        top = self.ground_y - obstacle.height
        draw_rect(buffer, obstacle.x, top, obstacle.width, obstacle.height, outer)
        draw_rect(buffer, obstacle.x + 5, top + 5, obstacle.width - 10, obstacle.height - 10, inner)

    def _draw_player(self, buffer: Buffer, player: PlayerView) -> None:
        x, feet, h = player.x, player.y, player.height
        draw_rect(buffer, x + 10, feet - h + 20, 20, 20, KNIGHT_BODY)
        draw_rect(buffer, x + 12, feet - h + 5, 16, 16, KNIGHT_FACE)
        draw_rect(buffer, x + 10, feet - h, 20, 10, KNIGHT_HELMET)
        draw_rect(buffer, x, feet - 20, player.width, 20, HORSE)
        draw_rect(buffer, x + 5, feet - 5, 8, 5, HORSE)
        draw_rect(buffer, x + 27, feet - 5, 8, 5, HORSE)

    def _draw_lives(self, buffer: Buffer, lives: int) -> None:
        for i in range(lives):
            draw_rect(buffer, 10 + i * 22, 10, 16, 14, HEART)

    def _draw_charge_meter(self, buffer: Buffer, power: float) -> None:
        bar_w = min(300, self.width - 40)
        bar_x = self.width // 2 - bar_w // 2
        bar_y = self.height - 50
        draw_rect(buffer, bar_x, bar_y, bar_w, 20, METER_BG)

        # Green at low power shading to red at full
        color = tuple(
            int(lo + (hi - lo) * power) for lo, hi in zip(METER_LOW, METER_HIGH)
        )
        draw_rect(buffer, bar_x, bar_y, bar_w * power, 20, color)
        draw_rect(buffer, bar_x, bar_y, bar_w, 20, (255, 255, 255), filled=False)
