"""
Desktop simulator window using pygame.

Pumps frames into the session controller, maps keyboard and mouse to
intents, and shows the rendered snapshot with a text HUD on top.
"""

import asyncio
import logging
from typing import Optional

import pygame

from krushka.config.settings import Settings
from krushka.core.events import Event, EventType
from krushka.core.state import Phase
from krushka.game.session import SessionController
from krushka.game.snapshot import Snapshot
from krushka.graphics.renderer import SnapshotRenderer

logger = logging.getLogger(__name__)

TEXT_COLOR = (255, 255, 255)
SHADOW_COLOR = (0, 0, 0)
ACCENT_COLOR = (255, 215, 0)
FLASH_MS = 250.0

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)


class SimulatorWindow:
    """
    Main simulator window.

    Keyboard Mapping:
        SPACE / UP / W: Hold to charge, release to jump (start / continue off-field)
        mouse button: Same as SPACE
        RETURN: Continue / restart / stop demo
        P: Pause toggle
        J: Quick jump
        D: Start demo now (menu only)
        ESC / Q: Exit simulator
    """

    def __init__(self, controller: SessionController, settings: Settings) -> None:
        self.controller = controller
        self.settings = settings
        self.renderer = SnapshotRenderer(settings)
        self._buffer = self.renderer.new_buffer()

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self._running = False
        self._frame_count = 0
        self._flash_ms = 0.0

        controller.event_bus.subscribe(EventType.LIFE_LOST, self._on_life_lost)
        controller.event_bus.subscribe(EventType.GAME_RESET, self._on_life_lost)

        logger.info("SimulatorWindow created")

    def _on_life_lost(self, event: Event) -> None:
        self._flash_ms = FLASH_MS

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.settings.simulator.title)

        scale = self.settings.simulator.scale
        size = (self.renderer.width * scale, self.renderer.height * scale)

        flags = pygame.DOUBLEBUF
        if self.settings.simulator.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(size, flags)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 24 * scale)
        self._big_font = pygame.font.SysFont(None, 56 * scale)

        logger.info(f"Pygame initialized: {size[0]}x{size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        queue = self.controller.queue_intent

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                key = event.key
                if key in (pygame.K_ESCAPE, pygame.K_q):
                    self._running = False
                elif key in JUMP_KEYS:
                    queue(EventType.JUMP_START, source="keyboard")
                elif key == pygame.K_RETURN:
                    queue(EventType.CONTINUE, source="keyboard")
                elif key == pygame.K_p:
                    queue(EventType.PAUSE_TOGGLE, source="keyboard")
                elif key == pygame.K_j:
                    queue(EventType.QUICK_JUMP, source="keyboard")
                elif key == pygame.K_d:
                    queue(EventType.DEMO_IDLE_TIMEOUT, source="keyboard")

            elif event.type == pygame.KEYUP:
                if event.key in JUMP_KEYS:
                    queue(EventType.JUMP_RELEASE, source="keyboard")

            elif event.type == pygame.MOUSEBUTTONDOWN:
                queue(EventType.JUMP_START, source="mouse")

            elif event.type == pygame.MOUSEBUTTONUP:
                queue(EventType.JUMP_RELEASE, source="mouse")

    def _render(self, snapshot: Snapshot, delta_ms: float) -> None:
        """Render playfield and HUD."""
        if not self._screen:
            return

        self.renderer.render(self._buffer, snapshot)

        if self._flash_ms > 0:
            self._flash_ms = max(0.0, self._flash_ms - delta_ms)
            self._buffer[:, :, 0] = 255

        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        scale = self.settings.simulator.scale
        if scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        self._render_hud(snapshot)
        pygame.display.flip()

    def _text(self, text: str, center: tuple[int, int], big: bool = False,
              color: tuple[int, int, int] = TEXT_COLOR) -> None:
        font = self._big_font if big else self._font
        if not font:
            return
        x, y = center
        shadow = font.render(text, True, SHADOW_COLOR)
        self._screen.blit(shadow, shadow.get_rect(center=(x + 2, y + 2)))
        surface = font.render(text, True, color)
        self._screen.blit(surface, surface.get_rect(center=center))

    def _render_hud(self, snapshot: Snapshot) -> None:
        w, h = self._screen.get_size()
        cx, cy = w // 2, h // 2
        phase = snapshot.phase

        if phase is Phase.MENU:
            self._text("Krushka", (cx, cy - 100), big=True, color=ACCENT_COLOR)
            self._text("Knight Rider", (cx, cy - 60))
            self._text("Tap or Hold to Jump", (cx, cy - 20))
            self._text("Avoid obstacles!", (cx, cy + 10))
            self._text("START GAME", (cx, cy + 80), color=ACCENT_COLOR)
            if snapshot.demo_countdown_s is not None:
                self._text(f"Demo starts in {snapshot.demo_countdown_s}s", (cx, cy + 120))
            return

        self._text(f"Level {snapshot.current_level + 1}: {snapshot.level_name}"
                   if phase is not Phase.ALL_COMPLETE else "Krushka", (cx, 24))
        self._text(f"Score: {snapshot.score}", (w - 90, 24))
        if snapshot.demo_mode:
            self._text("DEMO MODE", (cx, 54), color=ACCENT_COLOR)
        if snapshot.player is not None and snapshot.player.charging:
            self._text("JUMP POWER", (cx, h - 62))

        if phase is Phase.PAUSED:
            self._text("PAUSED", (cx, cy - 20), big=True)
            self._text("Tap to Resume", (cx, cy + 20))
        elif phase is Phase.LEVEL_COMPLETE:
            self._text(f"Level {snapshot.current_level + 1} Complete!", (cx, cy - 60), big=True)
            self._text(f"Score: {snapshot.score} / {snapshot.target_score}", (cx, cy - 20))
            self._text("Tap for Next Level" if not snapshot.is_last_level else "Tap to Finish",
                       (cx, cy + 20))
        elif phase is Phase.ALL_COMPLETE:
            self._text("Congratulations!", (cx, cy - 80), big=True, color=ACCENT_COLOR)
            self._text(f"You finished all {snapshot.level_count} levels!", (cx, cy - 40))
            self._text(f"Final Score: {snapshot.score}", (cx, cy))
            self._text("Tap to Restart", (cx, cy + 40))

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            delta_ms = float(self._clock.get_time()) if self._clock else 0.0
            self.controller.update(delta_ms)
            self._render(self.controller.snapshot(), delta_ms)

            if self._clock:
                self._clock.tick(self.settings.simulator.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.controller.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
