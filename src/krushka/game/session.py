"""Session controller: phases, levels, lives and the per-frame pump.

One controller drives one game instance. Input collaborators deliver
intents (directly or queued on the event bus); the frame pump calls
``update`` once per frame; renderers read ``snapshot()`` afterwards.

A Playing frame always runs in this order, since each step reads the
positions produced by the previous one:

    player physics -> autopilot -> spawn -> scroll/prune -> collision
    -> distance/score -> level completion
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, Optional

from krushka.config.settings import LevelConfig, Settings, get_settings
from krushka.core.events import INTENT_TYPES, Event, EventBus, EventType, intent_event
from krushka.core.state import Phase, PhaseMachine
from krushka.game.autopilot import AutopilotAgent
from krushka.game.collision import CollisionResolver
from krushka.game.obstacles import ObstacleStream
from krushka.game.physics import PhysicsBody
from krushka.game.snapshot import ObstacleView, PlayerView, Snapshot

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Mutable counters of a session, reset in place."""
    current_level: int = 0
    score: int = 0
    distance: float = 0.0
    lives: int = 3
    demo_mode: bool = False
    ground_offset: float = 0.0
    idle_ms: float = 0.0
    frame: int = 0


class SessionController:
    """Top-level state machine for a play session."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.settings = settings or get_settings()
        self.rng = rng or random.Random(self.settings.seed)
        self.event_bus = event_bus or EventBus()

        # Separate streams so autopilot draws don't shift obstacle patterns
        self.spawn_rng = random.Random(self.rng.getrandbits(64))
        self.autopilot_rng = random.Random(self.rng.getrandbits(64))

        self.machine = PhaseMachine(Phase.MENU)
        self.machine.add_listener(self._on_phase_changed)

        self.state = SessionState(lives=self.settings.session.lives)
        self.player: PhysicsBody = PhysicsBody(self.settings.physics)
        self.stream: ObstacleStream = ObstacleStream(self.settings.spawn, self.spawn_rng)
        self.resolver = CollisionResolver(self.settings.physics.ground_y)
        self.autopilot = AutopilotAgent(self.settings.autopilot, self.autopilot_rng)

        self._intent_handlers: dict[EventType, Callable[[], bool]] = {
            EventType.JUMP_START: self.jump_start,
            EventType.JUMP_RELEASE: self.jump_release,
            EventType.PAUSE_TOGGLE: self.toggle_pause,
            EventType.CONTINUE: self.continue_or_restart,
            EventType.DEMO_IDLE_TIMEOUT: self.demo_idle_timeout,
            EventType.QUICK_JUMP: self.quick_jump,
        }
        for intent in INTENT_TYPES:
            self.event_bus.subscribe(intent, self._on_intent_event)

        logger.info(
            f"SessionController created: {self.settings.level_count} levels, "
            f"target score {self.settings.session.target_score}"
        )

    # Read-only views

    @property
    def phase(self) -> Phase:
        return self.machine.phase

    @property
    def level(self) -> LevelConfig:
        index = min(self.state.current_level, self.settings.level_count - 1)
        return self.settings.levels[index]

    @property
    def speed(self) -> float:
        """Scroll speed for the current frame."""
        speed = self.settings.level_speed(self.state.current_level)
        if self.state.demo_mode:
            speed *= self.settings.session.demo_speed_scale
        return speed

    @property
    def spawn_chance(self) -> float:
        s = self.settings.spawn
        chance = self.level.spawn_rate_base * s.spawn_rate_scale
        if self.state.demo_mode:
            chance *= s.demo_spawn_scale
        return chance

    def snapshot(self) -> Snapshot:
        state = self.state
        session = self.settings.session

        countdown = None
        if self.phase is Phase.MENU:
            remaining = max(0.0, session.idle_timeout_ms - state.idle_ms)
            countdown = math.ceil(remaining / 1000.0)

        return Snapshot(
            phase=self.phase,
            current_level=state.current_level,
            level_name=self.level.name,
            level_count=self.settings.level_count,
            score=state.score,
            target_score=session.target_score,
            distance=state.distance,
            lives=state.lives,
            demo_mode=state.demo_mode,
            player=PlayerView.of(self.player),
            obstacles=tuple(ObstacleView.of(o) for o in self.stream),
            ground_offset=state.ground_offset,
            demo_countdown_s=countdown,
            frame=state.frame,
        )

    # Intents

    def queue_intent(self, intent: EventType, source: str = "input") -> None:
        """Defer an intent to the start of the next update."""
        self.event_bus.queue_event(intent_event(intent, source=source))

    def handle_intent(self, intent: EventType) -> bool:
        """Apply an intent now.

        Returns:
            True if the intent changed anything
        """
        handler = self._intent_handlers.get(intent)
        if handler is None:
            raise ValueError(f"{intent.name} is not an input intent")

        # Any interaction restarts the idle countdown
        self.state.idle_ms = 0.0

        handled = handler()
        if not handled:
            logger.debug(f"Ignored {intent.name} in {self.phase.name}")
        return handled

    def _on_intent_event(self, event: Event) -> None:
        self.handle_intent(event.type)

    def jump_start(self) -> bool:
        if self.phase is Phase.PLAYING and not self.state.demo_mode:
            return self.player.start_charge()
        return self.continue_or_restart()

    def jump_release(self) -> bool:
        if self.phase is Phase.PLAYING:
            return self.player.release_jump()
        return False

    def quick_jump(self) -> bool:
        if self.phase is Phase.PLAYING and not self.state.demo_mode:
            return self.player.quick_jump()
        return False

    def toggle_pause(self) -> bool:
        if self.phase is Phase.PLAYING:
            return self.machine.transition(Phase.PAUSED)
        if self.phase is Phase.PAUSED:
            return self.machine.transition(Phase.PLAYING)
        return False

    def continue_or_restart(self) -> bool:
        phase = self.phase
        if phase is Phase.MENU:
            return self.start(demo=False)
        if phase is Phase.PLAYING and self.state.demo_mode:
            return self.stop_demo()
        if phase is Phase.PAUSED:
            return self.machine.transition(Phase.PLAYING)
        if phase is Phase.LEVEL_COMPLETE:
            return self.next_level()
        if phase is Phase.ALL_COMPLETE:
            return self.restart_game()
        return False

    def demo_idle_timeout(self) -> bool:
        if self.phase is Phase.MENU:
            return self.start(demo=True)
        return False

    # Transitions

    def start(self, demo: bool = False) -> bool:
        """Start a fresh run from the menu."""
        if self.phase is not Phase.MENU:
            return False

        self._reset_run()
        self.state.demo_mode = demo
        logger.info(f"Starting run (demo={demo})")
        return self.machine.transition(Phase.PLAYING)

    def stop_demo(self) -> bool:
        if not self.state.demo_mode:
            return False
        self.state.demo_mode = False
        self.state.idle_ms = 0.0
        logger.info("Demo stopped")
        return self.machine.transition(Phase.MENU)

    def next_level(self) -> bool:
        """Leave the level-complete screen."""
        if self.phase is not Phase.LEVEL_COMPLETE:
            return False

        self.state.current_level += 1
        if self.state.current_level >= self.settings.level_count:
            logger.info(f"All levels complete, final score {self.state.score}")
            return self.machine.transition(Phase.ALL_COMPLETE)

        self._begin_level()
        return self.machine.transition(Phase.PLAYING)

    def restart_game(self) -> bool:
        if self.phase is not Phase.ALL_COMPLETE:
            return False
        self._reset_run()
        self.state.demo_mode = False
        return self.machine.transition(Phase.PLAYING)

    def _reset_run(self) -> None:
        self.state.current_level = 0
        self.state.lives = self.settings.session.lives
        self._begin_level()

    def _begin_level(self) -> None:
        """Fresh player, obstacles and distance for the current level."""
        self.state.distance = 0.0
        self.state.score = 0
        self.player = PhysicsBody(self.settings.physics)
        self.stream = ObstacleStream(self.settings.spawn, self.spawn_rng)

    def _on_phase_changed(self, old: Phase, new: Phase) -> None:
        self.event_bus.emit(Event(
            EventType.PHASE_CHANGED,
            data={"old": old, "new": new},
            source="session",
        ))

    # Frame pump

    def update(self, delta_ms: Optional[float] = None) -> None:
        """Advance the session by one frame.

        Args:
            delta_ms: Wall time since the previous frame; only the idle
                timer uses it, the simulation steps a fixed frame.
        """
        if delta_ms is None:
            delta_ms = self.settings.session.frame_ms

        self.event_bus.process_queue()

        phase = self.phase
        if phase is Phase.PAUSED:
            return

        self.state.frame += 1
        if phase is Phase.PLAYING:
            self._play_frame()
            return

        texture = self.settings.session.ground_texture_size
        self.state.ground_offset = (self.state.ground_offset + 1) % texture

        if phase is Phase.MENU:
            self.state.idle_ms += delta_ms
            if self.state.idle_ms >= self.settings.session.idle_timeout_ms:
                logger.info("Idle timeout, starting demo")
                self.demo_idle_timeout()

    def _play_frame(self) -> None:
        state = self.state
        session = self.settings.session
        speed = self.speed

        self.player.tick()

        if state.demo_mode:
            velocity = self.autopilot.decide(self.player, self.stream.obstacles)
            if velocity is not None:
                self.player.launch(velocity)

        self.stream.spawn(self.spawn_chance)
        self.stream.tick(speed)

        if not state.demo_mode or session.demo_collisions:
            hit = self.resolver.check(self.player, self.stream.obstacles)
            if hit is not None and self._lose_life():
                return

        state.distance += speed
        state.score = math.floor(state.distance / session.score_divisor)
        state.ground_offset = (state.ground_offset + speed) % session.ground_texture_size

        assert 0 < state.lives <= session.lives, f"lives out of range: {state.lives}"
        assert 0 <= state.current_level < self.settings.level_count

        if state.score >= session.target_score:
            self._complete_level()

    def _lose_life(self) -> bool:
        """Apply a collision.

        Returns:
            True if that was the last life and the run was reset
        """
        state = self.state
        state.lives -= 1
        assert state.lives >= 0, "lives went negative"

        if state.lives > 0:
            # Grace: drop the first obstacle still touching the player
            index = self.resolver.find_index(self.player, self.stream.obstacles)
            if index is not None:
                self.stream.remove_at(index)
            logger.info(f"Life lost, {state.lives} left")
            self.event_bus.emit(Event(
                EventType.LIFE_LOST, data={"lives": state.lives}, source="session"
            ))
            return False

        logger.info(f"Out of lives at level {state.current_level}, resetting")
        self._reset_run()
        self.event_bus.emit(Event(EventType.GAME_RESET, source="session"))
        return True

    def _complete_level(self) -> None:
        state = self.state
        self.event_bus.emit(Event(
            EventType.LEVEL_COMPLETED,
            data={"level": state.current_level, "score": state.score},
            source="session",
        ))

        if not state.demo_mode:
            self.machine.transition(Phase.LEVEL_COMPLETE)
            return

        # Demo loops through the levels forever
        state.current_level = (state.current_level + 1) % self.settings.level_count
        logger.info(f"Demo advancing to level {state.current_level}")
        self._begin_level()
