"""Core framework components for KRUSHKA."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType

__all__ = ["Phase", "PhaseMachine", "EventBus", "Event", "EventType"]
