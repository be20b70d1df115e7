"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions emitted by the battle engine
"""

from .event_manager import EventManager
from .events import (
    GameEvent,
    EventType,
    BattleStarted,
    BattleEnded,
    TurnStarted,
    RoundStarted,
    UnitMoved,
    UnitAttacked,
    UnitDefeated,
    StatusEffectsExpired,
    LogMessage,
)

__all__ = [
    "EventManager",
    "GameEvent",
    "EventType",
    "BattleStarted",
    "BattleEnded",
    "TurnStarted",
    "RoundStarted",
    "UnitMoved",
    "UnitAttacked",
    "UnitDefeated",
    "StatusEffectsExpired",
    "LogMessage",
]
