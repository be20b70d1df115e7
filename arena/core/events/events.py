"""Battle events and their payloads.

This module defines all engine events that observers can subscribe to.

Event Design Principles:
- Events are immutable dataclasses with rich object payloads
- All events carry the round number they were emitted in
- Events use proper enums instead of magic strings
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..data import BattleResult, Position

if TYPE_CHECKING:
    from ...game.entities.unit import BattleUnit


class EventType(Enum):
    """Types of battle events that observers can subscribe to."""
    # Battle lifecycle
    BATTLE_STARTED = auto()
    BATTLE_ENDED = auto()

    # Turn flow
    TURN_STARTED = auto()
    ROUND_STARTED = auto()

    # Unit events
    UNIT_MOVED = auto()
    UNIT_ATTACKED = auto()
    UNIT_DEFEATED = auto()
    STATUS_EFFECTS_EXPIRED = auto()

    # Logging
    LOG_MESSAGE = auto()


@dataclass(frozen=True)
class GameEvent(ABC):
    """Base class for all battle events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class BattleStarted(GameEvent):
    """Event emitted once rosters are placed and turn order is computed."""
    turn_order: tuple[str, ...]

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.BATTLE_STARTED)


@dataclass(frozen=True)
class BattleEnded(GameEvent):
    """Event emitted when a terminal condition is reached."""
    result: BattleResult
    reason: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.BATTLE_ENDED)


@dataclass(frozen=True)
class TurnStarted(GameEvent):
    """Event emitted when a unit becomes the active unit."""
    unit: "BattleUnit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class RoundStarted(GameEvent):
    """Event emitted when the turn index wraps and a new round begins."""

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ROUND_STARTED)


@dataclass(frozen=True)
class UnitMoved(GameEvent):
    """Event emitted when a unit moves to a new position."""
    unit: "BattleUnit"  # unit.position contains destination after movement
    from_position: Position
    path: tuple[Position, ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_MOVED)


@dataclass(frozen=True)
class UnitAttacked(GameEvent):
    """Event emitted after an attack has been resolved and applied."""
    attacker: "BattleUnit"
    target: "BattleUnit"
    damage: int
    is_crit: bool = False
    distance_bonus: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_ATTACKED)


@dataclass(frozen=True)
class UnitDefeated(GameEvent):
    """Event emitted when a unit's hit points reach zero."""
    unit: "BattleUnit"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_DEFEATED)


@dataclass(frozen=True)
class StatusEffectsExpired(GameEvent):
    """Event emitted when status effects run out on a unit."""
    unit: "BattleUnit"
    effect_ids: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.STATUS_EFFECTS_EXPIRED)


@dataclass(frozen=True)
class LogMessage(GameEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str = "BATTLE"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)
