"""
Battle log management.

Engine components publish ``LogMessage`` events; the LogManager listens for
them and keeps the most recent entries in a bounded buffer that the
presentation layer and snapshots read from.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Iterable, Optional

from ..core.data.game_info import BATTLE_LOG_CAPACITY

if TYPE_CHECKING:
    from ..core.events.event_manager import EventManager


class LogCategory(Enum):
    """Categories for battle log entries."""
    SYSTEM = auto()     # Battle setup, restore
    BATTLE = auto()     # Attacks, deaths, outcome
    MOVEMENT = auto()   # Unit movement
    TURN = auto()       # Turn and round changes
    STATUS = auto()     # Status effect ticks and expiry
    DEBUG = auto()      # Debug messages


@dataclass
class BattleLogEntry:
    """A single battle log entry with metadata."""
    turn: int
    message: str
    category: LogCategory = LogCategory.BATTLE
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the entry for display."""
        parts = []

        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")

        if include_category:
            category_tags = {
                LogCategory.SYSTEM: "SYS",
                LogCategory.BATTLE: "BTL",
                LogCategory.MOVEMENT: "MOV",
                LogCategory.TURN: "TRN",
                LogCategory.STATUS: "STS",
                LogCategory.DEBUG: "DBG",
            }
            parts.append(f"[{category_tags.get(self.category, '???')}]")

        parts.append(self.message)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "turn": self.turn,
            "timestamp": self.timestamp.isoformat(),
            "message": self.message,
            "category": self.category.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BattleLogEntry":
        try:
            category = LogCategory[str(data.get("category", "BATTLE")).upper()]
        except KeyError:
            category = LogCategory.BATTLE

        timestamp = data.get("timestamp")
        return cls(
            turn=int(data.get("turn", 0)),
            message=str(data.get("message", "")),
            category=category,
            timestamp=datetime.fromisoformat(timestamp) if timestamp else datetime.now(),
        )


class LogManager:
    """Stores battle log entries received through the event system."""

    def __init__(
        self,
        event_manager: "EventManager",
        capacity: int = BATTLE_LOG_CAPACITY,
        debug_enabled: bool = False,
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to receive LogMessage events from
            capacity: Maximum number of entries kept; the oldest are dropped
            debug_enabled: Whether DEBUG category messages are stored
        """
        self.entries: deque[BattleLogEntry] = deque(maxlen=capacity)
        self.debug_enabled = debug_enabled
        self.event_manager = event_manager

        from ..core.events import EventType

        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message",
        )

    @property
    def capacity(self) -> Optional[int]:
        return self.entries.maxlen

    def __len__(self) -> int:
        return len(self.entries)

    def _handle_log_message_event(self, event) -> None:
        from ..core.events import LogMessage

        if not isinstance(event, LogMessage):
            return

        try:
            category = LogCategory[event.category.upper()]
        except (KeyError, AttributeError):
            category = LogCategory.SYSTEM

        self.log(event.message, category, turn=event.turn)

    def log(self, message: str, category: LogCategory = LogCategory.BATTLE, turn: int = 0) -> None:
        """Append an entry. DEBUG entries are dropped unless debug is enabled."""
        if category == LogCategory.DEBUG and not self.debug_enabled:
            return
        self.entries.append(BattleLogEntry(turn=turn, message=message, category=category))

    def get_recent(self, count: int = 5) -> list[BattleLogEntry]:
        if count <= 0:
            return []
        return list(self.entries)[-count:]

    def get_messages(self, categories: Optional[set[LogCategory]] = None) -> list[str]:
        """Plain message texts, optionally filtered by category."""
        return [
            entry.message for entry in self.entries
            if categories is None or entry.category in categories
        ]

    def clear(self) -> None:
        self.entries.clear()

    def load(self, entries: Iterable[dict[str, Any]]) -> None:
        """Replace the buffer with serialized entries (oldest first)."""
        self.entries.clear()
        for data in entries:
            self.entries.append(BattleLogEntry.from_dict(data))

    def to_dicts(self, count: Optional[int] = None) -> list[dict[str, Any]]:
        selected = list(self.entries) if count is None else self.get_recent(count)
        return [entry.to_dict() for entry in selected]
