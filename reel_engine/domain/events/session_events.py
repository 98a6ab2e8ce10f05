# reel_engine/domain/events/session_events.py
from enum import Enum, auto
from dataclasses import dataclass

from .event_types import DomainEvent


class SessionEventType(Enum):
    """Event types emitted by a game session."""
    SPIN_STARTED = auto()
    REEL_STOPPED = auto()
    SPIN_COMPLETED = auto()
    SPIN_CANCELLED = auto()
    BIG_WIN = auto()
    BET_CHANGED = auto()
    BALANCE_DEPLETED = auto()


@dataclass
class SessionEvent(DomainEvent):
    """Event representing something that happened during a game session."""
    session_id: str = ""
    machine_id: str = ""

    def __post_init__(self):
        super().__post_init__()

        self.data["session_id"] = self.session_id
        self.data["machine_id"] = self.machine_id
