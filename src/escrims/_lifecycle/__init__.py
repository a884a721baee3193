# Area: Lifecycle
"""
Scrim lifecycle - the aggregate root and its state machine.

This package handles:
- Applications and their automatic acceptance or rejection
- Lobby formation and attendance confirmation
- Start, finish and cancellation
- Completion statistics
"""

from .enums import ScrimStatus, LifecycleEvent, ApplicationStatus, AttendanceStatus
from .application import Application
from .attendance import Attendance
from .statistics import CompletionStats, PlayerStats, RosterEntry
from .states import ScrimState, STATE_CLASSES, create_state
from .scrim import Scrim

__all__ = [
    "ScrimStatus",
    "LifecycleEvent",
    "ApplicationStatus",
    "AttendanceStatus",
    "Application",
    "Attendance",
    "CompletionStats",
    "PlayerStats",
    "RosterEntry",
    "ScrimState",
    "STATE_CLASSES",
    "create_state",
    "Scrim",
]
