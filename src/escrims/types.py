"""
escrims.types — TypedDict schemas for scrim snapshots
=====================================================

This module documents the exact structure of the plain dictionaries
produced by ``escrims.snapshot.scrim_to_snapshot`` and accepted by
``scrim_from_snapshot``. Every value is JSON-compatible: timestamps
are ISO 8601 strings, roles are role names, states are state tags.

    >>> ScrimSnapshot.__annotations__["status"]
    <class 'str'>
"""

from typing import TypedDict, List, Optional


# ============================================
# Roster records
# ============================================

class ApplicationRecord(TypedDict):
    """One stored application.

    Fields
    ------
    application_id : str
        Unique identifier.
    user_id : str
        Applicant.
    rank : int
        Rank snapshot taken when applying.
    latency_ms : int
        Latency snapshot taken when applying.
    status : str
        "PENDING", "ACCEPTED" or "REJECTED".
    rejection_reason : str or None
        Why the application was rejected.
    """
    application_id: str
    user_id: str
    rank: int
    latency_ms: int
    status: str
    rejection_reason: Optional[str]
    created_at: str
    updated_at: str


class AttendanceRecord(TypedDict):
    """One stored attendance; ``role`` is a role name or None."""
    attendance_id: str
    user_id: str
    role: Optional[str]
    status: str               # "PENDING", "CONFIRMED" or "REJECTED"
    requested_at: str
    responded_at: Optional[str]


# ============================================
# Completion statistics
# ============================================

class RosterEntryRecord(TypedDict):
    user_id: str
    role: Optional[str]


class PlayerStatsRecord(TypedDict):
    """Numbers recorded for one participant after the match."""
    user_id: str
    kills: int
    assists: int
    deaths: int
    score: int
    mvp: bool


class CompletionRecord(TypedDict):
    """Summary stored once the scrim is FINISHED.

    Fields
    ------
    players : list of PlayerStatsRecord
        One line per participant, in roster order.
    winner : str or None
        Winning team once declared.
    """
    started_at: Optional[str]
    finished_at: str
    roster: List[RosterEntryRecord]
    players: List[PlayerStatsRecord]
    winner: Optional[str]


# ============================================
# Scrim
# ============================================

class ScrimSnapshot(TypedDict):
    """Complete stored form of a scrim.

    Fields
    ------
    scrim_id : str
        uuid4 identifier.
    game : str
        Game name, e.g. "Valorant".
    format : str
        Format name of that game, e.g. "5v5 Competitive".
    status : str
        State tag, e.g. "LOBBY_FORMED".
    latency_max : int
        Highest accepted latency in ms, -1 for unlimited.
    """
    scrim_id: str
    game: str
    format: str
    status: str
    scheduled_at: str
    rank_min: int
    rank_max: int
    latency_max: int
    slots: int
    required_roles: List[str]
    created_by: Optional[str]
    created_at: str
    matchmaking_strategy: str
    start_window_minutes: int
    started_at: Optional[str]
    applications: List[ApplicationRecord]
    attendances: List[AttendanceRecord]
    completion: Optional[CompletionRecord]
