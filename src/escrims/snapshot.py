# Area: Persistence
"""
escrims.snapshot — Scrim <-> plain dict conversion
==================================================

Converts a Scrim to a JSON-compatible ScrimSnapshot and back. Loading
rebuilds the state object from its tag and installs the stored
collections without replaying transitions, so no events are emitted.

    data = scrim_to_snapshot(scrim)
    json.dumps(data)
    same = scrim_from_snapshot(data)
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Optional

from .collaborators import NotificationSink
from .errors import NotFoundError, ScrimError, ValidationError
from .games import GAME_CATALOG, Game, StaticGameCatalog
from ._lifecycle.application import Application
from ._lifecycle.attendance import Attendance
from ._lifecycle.enums import ApplicationStatus, AttendanceStatus
from ._lifecycle.scrim import Scrim
from ._lifecycle.states import create_state
from ._lifecycle.statistics import CompletionStats, PlayerStats, RosterEntry
from .types import (
    ApplicationRecord,
    AttendanceRecord,
    CompletionRecord,
    ScrimSnapshot,
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


# ============================================
# Scrim -> dict
# ============================================

def scrim_to_snapshot(scrim: Scrim) -> ScrimSnapshot:
    """Serialize a scrim and its roster to a JSON-compatible dict."""
    stats = scrim.completion_stats
    return {
        "scrim_id": scrim.scrim_id,
        "game": scrim.game.name,
        "format": scrim.format.name,
        "status": scrim.status.value,
        "scheduled_at": scrim.scheduled_at.isoformat(),
        "rank_min": scrim.rank_min,
        "rank_max": scrim.rank_max,
        "latency_max": scrim.latency_max,
        "slots": scrim.slots,
        "required_roles": [r.name for r in scrim.required_roles],
        "created_by": scrim.created_by,
        "created_at": scrim.created_at.isoformat(),
        "matchmaking_strategy": scrim.matchmaking_strategy,
        "start_window_minutes": scrim.start_window_minutes,
        "started_at": _iso(scrim.started_at),
        "applications": [_application_record(a) for a in scrim.applications],
        "attendances": [_attendance_record(a) for a in scrim.attendances],
        "completion": _completion_record(stats) if stats else None,
    }


def _application_record(application: Application) -> ApplicationRecord:
    return {
        "application_id": application.application_id,
        "user_id": application.user_id,
        "rank": application.rank,
        "latency_ms": application.latency_ms,
        "status": application.status.value,
        "rejection_reason": application.rejection_reason,
        "created_at": application.created_at.isoformat(),
        "updated_at": application.updated_at.isoformat(),
    }


def _attendance_record(attendance: Attendance) -> AttendanceRecord:
    return {
        "attendance_id": attendance.attendance_id,
        "user_id": attendance.user_id,
        "role": attendance.role.name if attendance.role else None,
        "status": attendance.status.value,
        "requested_at": attendance.requested_at.isoformat(),
        "responded_at": _iso(attendance.responded_at),
    }


def _completion_record(stats: CompletionStats) -> CompletionRecord:
    return {
        "started_at": _iso(stats.started_at),
        "finished_at": stats.finished_at.isoformat(),
        "roster": [{"user_id": e.user_id, "role": e.role} for e in stats.roster],
        "players": [
            {
                "user_id": p.user_id,
                "kills": p.kills,
                "assists": p.assists,
                "deaths": p.deaths,
                "score": p.score,
                "mvp": p.mvp,
            }
            for p in stats.player_stats.values()
        ],
        "winner": stats.winner,
    }


# ============================================
# dict -> Scrim
# ============================================

def scrim_from_snapshot(
    data: Dict[str, Any],
    catalog: StaticGameCatalog = GAME_CATALOG,
    notifier: Optional[NotificationSink] = None,
) -> Scrim:
    """
    Rebuild a scrim from a snapshot.

    Args:
        data: Dict shaped like ScrimSnapshot
        catalog: Catalog used to resolve game, format and role names
        notifier: Optional sink attached to the rebuilt scrim

    Raises:
        ValidationError: If the snapshot is malformed or names an
            unknown game, format, role or state
    """
    try:
        return _load(data, catalog, notifier)
    except ScrimError as e:
        if isinstance(e, ValidationError):
            raise
        raise ValidationError(
            f"Invalid scrim snapshot: {e.message}", scrim_id=data.get("scrim_id")
        ) from e
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(
            f"Invalid scrim snapshot: {e!r}",
            scrim_id=data.get("scrim_id") if isinstance(data, dict) else None,
        ) from e


def _load(data: Dict[str, Any], catalog: StaticGameCatalog,
          notifier: Optional[NotificationSink]) -> Scrim:
    game = catalog.get(data["game"])
    scrim = Scrim(
        game=game,
        fmt=game.find_format(data["format"]),
        scheduled_at=_parse(data["scheduled_at"]),
        rank_min=int(data["rank_min"]),
        rank_max=int(data["rank_max"]),
        latency_max=int(data["latency_max"]),
        slots=int(data["slots"]),
        required_roles=[game.find_role(n) for n in data.get("required_roles", [])],
        created_by=data.get("created_by"),
        matchmaking_strategy=data.get("matchmaking_strategy", "MMR"),
        notifier=notifier,
        start_window_minutes=int(data.get("start_window_minutes", 10)),
        scrim_id=data["scrim_id"],
        created_at=_parse(data["created_at"]),
    )
    applications = [
        _load_application(scrim.scrim_id, r) for r in data.get("applications", [])
    ]
    attendances = [
        _load_attendance(scrim.scrim_id, game, r) for r in data.get("attendances", [])
    ]
    completion = data.get("completion")
    stats = None
    if completion:
        stats = CompletionStats(
            scrim_id=scrim.scrim_id,
            game=game.name,
            format_name=scrim.format.name,
            started_at=_parse(completion.get("started_at")),
            finished_at=_parse(completion["finished_at"]),
            roster=[RosterEntry(user_id=e["user_id"], role=e.get("role"))
                    for e in completion.get("roster", [])],
            player_stats={
                r["user_id"]: _load_player_stats(r) for r in completion.get("players", [])
            },
            winner=completion.get("winner"),
        )
    scrim._restore(
        create_state(data["status"]),
        applications,
        attendances,
        started_at=_parse(data.get("started_at")),
        completion_stats=stats,
    )
    return scrim


def _load_application(scrim_id: str, record: Dict[str, Any]) -> Application:
    return Application(
        scrim_id=scrim_id,
        user_id=record["user_id"],
        rank=int(record["rank"]),
        latency_ms=int(record["latency_ms"]),
        status=ApplicationStatus(record["status"]),
        rejection_reason=record.get("rejection_reason"),
        application_id=record["application_id"],
        created_at=_parse(record["created_at"]),
        updated_at=_parse(record["updated_at"]),
    )


def _load_attendance(scrim_id: str, game: Game, record: Dict[str, Any]) -> Attendance:
    role_name = record.get("role")
    try:
        role = game.find_role(role_name) if role_name else None
    except NotFoundError as e:
        raise ValidationError(e.message, scrim_id=scrim_id) from e
    return Attendance(
        scrim_id=scrim_id,
        user_id=record["user_id"],
        role=role,
        status=AttendanceStatus(record["status"]),
        attendance_id=record["attendance_id"],
        requested_at=_parse(record["requested_at"]),
        responded_at=_parse(record.get("responded_at")),
    )


def _load_player_stats(record: Dict[str, Any]) -> PlayerStats:
    return PlayerStats(
        user_id=record["user_id"],
        kills=int(record.get("kills", 0)),
        assists=int(record.get("assists", 0)),
        deaths=int(record.get("deaths", 0)),
        score=int(record.get("score", 0)),
        mvp=bool(record.get("mvp", False)),
    )
