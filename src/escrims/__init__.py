"""
escrims — Scrim lifecycle, organizer and matchmaking core
=========================================================

Coordinates scrims (scheduled practice matches) from recruitment to
completion.

Lifecycle:
    from escrims import Scrim, get_game
    scrim = Scrim(get_game("Valorant"), scheduled_at, rank_min=1000, rank_max=2000)
    scrim.apply("u1", rank=1500, latency_ms=40)   # accepted or stored as rejected
    ...                                           # 10th acceptance forms the lobby
    scrim.confirm_attendance("u1", accepted=True)
    scrim.start()
    stats = scrim.finish()

Organizer:
    from escrims import OrganizerSession, Invite
    session = OrganizerSession(scrim)
    session.execute(Invite(player, valorant.find_role("Duelist")))
    session.undo_last()
    session.confirm()

Matchmaking:
    from escrims import MATCHMAKING
    picked = MATCHMAKING.by_name("MMR").select(candidates, scrim)
"""

from .errors import (
    ScrimError,
    InvalidTransitionError,
    ValidationError,
    DuplicateApplicationError,
    NotFoundError,
    PreconditionError,
    SessionLockedError,
    NothingToUndoError,
)
from .games import (
    Role,
    ScrimFormat,
    Game,
    GAMES,
    GAME_CATALOG,
    StaticGameCatalog,
    LEAGUE_OF_LEGENDS,
    VALORANT,
    COUNTER_STRIKE,
    get_game,
    get_game_by_number,
)
from .players import Player, BehaviorRecord
from .collaborators import UserDirectory, ScrimRepository, NotificationSink, GameCatalog
from ._lifecycle import (
    Scrim,
    ScrimStatus,
    LifecycleEvent,
    ApplicationStatus,
    AttendanceStatus,
    Application,
    Attendance,
    CompletionStats,
    PlayerStats,
    RosterEntry,
    create_state,
)
from ._organizer import (
    OrganizerSession,
    OrganizerAction,
    Invite,
    AssignRole,
    SwapRoles,
    RosterSlot,
)
from ._matchmaking import (
    MatchmakingStrategy,
    RankStrategy,
    LatencyStrategy,
    HistoryStrategy,
    MatchmakingRegistry,
    MATCHMAKING,
)
from ._shared import setup_logging, log_scrim_error, LoggingNotificationSink, InMemoryUserDirectory
from ._persistence import SqliteScrimRepository, ScrimFilters, init_database
from .snapshot import scrim_to_snapshot, scrim_from_snapshot
from .config import EscrimsConfig, load_config

__all__ = [
    # Errors
    "ScrimError",
    "InvalidTransitionError",
    "ValidationError",
    "DuplicateApplicationError",
    "NotFoundError",
    "PreconditionError",
    "SessionLockedError",
    "NothingToUndoError",
    # Catalog
    "Role",
    "ScrimFormat",
    "Game",
    "GAMES",
    "GAME_CATALOG",
    "StaticGameCatalog",
    "LEAGUE_OF_LEGENDS",
    "VALORANT",
    "COUNTER_STRIKE",
    "get_game",
    "get_game_by_number",
    # Players
    "Player",
    "BehaviorRecord",
    # Collaborators
    "UserDirectory",
    "ScrimRepository",
    "NotificationSink",
    "GameCatalog",
    # Lifecycle
    "Scrim",
    "ScrimStatus",
    "LifecycleEvent",
    "ApplicationStatus",
    "AttendanceStatus",
    "Application",
    "Attendance",
    "CompletionStats",
    "PlayerStats",
    "RosterEntry",
    "create_state",
    # Organizer
    "OrganizerSession",
    "OrganizerAction",
    "Invite",
    "AssignRole",
    "SwapRoles",
    "RosterSlot",
    # Matchmaking
    "MatchmakingStrategy",
    "RankStrategy",
    "LatencyStrategy",
    "HistoryStrategy",
    "MatchmakingRegistry",
    "MATCHMAKING",
    # Shared
    "setup_logging",
    "log_scrim_error",
    "LoggingNotificationSink",
    "InMemoryUserDirectory",
    # Persistence
    "SqliteScrimRepository",
    "ScrimFilters",
    "init_database",
    "scrim_to_snapshot",
    "scrim_from_snapshot",
    # Config
    "EscrimsConfig",
    "load_config",
]
__version__ = "1.0.0"
