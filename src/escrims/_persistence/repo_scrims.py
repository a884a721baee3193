# Area: Persistence
"""
escrims._persistence.repo_scrims — Scrims repository
====================================================

SQLite implementation of the ScrimRepository contract. Each row holds
the scrim's JSON snapshot; the remaining columns mirror the fields
that searches filter on.

Every call opens its own connection and runs as one transaction, so a
failed write leaves the table untouched.
"""

from __future__ import annotations
import json
import logging
import sqlite3
from typing import TYPE_CHECKING, List, Optional

from ..collaborators import NotificationSink, ScrimRepository
from ..errors import NotFoundError, ValidationError
from ..games import GAME_CATALOG, StaticGameCatalog
from .._lifecycle.scrim import Scrim
from ..snapshot import scrim_from_snapshot, scrim_to_snapshot
from .database import connect, init_database
from .filters import ScrimFilters

if TYPE_CHECKING:
    from ..config import EscrimsConfig

logger = logging.getLogger("escrims.repository")

_COLUMNS = (
    "game, format, status, scheduled_at, rank_min, rank_max, latency_max, snapshot"
)
_ORDER = "ORDER BY scheduled_at, scrim_id"


class SqliteScrimRepository(ScrimRepository):
    """
    Repository for the scrims table.

    Args:
        db_path: SQLite file created with ``init_database``
        catalog: Catalog used to resolve names when loading
        notifier: Sink attached to every loaded scrim
    """

    def __init__(
        self,
        db_path: str = "escrims.db",
        catalog: StaticGameCatalog = GAME_CATALOG,
        notifier: Optional[NotificationSink] = None,
    ):
        self.db_path = db_path
        self.catalog = catalog
        self.notifier = notifier

    @classmethod
    def from_config(
        cls, config: "EscrimsConfig", notifier: Optional[NotificationSink] = None
    ) -> "SqliteScrimRepository":
        """Initialize ``config.db_path`` and return a repository on it."""
        init_database(config.db_path)
        return cls(config.db_path, notifier=notifier)

    # ── Writes ───────────────────────────────────────────────

    def save(self, scrim: Scrim) -> None:
        """
        Store a new scrim.

        Raises:
            ValidationError: If a scrim with the same id is already stored
        """
        query = f"INSERT INTO scrims (scrim_id, {_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
        try:
            with connect(self.db_path) as conn:
                conn.execute(query, (scrim.scrim_id,) + self._column_values(scrim))
        except sqlite3.IntegrityError as e:
            raise ValidationError(
                f"Scrim {scrim.scrim_id} is already stored",
                scrim_id=scrim.scrim_id, state=scrim.status.value,
            ) from e
        logger.info(f"[{scrim.scrim_id}] Saved ({scrim.status.value})")

    def update(self, scrim: Scrim) -> None:
        """
        Overwrite a stored scrim.

        Raises:
            NotFoundError: If the scrim was never saved
        """
        query = """
            UPDATE scrims
            SET game = ?, format = ?, status = ?, scheduled_at = ?,
                rank_min = ?, rank_max = ?, latency_max = ?, snapshot = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE scrim_id = ?
        """
        with connect(self.db_path) as conn:
            cursor = conn.execute(query, self._column_values(scrim) + (scrim.scrim_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(
                    f"Scrim {scrim.scrim_id} is not stored",
                    scrim_id=scrim.scrim_id, state=scrim.status.value,
                )
        logger.info(f"[{scrim.scrim_id}] Updated ({scrim.status.value})")

    def delete(self, scrim_id: str) -> None:
        """
        Remove a stored scrim.

        Raises:
            NotFoundError: If no scrim has this id
        """
        with connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM scrims WHERE scrim_id = ?", (scrim_id,))
            if cursor.rowcount == 0:
                raise NotFoundError(f"Scrim {scrim_id} is not stored", scrim_id=scrim_id)
        logger.info(f"[{scrim_id}] Deleted")

    # ── Queries ──────────────────────────────────────────────

    def find_by_id(self, scrim_id: str) -> Optional[Scrim]:
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT snapshot FROM scrims WHERE scrim_id = ?", (scrim_id,)
            ).fetchone()
        return self._load(row["snapshot"]) if row else None

    def find_all(self) -> List[Scrim]:
        return self.find_matching(ScrimFilters())

    def find_by_status(self, status: str) -> List[Scrim]:
        return self.find_matching(ScrimFilters(status=status))

    def find_matching(self, filters: ScrimFilters) -> List[Scrim]:
        """Load the scrims meeting every set filter, ordered by schedule."""
        where, params = filters.where_clause()
        with connect(self.db_path) as conn:
            rows = conn.execute(
                f"SELECT snapshot FROM scrims {where} {_ORDER}", params
            ).fetchall()
        logger.debug(f"find_matching {filters} -> {len(rows)} scrim(s)")
        return [self._load(row["snapshot"]) for row in rows]

    # ── Row mapping ──────────────────────────────────────────

    def _column_values(self, scrim: Scrim) -> tuple:
        return (
            scrim.game.name,
            scrim.format.name,
            scrim.status.value,
            scrim.scheduled_at.isoformat(),
            scrim.rank_min,
            scrim.rank_max,
            scrim.latency_max,
            json.dumps(scrim_to_snapshot(scrim)),
        )

    def _load(self, snapshot: str) -> Scrim:
        return scrim_from_snapshot(json.loads(snapshot), self.catalog, notifier=self.notifier)
