# Area: Persistence
"""
escrims._persistence.database — SQLite connections
==================================================

``connect`` yields a connection whose statements form one transaction:
it commits when the block exits normally and rolls back when it
raises. The connection is closed either way.

    with connect("escrims.db") as conn:
        conn.execute("UPDATE scrims ...")
"""

import sqlite3
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger("escrims.repository.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


@contextmanager
def connect(db_path: str) -> Iterator[sqlite3.Connection]:
    """Open a connection that commits or rolls back as one transaction."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        with conn:
            yield conn
    finally:
        conn.close()


def init_database(db_path: str = "escrims.db") -> None:
    """Create the scrims table and its indexes if they do not exist yet."""
    with connect(db_path) as conn:
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
    logger.info(f"Database initialized at {db_path}")
