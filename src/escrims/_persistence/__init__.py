# Area: Persistence
"""
Persistence - SQLite storage for scrims.

This package contains:
- Connection handling and database initialization from schema.sql
- Search filters for stored scrims
- The SqliteScrimRepository implementation of ScrimRepository
"""

from .database import init_database, connect
from .filters import ScrimFilters
from .repo_scrims import SqliteScrimRepository

__all__ = [
    "init_database",
    "connect",
    "ScrimFilters",
    "SqliteScrimRepository",
]
