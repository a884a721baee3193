# Area: Persistence
"""
escrims._persistence.filters — Scrim search filters
===================================================

Every field is optional; an unset field does not restrict the search.
Name comparisons ignore case.

    filters = ScrimFilters(game="valorant", rank_min=1000, status="SEEKING")
    repo.find_matching(filters)
"""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ScrimFilters:
    """
    Search criteria for stored scrims.

    Attributes:
        game: Game name
        format: Format name
        rank_min: Keep scrims whose lower rank bound is at least this
        rank_max: Keep scrims whose upper rank bound is at most this
        latency_max: Keep scrims whose latency limit is at most this
        date_from: Keep scrims scheduled at or after this time
        date_to: Keep scrims scheduled at or before this time
        status: State tag, e.g. "SEEKING"
    """

    game: Optional[str] = None
    format: Optional[str] = None
    rank_min: Optional[int] = None
    rank_max: Optional[int] = None
    latency_max: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    status: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def where_clause(self) -> Tuple[str, tuple]:
        """
        Build the SQL condition and its parameters.

        Returns:
            ("WHERE ...", params), or ("", ()) when no field is set
        """
        conditions: List[str] = []
        params: list = []
        if self.game is not None:
            conditions.append("game = ? COLLATE NOCASE")
            params.append(self.game)
        if self.format is not None:
            conditions.append("format = ? COLLATE NOCASE")
            params.append(self.format)
        if self.rank_min is not None:
            conditions.append("rank_min >= ?")
            params.append(self.rank_min)
        if self.rank_max is not None:
            conditions.append("rank_max <= ?")
            params.append(self.rank_max)
        if self.latency_max is not None:
            # -1 (unlimited) compares below every limit
            conditions.append("latency_max <= ?")
            params.append(self.latency_max)
        if self.date_from is not None:
            conditions.append("scheduled_at >= ?")
            params.append(self.date_from.isoformat())
        if self.date_to is not None:
            conditions.append("scheduled_at <= ?")
            params.append(self.date_to.isoformat())
        if self.status is not None:
            conditions.append("status = ? COLLATE NOCASE")
            params.append(self.status)
        if not conditions:
            return "", ()
        return "WHERE " + " AND ".join(conditions), tuple(params)
