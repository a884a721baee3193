# Area: Lifecycle
"""
escrims._lifecycle.statistics — Completion statistics
=====================================================

CompletionStats is produced when a scrim moves from IN_PROGRESS to
FINISHED. It starts with an empty PlayerStats line for every confirmed
participant; the organizer then records each player's numbers, names
an MVP and declares the winning team.

Rankings are stable: players with equal KDA or score keep roster order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Dict, List, Optional

from ..errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from .scrim import Scrim


@dataclass(frozen=True)
class RosterEntry:
    """
    One confirmed participant in a finished scrim.

    Attributes:
        user_id: Participant
        role: Role name assigned by the organizer, or None
    """

    user_id: str
    role: Optional[str]


@dataclass
class PlayerStats:
    """Match numbers of one participant."""

    user_id: str
    kills: int = 0
    assists: int = 0
    deaths: int = 0
    score: int = 0
    mvp: bool = False

    @property
    def kda(self) -> float:
        """(kills + assists) / deaths; deathless players get kills + assists."""
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths

    @property
    def is_recorded(self) -> bool:
        return any((self.kills, self.assists, self.deaths, self.score))


@dataclass
class CompletionStats:
    """
    Summary of a finished scrim.

    Attributes:
        scrim_id: Scrim identifier
        game: Game name
        format_name: Format name
        started_at: When the scrim entered IN_PROGRESS
        finished_at: When the scrim entered FINISHED
        roster: Confirmed participants and their roles
        player_stats: Per-participant numbers keyed by user id
        winner: Name of the winning team once declared
    """

    scrim_id: str
    game: str
    format_name: str
    started_at: Optional[datetime]
    finished_at: datetime
    roster: List[RosterEntry] = field(default_factory=list)
    player_stats: Dict[str, PlayerStats] = field(default_factory=dict)
    winner: Optional[str] = None

    def __post_init__(self):
        for entry in self.roster:
            self.player_stats.setdefault(entry.user_id, PlayerStats(entry.user_id))

    @property
    def participant_count(self) -> int:
        return len(self.roster)

    @property
    def duration_minutes(self) -> int:
        if self.started_at is None:
            return 0
        seconds = (self.finished_at - self.started_at).total_seconds()
        return max(0, int(seconds // 60))

    @property
    def mvp(self) -> Optional[PlayerStats]:
        for stats in self.player_stats.values():
            if stats.mvp:
                return stats
        return None

    def stats_for(self, user_id: str) -> PlayerStats:
        stats = self.player_stats.get(user_id)
        if stats is None:
            raise NotFoundError(
                f"'{user_id}' did not take part in this scrim",
                scrim_id=self.scrim_id, user_id=user_id,
            )
        return stats

    def record(self, user_id: str, kills: int, assists: int,
               deaths: int, score: int) -> PlayerStats:
        """
        Store one participant's numbers, replacing earlier ones.

        Raises:
            NotFoundError: If the user is not a participant
            ValidationError: If any number is negative
        """
        stats = self.stats_for(user_id)
        numbers = {"kills": kills, "assists": assists, "deaths": deaths, "score": score}
        negative = [name for name, value in numbers.items() if value < 0]
        if negative:
            raise ValidationError(
                f"Stats must not be negative: {', '.join(negative)}",
                scrim_id=self.scrim_id, user_id=user_id,
            )
        stats.kills = kills
        stats.assists = assists
        stats.deaths = deaths
        stats.score = score
        return stats

    def designate_mvp(self, user_id: str) -> None:
        chosen = self.stats_for(user_id)
        for stats in self.player_stats.values():
            stats.mvp = stats is chosen

    def declare_winner(self, team: str) -> None:
        if not team or not team.strip():
            raise ValidationError("Winning team name must not be empty",
                                  scrim_id=self.scrim_id)
        self.winner = team.strip()

    def ranking_by_kda(self) -> List[PlayerStats]:
        return sorted(self.player_stats.values(), key=lambda s: s.kda, reverse=True)

    def ranking_by_score(self) -> List[PlayerStats]:
        return sorted(self.player_stats.values(), key=lambda s: s.score, reverse=True)

    def has_complete_stats(self) -> bool:
        return all(stats.is_recorded for stats in self.player_stats.values())


def build_completion_stats(scrim: "Scrim", finished_at: datetime) -> CompletionStats:
    """Build the completion summary from a scrim's confirmed attendances."""
    roster = [
        RosterEntry(
            user_id=attendance.user_id,
            role=attendance.role.name if attendance.role else None,
        )
        for attendance in scrim.confirmed_attendances()
    ]
    return CompletionStats(
        scrim_id=scrim.scrim_id,
        game=scrim.game.name,
        format_name=scrim.format.name,
        started_at=scrim.started_at,
        finished_at=finished_at,
        roster=roster,
    )
