# Area: Players
"""
escrims.players — Player profile and behavior record
=====================================================

``Player`` is the candidate/applicant identity consumed by matchmaking
and by the organizer's invite action. ``BehaviorRecord`` holds the
per-user counters maintained by the game-completion pipeline; the
matchmaking engine only reads it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass
class BehaviorRecord:
    """
    Behavioral history of one user.

    Attributes:
        user_id: Owner of the record
        games_played: Total games, abandoned ones included
        games_abandoned: Games left before completion
        fair_play: Trust score in [0, 1], 1.0 is spotless
        last_activity: Time of the last recorded game
    """

    user_id: str
    games_played: int = 0
    games_abandoned: int = 0
    fair_play: float = 1.0
    last_activity: Optional[datetime] = None

    # Penalty applied to fair play for every abandoned game
    ABANDON_PENALTY = 0.1

    def __post_init__(self):
        self.games_played = max(0, self.games_played)
        self.games_abandoned = max(0, self.games_abandoned)
        self.fair_play = _clamp(self.fair_play)

    @property
    def abandon_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_abandoned / self.games_played

    @property
    def reliability_score(self) -> float:
        """Combined 0-100 score: fair play 50, abandon rate 30, experience 20."""
        return (
            self.fair_play * 50.0
            + (1.0 - self.abandon_rate) * 30.0
            + min(20.0, self.games_played / 5.0)
        )

    def has_good_behavior(self) -> bool:
        return self.fair_play >= 0.7 and self.abandon_rate <= 0.15

    def record_completed(self, when: Optional[datetime] = None) -> None:
        self.games_played += 1
        self.last_activity = when or datetime.now()

    def record_abandoned(self, when: Optional[datetime] = None) -> None:
        self.games_played += 1
        self.games_abandoned += 1
        self.last_activity = when or datetime.now()
        self.reduce_fair_play(self.ABANDON_PENALTY)

    def reduce_fair_play(self, amount: float) -> None:
        self.fair_play = _clamp(self.fair_play - amount)

    def raise_fair_play(self, amount: float) -> None:
        self.fair_play = _clamp(self.fair_play + amount)


@dataclass
class Player:
    """
    A registered user as seen by the scrim core.

    ``ranks`` and ``preferred_roles`` are keyed by game name; the first
    preferred role of a game is the player's primary role there.
    """

    user_id: str
    username: str
    ranks: Dict[str, int] = field(default_factory=dict)
    latency_ms: int = 0
    preferred_roles: Dict[str, List[str]] = field(default_factory=dict)
    history: Optional[BehaviorRecord] = None

    def rank_for(self, game: str) -> Optional[int]:
        return self.ranks.get(game)

    def roles_for(self, game: str) -> List[str]:
        return list(self.preferred_roles.get(game, []))

    def primary_role(self, game: str) -> Optional[str]:
        roles = self.preferred_roles.get(game)
        return roles[0] if roles else None
