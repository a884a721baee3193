# Area: Matchmaking
"""
escrims._matchmaking.latency — Latency based selection
======================================================

Prefers the lowest latency. When too few candidates fit under the
scrim's limit, the threshold is widened step by step up to a hard
ceiling and the widest attempt wins.
"""

from __future__ import annotations
import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Sequence

from ..errors import ValidationError
from ..players import Player
from .base import MatchmakingStrategy

if TYPE_CHECKING:
    from .._lifecycle.scrim import Scrim

logger = logging.getLogger("escrims.matchmaking.latency")

DEFAULT_STEP_MS = 20
DEFAULT_CEILING_MS = 300


class LatencyClass(Enum):
    """Quality bands for a latency value."""
    UNKNOWN = "UNKNOWN"
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    ACCEPTABLE = "ACCEPTABLE"
    PLAYABLE = "PLAYABLE"
    NOT_RECOMMENDED = "NOT_RECOMMENDED"


class LatencyStrategy(MatchmakingStrategy):
    """
    Select by ascending latency with progressive threshold expansion.

    Args:
        step_ms: Threshold increase per retry
        ceiling_ms: Largest threshold ever tried
    """

    name = "Latency"
    description = (
        "Prioritizes low latency players, widening the threshold "
        "progressively when there are not enough candidates."
    )

    def __init__(self, step_ms: int = DEFAULT_STEP_MS,
                 ceiling_ms: int = DEFAULT_CEILING_MS):
        if step_ms <= 0:
            raise ValidationError(f"step_ms must be positive, got {step_ms}")
        self.step_ms = step_ms
        self.ceiling_ms = ceiling_ms

    def select(self, candidates: Sequence[Player], scrim: "Scrim") -> List[Player]:
        slots = scrim.slots
        if scrim.latency_max == -1:
            return self._within(candidates, None)[:slots]

        threshold = scrim.latency_max
        selected = self._within(candidates, threshold)
        while len(selected) < slots and threshold + self.step_ms <= self.ceiling_ms:
            threshold += self.step_ms
            selected = self._within(candidates, threshold)

        if threshold != scrim.latency_max:
            logger.info(
                f"[{scrim.scrim_id}] Latency threshold widened "
                f"{scrim.latency_max}ms → {threshold}ms, {len(selected)} qualify"
            )
        return selected[:slots]

    @staticmethod
    def _within(candidates: Sequence[Player], threshold) -> List[Player]:
        if threshold is None:
            eligible = list(candidates)
        else:
            eligible = [p for p in candidates if p.latency_ms <= threshold]
        eligible.sort(key=lambda p: p.latency_ms)
        return eligible


def classify_latency(latency_ms: int) -> LatencyClass:
    if latency_ms < 0:
        return LatencyClass.UNKNOWN
    if latency_ms < 50:
        return LatencyClass.EXCELLENT
    if latency_ms < 100:
        return LatencyClass.GOOD
    if latency_ms < 150:
        return LatencyClass.ACCEPTABLE
    if latency_ms < 300:
        return LatencyClass.PLAYABLE
    return LatencyClass.NOT_RECOMMENDED


def meets_latency_requirements(player: Player, scrim: "Scrim") -> bool:
    if scrim.latency_max == -1:
        return True
    return player.latency_ms <= scrim.latency_max


def average_latency(players: Sequence[Player]) -> float:
    if not players:
        return 0.0
    return sum(p.latency_ms for p in players) / len(players)
