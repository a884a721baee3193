# Area: Matchmaking
"""
Matchmaking - one-shot ranking of a candidate list for a scrim's slots.

This package handles:
- Rank (MMR) selection around the middle of the rank window
- Latency selection with progressive threshold expansion
- Behavior history selection with role balancing
- The strategy registry
"""

from .base import MatchmakingStrategy
from .rank import RankStrategy, rank_difference, meets_rank_requirements
from .latency import (
    LatencyClass,
    LatencyStrategy,
    classify_latency,
    meets_latency_requirements,
    average_latency,
)
from .history import HistoryStrategy, group_compatibility, role_variance
from .registry import MatchmakingRegistry, MATCHMAKING

__all__ = [
    "MatchmakingStrategy",
    "RankStrategy",
    "rank_difference",
    "meets_rank_requirements",
    "LatencyClass",
    "LatencyStrategy",
    "classify_latency",
    "meets_latency_requirements",
    "average_latency",
    "HistoryStrategy",
    "group_compatibility",
    "role_variance",
    "MatchmakingRegistry",
    "MATCHMAKING",
]
