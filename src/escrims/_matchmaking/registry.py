# Area: Matchmaking
"""
escrims._matchmaking.registry — Strategy registry
=================================================

Immutable lookup of the available strategies, built once at import.
Registration order defines the 1-based numbering shown to users.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from ..errors import NotFoundError, ValidationError
from .base import MatchmakingStrategy
from .history import HistoryStrategy
from .latency import LatencyStrategy
from .rank import RankStrategy


class MatchmakingRegistry:
    """Resolves strategies by name or number."""

    def __init__(self, strategies: Optional[List[MatchmakingStrategy]] = None):
        if strategies is None:
            strategies = [RankStrategy(), LatencyStrategy(), HistoryStrategy()]
        self._strategies: Tuple[MatchmakingStrategy, ...] = tuple(strategies)

    def strategies(self) -> List[MatchmakingStrategy]:
        return list(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def by_name(self, name: str) -> MatchmakingStrategy:
        """
        Look up a strategy by name (case-insensitive).

        Raises:
            NotFoundError: If no strategy has this name
        """
        wanted = (name or "").strip().lower()
        for strategy in self._strategies:
            if strategy.name.lower() == wanted:
                return strategy
        raise NotFoundError(f"Unknown matchmaking strategy: {name}", strategy=name)

    def by_number(self, number: int) -> MatchmakingStrategy:
        """
        Look up a strategy by its 1-based number.

        Raises:
            ValidationError: If the number is out of range
        """
        if number < 1 or number > len(self._strategies):
            raise ValidationError(
                f"Invalid strategy number: {number}", number=number
            )
        return self._strategies[number - 1]

    def number_of(self, strategy: MatchmakingStrategy) -> int:
        """1-based number of a strategy, matched by class; -1 if absent."""
        for index, registered in enumerate(self._strategies, start=1):
            if type(registered) is type(strategy):
                return index
        return -1


MATCHMAKING = MatchmakingRegistry()
