# Area: Matchmaking
"""
escrims._matchmaking.base — Strategy interface
==============================================

A matchmaking strategy ranks a supplied candidate list against a
scrim's requirements and returns at most ``scrim.slots`` players.

Every strategy is deterministic and pure: inputs are never mutated and
ties keep the candidates' input order.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Sequence

from ..players import Player

if TYPE_CHECKING:
    from .._lifecycle.scrim import Scrim


class MatchmakingStrategy(ABC):
    """Base class for candidate selection algorithms."""

    name: str = ""
    description: str = ""

    @abstractmethod
    def select(self, candidates: Sequence[Player], scrim: "Scrim") -> List[Player]:
        """
        Pick players for the scrim's slots.

        Args:
            candidates: Players to choose from, in preference order for ties
            scrim: Scrim whose requirements drive the selection

        Returns:
            At most ``scrim.slots`` players, best first
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"
