# Area: Matchmaking
"""Rank (MMR) based selection: closest to the middle of the rank window first."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..players import Player
from .base import MatchmakingStrategy

if TYPE_CHECKING:
    from .._lifecycle.scrim import Scrim

logger = logging.getLogger("escrims.matchmaking.rank")


class RankStrategy(MatchmakingStrategy):
    """Keep players ranked inside the window, sorted by distance to its midpoint."""

    name = "MMR"
    description = (
        "Selects players by rank inside the scrim's window, "
        "closest to the window's midpoint first."
    )

    def select(self, candidates: Sequence[Player], scrim: "Scrim") -> List[Player]:
        game = scrim.game.name
        target = (scrim.rank_min + scrim.rank_max) / 2.0
        eligible = [p for p in candidates if meets_rank_requirements(p, scrim)]
        eligible.sort(key=lambda p: abs(p.rank_for(game) - target))
        selected = eligible[:scrim.slots]
        logger.debug(
            f"[{scrim.scrim_id}] MMR kept {len(eligible)}/{len(candidates)}, "
            f"selected {len(selected)}"
        )
        return selected


def rank_difference(a: Player, b: Player, game: str) -> Optional[int]:
    """Absolute rank gap between two players, None if either has no rank."""
    rank_a = a.rank_for(game)
    rank_b = b.rank_for(game)
    if rank_a is None or rank_b is None:
        return None
    return abs(rank_a - rank_b)


def meets_rank_requirements(player: Player, scrim: "Scrim") -> bool:
    rank = player.rank_for(scrim.game.name)
    if rank is None:
        return False
    return scrim.rank_min <= rank <= scrim.rank_max
