# Area: Matchmaking
"""
escrims._matchmaking.history — Behavior based selection
=======================================================

Scores reliable players and spreads primary roles across the roster.

Score (out of 100):
    fair_play * 40
    + (1 - abandon_rate) * 30
    + min(20, games_played / 5)
    + role diversity bonus: 10 / 7 / 3 when the candidate's primary
      role was already picked 0 / 1 / 2+ times in this pass

Players without a behavior record, with fair play below 0.5 or an
abandon rate above 0.30 are never selected.
"""

from __future__ import annotations
import logging
from collections import Counter
from typing import TYPE_CHECKING, Dict, List, Sequence

from ..players import Player
from .base import MatchmakingStrategy

if TYPE_CHECKING:
    from .._lifecycle.scrim import Scrim

logger = logging.getLogger("escrims.matchmaking.history")

FAIR_PLAY_WEIGHT = 40.0
ABANDON_WEIGHT = 30.0
EXPERIENCE_WEIGHT = 20.0
DIVERSITY_WEIGHT = 10.0

MIN_FAIR_PLAY = 0.5
MAX_ABANDON_RATE = 0.30


class HistoryStrategy(MatchmakingStrategy):
    """Greedy selection by behavior score with a per-role cap."""

    name = "History"
    description = (
        "Selects players by behavior history, fair play and role "
        "compatibility. Penalizes abandoning and rewards role diversity."
    )

    def select(self, candidates: Sequence[Player], scrim: "Scrim") -> List[Player]:
        game = scrim.game.name
        slots = scrim.slots
        eligible = [p for p in candidates if is_eligible(p)]
        cap = max(2, slots // 3)

        selected: List[Player] = []
        picked = Counter()
        remaining = list(eligible)
        while remaining and len(selected) < slots:
            best = None
            best_score = 0.0
            for player in remaining:
                role = player.primary_role(game)
                if role is not None and picked[role] >= cap:
                    continue
                score = base_score(player) + diversity_bonus(role, picked)
                if best is None or score > best_score:
                    best, best_score = player, score
            if best is None:
                break
            selected.append(best)
            remaining.remove(best)
            role = best.primary_role(game)
            if role is not None:
                picked[role] += 1

        if len(selected) < slots and remaining:
            # Backfill ignores the role cap
            backfill = sorted(remaining, key=base_score, reverse=True)
            selected.extend(backfill[:slots - len(selected)])

        logger.debug(
            f"[{scrim.scrim_id}] History kept {len(eligible)}/{len(candidates)}, "
            f"selected {len(selected)}"
        )
        return selected


def is_eligible(player: Player) -> bool:
    record = player.history
    return (
        record is not None
        and record.fair_play >= MIN_FAIR_PLAY
        and record.abandon_rate <= MAX_ABANDON_RATE
    )


def base_score(player: Player) -> float:
    """Behavior part of the score, without the role diversity bonus."""
    record = player.history
    if record is None:
        return 0.0
    return (
        record.fair_play * FAIR_PLAY_WEIGHT
        + (1.0 - record.abandon_rate) * ABANDON_WEIGHT
        + min(EXPERIENCE_WEIGHT, record.games_played / 5.0)
    )


def diversity_bonus(role, picked: Dict[str, int]) -> float:
    if role is None:
        return 0.0
    times = picked.get(role, 0)
    if times == 0:
        return DIVERSITY_WEIGHT
    if times == 1:
        return DIVERSITY_WEIGHT * 0.7
    return DIVERSITY_WEIGHT * 0.3


def group_compatibility(players: Sequence[Player]) -> float:
    """Mean reliability score of a group; players without history count as 0."""
    if not players:
        return 0.0
    total = sum(p.history.reliability_score for p in players if p.history is not None)
    return total / len(players)


def role_variance(players: Sequence[Player], game: str) -> float:
    """Distinct primary roles divided by group size."""
    if not players:
        return 0.0
    roles = {p.primary_role(game) for p in players} - {None}
    if not roles:
        return 0.0
    return len(roles) / len(players)
