# Area: Catalog
"""
escrims.games — Game, role and format catalog
==============================================

Closed set of supported games. Each game carries its static role and
format tables; a role belongs to exactly one game. The registry is
built once at import time and is read-only afterwards.

    from escrims.games import GAME_CATALOG, get_game
    valorant = get_game("valorant")
    duelist = valorant.find_role("Duelist")
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .collaborators import GameCatalog
from .errors import NotFoundError, ValidationError


@dataclass(frozen=True)
class Role:
    """A role that can be played in one specific game."""
    game: str
    name: str

    def __str__(self) -> str:
        return f"{self.name} - {self.game}"


@dataclass(frozen=True)
class ScrimFormat:
    """Match format: how many players each of the two teams fields."""
    name: str
    players_per_team: int

    @property
    def total_players(self) -> int:
        return self.players_per_team * 2

    def is_valid(self) -> bool:
        return bool(self.name) and self.players_per_team > 0

    def __str__(self) -> str:
        return f"{self.name} ({self.total_players} players)"


@dataclass(frozen=True)
class Game:
    """A supported game with its role and format tables."""
    name: str
    roles: Tuple[Role, ...]
    formats: Tuple[ScrimFormat, ...]
    default_format_name: str

    @property
    def default_format(self) -> ScrimFormat:
        return self.find_format(self.default_format_name)

    def is_valid_role(self, role: Optional[Role]) -> bool:
        if role is None or role.game != self.name:
            return False
        return any(r.name == role.name for r in self.roles)

    def is_valid_format(self, fmt: Optional[ScrimFormat]) -> bool:
        if fmt is None or not fmt.is_valid():
            return False
        return any(f.name == fmt.name and f.players_per_team == fmt.players_per_team
                   for f in self.formats)

    def find_role(self, name: str) -> Role:
        """Look up a role by name (case-insensitive)."""
        wanted = (name or "").strip().lower()
        for role in self.roles:
            if role.name.lower() == wanted:
                return role
        raise NotFoundError(f"Role '{name}' does not exist in {self.name}",
                            game=self.name, role=name)

    def find_format(self, name: str) -> ScrimFormat:
        """Look up a format by name (case-insensitive)."""
        wanted = (name or "").strip().lower()
        for fmt in self.formats:
            if fmt.name.lower() == wanted:
                return fmt
        raise NotFoundError(f"Format '{name}' does not exist in {self.name}",
                            game=self.name, format=name)

    def required_role_count(self, fmt: ScrimFormat) -> int:
        return fmt.total_players

    def __str__(self) -> str:
        return self.name


def _build_game(name: str, role_names: List[str],
                formats: List[Tuple[str, int]], default_format: str) -> Game:
    return Game(
        name=name,
        roles=tuple(Role(game=name, name=r) for r in role_names),
        formats=tuple(ScrimFormat(name=f, players_per_team=n) for f, n in formats),
        default_format_name=default_format,
    )


LEAGUE_OF_LEGENDS = _build_game(
    "League of Legends",
    ["Top", "Jungle", "Mid", "ADC", "Support"],
    [("5v5 Summoner's Rift", 5), ("5v5 ARAM", 5)],
    "5v5 Summoner's Rift",
)

VALORANT = _build_game(
    "Valorant",
    ["Duelist", "Initiator", "Controller", "Sentinel"],
    [("5v5 Competitive", 5), ("5v5 Casual", 5), ("5v5 Swift", 5)],
    "5v5 Casual",
)

COUNTER_STRIKE = _build_game(
    "Counter-Strike",
    ["AWPer", "Lurker", "IGL", "Entry Fragger", "Support"],
    [("5v5 Competitive", 5), ("2v2 Wingman", 2)],
    "5v5 Competitive",
)

# Registration order is the 1-based numbering shown to users
GAMES: Tuple[Game, ...] = (LEAGUE_OF_LEGENDS, VALORANT, COUNTER_STRIKE)
_GAMES_BY_NAME: Dict[str, Game] = {g.name.lower(): g for g in GAMES}


def get_game(name: str) -> Game:
    """Return the game registered under ``name`` (case-insensitive)."""
    game = _GAMES_BY_NAME.get((name or "").strip().lower())
    if game is None:
        raise NotFoundError(f"Unknown game: {name}", game=name)
    return game


def get_game_by_number(number: int) -> Game:
    """Return a game by its 1-based registration number."""
    if number < 1 or number > len(GAMES):
        raise ValidationError(f"Invalid game number: {number}", number=number)
    return GAMES[number - 1]


class StaticGameCatalog(GameCatalog):
    """GameCatalog backed by the built-in game tables."""

    def games(self) -> List[Game]:
        return list(GAMES)

    def get(self, game: str) -> Game:
        return get_game(game)

    def roles_for(self, game: str) -> List[Role]:
        return list(get_game(game).roles)

    def formats_for(self, game: str) -> List[ScrimFormat]:
        return list(get_game(game).formats)

    def is_valid_role(self, game: str, role: Optional[Role]) -> bool:
        try:
            return get_game(game).is_valid_role(role)
        except NotFoundError:
            return False


GAME_CATALOG = StaticGameCatalog()
