# Area: Shared
"""In-memory UserDirectory used by examples and tests."""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional

from ..collaborators import UserDirectory
from ..errors import ValidationError
from ..players import Player


class InMemoryUserDirectory(UserDirectory):
    """Players indexed by id and by case-insensitive username."""

    def __init__(self, players: Iterable[Player] = ()):
        self._by_id: Dict[str, Player] = {}
        self._by_username: Dict[str, Player] = {}
        for player in players:
            self.add(player)

    def add(self, player: Player) -> None:
        key = player.username.lower()
        if player.user_id in self._by_id:
            raise ValidationError(f"Duplicate user id: {player.user_id}",
                                  user_id=player.user_id)
        if key in self._by_username:
            raise ValidationError(f"Duplicate username: {player.username}",
                                  username=player.username)
        self._by_id[player.user_id] = player
        self._by_username[key] = player

    def find_by_id(self, user_id: str) -> Optional[Player]:
        return self._by_id.get(user_id)

    def find_by_username(self, username: str) -> Optional[Player]:
        return self._by_username.get((username or "").lower())

    def all(self) -> List[Player]:
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
