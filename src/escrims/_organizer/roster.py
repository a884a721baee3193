# Area: Organizer
"""Working roster slot used by the organizer session."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..games import Role


@dataclass(eq=False)
class RosterSlot:
    """
    One player on the organizer's working roster.

    Two slots are equal when they hold the same user, whatever the
    role or confirmation flag.
    """

    user_id: str
    username: str = ""
    role: Optional[Role] = None
    confirmed: bool = False

    @property
    def has_role(self) -> bool:
        return self.role is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RosterSlot):
            return NotImplemented
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)

    def __str__(self) -> str:
        role = self.role.name if self.role else "no role"
        return f"{self.username or self.user_id} ({role})"
