# Area: Collaborators
"""
escrims.collaborators — Interfaces the core consumes
====================================================

The lifecycle, organizer and matchmaking engines talk to the outside
world only through these four abstract classes. Concrete adapters
(persistence, notification channels, user storage) live outside the
core; the package ships small reference implementations:

    InMemoryUserDirectory   escrims._shared.directory
    LoggingNotificationSink escrims._shared.notifications
    SqliteScrimRepository   escrims._persistence.repo_scrims
    StaticGameCatalog       escrims.games
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ._lifecycle.enums import LifecycleEvent
    from ._lifecycle.scrim import Scrim
    from .games import Role, ScrimFormat
    from .players import Player


class UserDirectory(ABC):
    """Resolves applicant and organizer identities."""

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional["Player"]:
        """Return the player with this id, or None."""

    @abstractmethod
    def find_by_username(self, username: str) -> Optional["Player"]:
        """Return the player with this username, or None."""


class ScrimRepository(ABC):
    """
    Opaque scrim storage.

    The core only requires at most one in-flight mutation per scrim id;
    callers serialize access per aggregate.
    """

    @abstractmethod
    def save(self, scrim: "Scrim") -> None:
        """Store a new scrim."""

    @abstractmethod
    def find_by_id(self, scrim_id: str) -> Optional["Scrim"]:
        """Load a scrim, or None when it does not exist."""

    @abstractmethod
    def update(self, scrim: "Scrim") -> None:
        """Overwrite a stored scrim."""

    @abstractmethod
    def delete(self, scrim_id: str) -> None:
        """Remove a stored scrim."""

    @abstractmethod
    def find_all(self) -> List["Scrim"]:
        """Load every stored scrim."""


class NotificationSink(ABC):
    """
    Receives lifecycle events.

    Delivery is fire-and-forget: an exception raised here is logged by
    the scrim and never rolls back the transition that emitted it.
    """

    @abstractmethod
    def notify(
        self,
        event: "LifecycleEvent",
        scrim: "Scrim",
        recipients: Sequence[str],
    ) -> None:
        """Deliver ``event`` about ``scrim`` to the given user ids."""


class GameCatalog(ABC):
    """Read-only reference data about games, roles and formats."""

    @abstractmethod
    def roles_for(self, game: str) -> List["Role"]:
        """Roles available in ``game``."""

    @abstractmethod
    def formats_for(self, game: str) -> List["ScrimFormat"]:
        """Formats available in ``game``."""

    @abstractmethod
    def is_valid_role(self, game: str, role: Optional["Role"]) -> bool:
        """True if ``role`` belongs to ``game``."""
