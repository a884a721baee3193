# Area: Organizer
"""
escrims._organizer.actions — Reversible organizer actions
=========================================================

Each action checks its own preconditions, applies itself to an
OrganizerSession and keeps enough of the previous state to reverse
itself exactly. The session owns the history stack.

Actions:
    Invite      add a player with a role and an accepted application
    AssignRole  give a rostered player a new role
    SwapRoles   exchange the roles of two rostered players in one step
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

from ..errors import PreconditionError, ValidationError
from ..games import Role
from ..players import Player
from .._lifecycle.application import Application
from .._lifecycle.enums import ScrimStatus
from .roster import RosterSlot

if TYPE_CHECKING:
    from .session import OrganizerSession


class OrganizerAction(ABC):
    """Base class for undoable organizer actions."""

    action_type: str = ""

    @abstractmethod
    def can_execute(self, session: "OrganizerSession") -> bool:
        """True if every precondition holds against the session's roster."""

    @abstractmethod
    def execute(self, session: "OrganizerSession") -> None:
        """Apply the action, recording what undo needs."""

    @abstractmethod
    def undo(self, session: "OrganizerSession") -> None:
        """Reverse a previous execute exactly."""

    def can_undo(self, session: "OrganizerSession") -> bool:
        return True

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary shown in the action history."""

    def _require(self, session: "OrganizerSession") -> None:
        if not self.can_execute(session):
            raise PreconditionError(
                f"Cannot {self.description}",
                scrim_id=session.scrim.scrim_id,
                state=session.scrim.status.value,
                action=self.action_type,
            )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.description}>"


class Invite(OrganizerAction):
    """
    Invite a player to the scrim with a role.

    The invitation counts as a pre-approved application: an ACCEPTED
    application is added to the scrim alongside the roster slot. A
    player who already holds an accepted application keeps it and only
    gains the slot. Filling the last slot this way does not form the
    lobby; that happens when the session confirms.
    """

    action_type = "INVITE"

    def __init__(self, player: Player, role: Role):
        self.player = player
        self.role = role
        self._application: Optional[Application] = None

    @property
    def description(self) -> str:
        return f"invite '{self.player.username}' as {self.role.name}"

    def can_execute(self, session: "OrganizerSession") -> bool:
        if not session.is_valid_role(self.role):
            return False
        if session.is_role_taken(self.role):
            return False
        if session.find_slot(self.player.user_id) is not None:
            return False
        existing = session.scrim.application_for(self.player.user_id)
        if existing is not None:
            return existing.is_accepted
        return len(session.scrim.accepted_applications()) < session.scrim.slots

    def execute(self, session: "OrganizerSession") -> None:
        self._require(session)
        scrim = session.scrim
        if scrim.application_for(self.player.user_id) is None:
            rank = self.player.rank_for(scrim.game.name)
            self._application = scrim.admit_invited(
                self.player.user_id,
                rank if rank is not None else 0,
                self.player.latency_ms,
            )
        else:
            self._application = None
        session._roster.append(
            RosterSlot(user_id=self.player.user_id,
                       username=self.player.username, role=self.role)
        )

    def can_undo(self, session: "OrganizerSession") -> bool:
        if self._application is None:
            return True
        return session.scrim.status == ScrimStatus.SEEKING

    def undo(self, session: "OrganizerSession") -> None:
        if self._application is not None:
            session.scrim.withdraw(self._application)
            self._application = None
        session._remove_slot(self.player.user_id)


class AssignRole(OrganizerAction):
    """Give a rostered player a new role, remembering the old one."""

    action_type = "ASSIGN_ROLE"

    def __init__(self, user_id: str, role: Role):
        if not user_id or not user_id.strip():
            raise ValidationError("user_id must not be empty")
        self.user_id = user_id
        self.role = role
        self.previous_role: Optional[Role] = None
        self._executed = False

    @property
    def description(self) -> str:
        return f"assign {self.role.name} to '{self.user_id}'"

    def can_execute(self, session: "OrganizerSession") -> bool:
        if session.find_slot(self.user_id) is None:
            return False
        if not session.is_valid_role(self.role):
            return False
        holder = session.find_slot_by_role(self.role)
        return holder is None or holder.user_id == self.user_id

    def execute(self, session: "OrganizerSession") -> None:
        self._require(session)
        slot = session.find_slot(self.user_id)
        self.previous_role = slot.role
        slot.role = self.role
        self._executed = True

    def can_undo(self, session: "OrganizerSession") -> bool:
        return self._executed and session.find_slot(self.user_id) is not None

    def undo(self, session: "OrganizerSession") -> None:
        slot = session.find_slot(self.user_id)
        slot.role = self.previous_role
        self._executed = False


class SwapRoles(OrganizerAction):
    """Exchange the roles of two rostered players as a single action."""

    action_type = "SWAP_ROLES"

    def __init__(self, user_a: str, user_b: str):
        if user_a == user_b:
            raise ValidationError(
                f"Cannot swap '{user_a}' with themselves", user_id=user_a
            )
        self.user_a = user_a
        self.user_b = user_b

    @property
    def description(self) -> str:
        return f"swap roles of '{self.user_a}' and '{self.user_b}'"

    def can_execute(self, session: "OrganizerSession") -> bool:
        slot_a = session.find_slot(self.user_a)
        slot_b = session.find_slot(self.user_b)
        if slot_a is None or slot_b is None:
            return False
        # None means no role yet and always swaps cleanly
        for role in (slot_a.role, slot_b.role):
            if role is not None and not session.is_valid_role(role):
                return False
        return True

    def execute(self, session: "OrganizerSession") -> None:
        self._require(session)
        self._swap(session)

    def can_undo(self, session: "OrganizerSession") -> bool:
        return (session.find_slot(self.user_a) is not None
                and session.find_slot(self.user_b) is not None)

    def undo(self, session: "OrganizerSession") -> None:
        self._swap(session)

    def _swap(self, session: "OrganizerSession") -> None:
        slot_a = session.find_slot(self.user_a)
        slot_b = session.find_slot(self.user_b)
        slot_a.role, slot_b.role = slot_b.role, slot_a.role
