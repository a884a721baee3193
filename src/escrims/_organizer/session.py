# Area: Organizer
"""
escrims._organizer.session — Organizer session
==============================================

Wraps a scrim before confirmation. The organizer edits a working
roster through reversible actions kept on a LIFO history. ``confirm``
commits the roster onto the scrim as confirmed attendances and locks
the session for good.

    session = OrganizerSession(scrim)
    session.execute(Invite(player, valorant.find_role("Duelist")))
    session.undo_last()
    session.confirm()
"""

from __future__ import annotations
import logging
from typing import List, Optional

from ..collaborators import GameCatalog
from ..errors import NothingToUndoError, PreconditionError, SessionLockedError
from ..games import GAME_CATALOG, Role
from .._lifecycle.enums import ScrimStatus
from .._lifecycle.scrim import Scrim
from .actions import OrganizerAction
from .roster import RosterSlot

logger = logging.getLogger("escrims.organizer")

# Scrim states in which the roster may still be edited
EDITABLE_STATES = (ScrimStatus.SEEKING, ScrimStatus.LOBBY_FORMED)


class OrganizerSession:
    """
    Pre-confirmation editing view of a scrim's roster.

    Attributes:
        scrim: The scrim being organized
        catalog: Source of valid roles per game
    """

    def __init__(self, scrim: Scrim, catalog: GameCatalog = GAME_CATALOG):
        self.scrim = scrim
        self.catalog = catalog
        self._roster: List[RosterSlot] = []
        self._history: List[OrganizerAction] = []
        self._locked = False

    # ── Read helpers ─────────────────────────────────────────

    @property
    def roster(self) -> List[RosterSlot]:
        return list(self._roster)

    @property
    def history(self) -> List[OrganizerAction]:
        return list(self._history)

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def can_undo(self) -> bool:
        return not self._locked and bool(self._history)

    def find_slot(self, user_id: str) -> Optional[RosterSlot]:
        for slot in self._roster:
            if slot.user_id == user_id:
                return slot
        return None

    def find_slot_by_role(self, role: Role) -> Optional[RosterSlot]:
        for slot in self._roster:
            if slot.role == role:
                return slot
        return None

    def is_role_taken(self, role: Role) -> bool:
        return self.find_slot_by_role(role) is not None

    def is_valid_role(self, role: Optional[Role]) -> bool:
        return self.catalog.is_valid_role(self.scrim.game.name, role)

    # ── Editing ──────────────────────────────────────────────

    def execute(self, action: OrganizerAction) -> None:
        """
        Run an action and push it onto the history.

        Raises:
            SessionLockedError: If the session is locked or the scrim
                is past LOBBY_FORMED
            PreconditionError: If the action's preconditions fail
        """
        self._ensure_editable("execute")
        if not action.can_execute(self):
            raise PreconditionError(
                f"Cannot {action.description}",
                scrim_id=self.scrim.scrim_id,
                state=self.scrim.status.value,
                action=action.action_type,
            )
        action.execute(self)
        self._history.append(action)
        logger.info(f"[{self.scrim.scrim_id}] Executed: {action.description}")

    def undo_last(self) -> OrganizerAction:
        """
        Reverse the most recent action.

        Returns:
            The action that was undone

        Raises:
            NothingToUndoError: If the history is empty or the session is locked
            SessionLockedError: If the scrim is past LOBBY_FORMED
            PreconditionError: If the action cannot be reversed in the
                scrim's current state; the history is left intact
        """
        if self._locked or not self._history:
            raise NothingToUndoError(
                "No action to undo",
                scrim_id=self.scrim.scrim_id, state=self.scrim.status.value,
            )
        self._ensure_editable("undo")
        action = self._history[-1]
        if not action.can_undo(self):
            raise PreconditionError(
                f"Cannot undo '{action.description}' while {self.scrim.status.value}",
                scrim_id=self.scrim.scrim_id,
                state=self.scrim.status.value,
                action=action.action_type,
            )
        action.undo(self)
        self._history.pop()
        logger.info(f"[{self.scrim.scrim_id}] Undone: {action.description}")
        return action

    def confirm(self) -> ScrimStatus:
        """
        Commit the working roster onto the scrim and lock the session.

        Every slot becomes a CONFIRMED attendance carrying the slot's
        role. The history is discarded, then the scrim re-evaluates its
        roster and may form the lobby or move to CONFIRMED.

        Returns:
            The scrim's status after reconciliation

        Raises:
            SessionLockedError: If the session was already confirmed or
                the scrim is past LOBBY_FORMED
            PreconditionError: If a rostered player already declined;
                nothing is committed and the session stays editable
        """
        self._ensure_editable("confirm")
        declined = []
        for slot in self._roster:
            attendance = self.scrim.attendance_for(slot.user_id)
            if attendance is not None and attendance.is_rejected:
                declined.append(slot.user_id)
        if declined:
            raise PreconditionError(
                f"Cannot confirm: {', '.join(declined)} already declined",
                scrim_id=self.scrim.scrim_id, state=self.scrim.status.value,
            )
        for slot in self._roster:
            self.scrim.commit_attendance(slot.user_id, slot.role)
            slot.confirmed = True
        self._locked = True
        self._history.clear()
        logger.info(
            f"[{self.scrim.scrim_id}] Session confirmed with {len(self._roster)} players"
        )
        return self.scrim.reconcile()

    # ── Internal ─────────────────────────────────────────────

    def _remove_slot(self, user_id: str) -> None:
        self._roster[:] = [s for s in self._roster if s.user_id != user_id]

    def _ensure_editable(self, operation: str) -> None:
        if self._locked:
            raise SessionLockedError(
                f"Cannot {operation}: the session is already confirmed",
                scrim_id=self.scrim.scrim_id, state=self.scrim.status.value,
            )
        if self.scrim.status not in EDITABLE_STATES:
            raise SessionLockedError(
                f"Cannot {operation}: the scrim is {self.scrim.status.value}",
                scrim_id=self.scrim.scrim_id, state=self.scrim.status.value,
            )
