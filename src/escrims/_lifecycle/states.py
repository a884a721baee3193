# Area: Lifecycle
"""
escrims._lifecycle.states — Scrim states
========================================

Each scrim state owns the business rules for every lifecycle
operation. ``Scrim`` delegates to its current state, which validates,
mutates the scrim's collections and may install the next state.

Operations not listed for a state raise InvalidTransitionError before
touching the scrim.

    state          apply  confirm  start  finish  cancel
    SEEKING        yes    -        -      -       yes
    LOBBY_FORMED   -      yes      -      -       yes
    CONFIRMED      -      -        yes    -       yes
    IN_PROGRESS    -      -        -      yes     -
    FINISHED       -      -        -      -       -
    CANCELLED      -      -        -      -       -

Recording player stats, the MVP and the winner is only allowed while
FINISHED.
"""

from __future__ import annotations
import logging
from abc import ABC
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Dict, Optional, Type

from ..errors import InvalidTransitionError, NotFoundError, ValidationError
from ..games import Role
from .application import Application
from .attendance import Attendance
from .enums import AttendanceStatus, LifecycleEvent, ScrimStatus
from .statistics import CompletionStats, PlayerStats, build_completion_stats

if TYPE_CHECKING:
    from .scrim import Scrim

logger = logging.getLogger("escrims.lifecycle.states")

NO_OPEN_SLOTS = "No open slots. Every slot already holds an accepted player"

# Result recording is only open once the scrim is FINISHED
RESULT_REFUSALS = {
    "record player stats": "results are recorded once the scrim is FINISHED",
    "designate MVP": "results are recorded once the scrim is FINISHED",
    "declare winner": "results are recorded once the scrim is FINISHED",
}


class ScrimState(ABC):
    """
    Base class for scrim states.

    Every operation refuses by default; concrete states override the
    ones they allow. ``refusals`` maps an operation name to the reason
    given when it is refused.
    """

    status: ScrimStatus
    refusals: Dict[str, str] = {}

    def _refuse(self, scrim: "Scrim", operation: str) -> InvalidTransitionError:
        reason = self.refusals.get(
            operation, RESULT_REFUSALS.get(operation, "operation not allowed")
        )
        return InvalidTransitionError(
            operation, self.status.value, reason, scrim_id=scrim.scrim_id
        )

    # ── Lifecycle operations ─────────────────────────────────

    def apply(self, scrim: "Scrim", application: Application) -> None:
        raise self._refuse(scrim, "apply")

    def confirm_attendance(self, scrim: "Scrim", user_id: str, accepted: bool) -> None:
        raise self._refuse(scrim, "confirm attendance")

    def start(self, scrim: "Scrim", now: datetime) -> None:
        raise self._refuse(scrim, "start")

    def finish(self, scrim: "Scrim", now: datetime) -> CompletionStats:
        raise self._refuse(scrim, "finish")

    def cancel(self, scrim: "Scrim") -> None:
        raise self._refuse(scrim, "cancel")

    # ── Organizer operations ─────────────────────────────────

    def admit_invited(self, scrim: "Scrim", application: Application) -> None:
        raise self._refuse(scrim, "admit invited player")

    def withdraw(self, scrim: "Scrim", application: Application) -> None:
        raise self._refuse(scrim, "withdraw application")

    def commit_attendance(self, scrim: "Scrim", user_id: str,
                          role: Optional[Role]) -> Attendance:
        raise self._refuse(scrim, "commit attendance")

    # ── Result recording ─────────────────────────────────────

    def record_player_stats(self, scrim: "Scrim", user_id: str, kills: int,
                            assists: int, deaths: int, score: int) -> PlayerStats:
        raise self._refuse(scrim, "record player stats")

    def designate_mvp(self, scrim: "Scrim", user_id: str) -> None:
        raise self._refuse(scrim, "designate MVP")

    def declare_winner(self, scrim: "Scrim", team: str) -> None:
        raise self._refuse(scrim, "declare winner")

    def reconcile(self, scrim: "Scrim") -> None:
        """Re-evaluate the roster outside an operation. No-op by default."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.status.value}>"


class _OrganizingState(ScrimState):
    """Shared organizer rules for the two states that accept roster edits."""

    def commit_attendance(self, scrim: "Scrim", user_id: str,
                          role: Optional[Role]) -> Attendance:
        attendance = scrim.attendance_for(user_id)
        if attendance is None:
            attendance = Attendance(scrim_id=scrim.scrim_id, user_id=user_id)
            scrim._attendances.append(attendance)
            logger.info(f"[{scrim.scrim_id}] Created attendance for {user_id}")
        if attendance.is_pending:
            attendance.confirm()
        elif attendance.is_rejected:
            raise InvalidTransitionError(
                "commit attendance", self.status.value,
                f"'{user_id}' already declined", scrim_id=scrim.scrim_id,
            )
        if role is not None:
            attendance.role = role
        return attendance

    def cancel(self, scrim: "Scrim") -> None:
        scrim._transition(CancelledState(), LifecycleEvent.CANCELLED)


class SeekingState(_OrganizingState):
    """Recruiting: applications are validated and auto-accepted or rejected."""

    status = ScrimStatus.SEEKING
    refusals = {
        "confirm attendance": "the lobby is not formed yet",
        "start": "the scrim must be CONFIRMED first",
        "finish": "the scrim must be IN_PROGRESS first",
    }

    def apply(self, scrim: "Scrim", application: Application) -> None:
        reason = application.check_requirements(
            scrim.rank_min, scrim.rank_max, scrim.latency_max
        )
        # Invited players can fill every slot while the scrim is still SEEKING
        if reason is None and len(scrim.accepted_applications()) >= scrim.slots:
            reason = NO_OPEN_SLOTS
        if reason is not None:
            application.reject(reason)
            scrim._applications.append(application)
            logger.info(f"[{scrim.scrim_id}] Rejected {application.user_id}: {reason}")
            return

        application.accept()
        scrim._applications.append(application)
        logger.info(f"[{scrim.scrim_id}] Accepted {application.user_id}")
        self.reconcile(scrim)

    def admit_invited(self, scrim: "Scrim", application: Application) -> None:
        if len(scrim.accepted_applications()) >= scrim.slots:
            raise ValidationError(
                "Every slot already holds an accepted applicant",
                scrim_id=scrim.scrim_id, state=self.status.value,
            )
        application.accept()
        scrim._applications.append(application)
        logger.info(f"[{scrim.scrim_id}] Admitted invited player {application.user_id}")

    def withdraw(self, scrim: "Scrim", application: Application) -> None:
        if not any(a is application for a in scrim._applications):
            raise NotFoundError(
                f"No such application for '{application.user_id}'",
                scrim_id=scrim.scrim_id, state=self.status.value,
            )
        scrim._applications[:] = [a for a in scrim._applications if a is not application]
        scrim._attendances[:] = [
            a for a in scrim._attendances
            if not (a.user_id == application.user_id and a.is_pending)
        ]
        logger.info(f"[{scrim.scrim_id}] Withdrew application of {application.user_id}")

    def reconcile(self, scrim: "Scrim") -> None:
        accepted = scrim.accepted_applications()
        if len(accepted) < scrim.slots:
            return
        for application in accepted:
            if scrim.attendance_for(application.user_id) is None:
                scrim._attendances.append(
                    Attendance(scrim_id=scrim.scrim_id, user_id=application.user_id)
                )
        scrim._transition(LobbyFormedState(), LifecycleEvent.LOBBY_FORMED)


class LobbyFormedState(_OrganizingState):
    """Every slot is filled; waiting for each player to confirm attendance."""

    status = ScrimStatus.LOBBY_FORMED
    refusals = {
        "apply": "every slot is already filled",
        "start": "every player must confirm attendance first",
        "finish": "the scrim must be IN_PROGRESS first",
        "admit invited player": "every slot is already filled",
        "withdraw application": "the lobby is formed",
    }

    def confirm_attendance(self, scrim: "Scrim", user_id: str, accepted: bool) -> None:
        attendance = scrim.attendance_for(user_id)
        if attendance is None:
            raise NotFoundError(
                f"No attendance exists for '{user_id}'",
                scrim_id=scrim.scrim_id, state=self.status.value, user_id=user_id,
            )

        wanted = AttendanceStatus.CONFIRMED if accepted else AttendanceStatus.REJECTED
        if attendance.is_pending:
            if accepted:
                attendance.confirm()
            else:
                attendance.reject()
        elif attendance.status != wanted:
            raise InvalidTransitionError(
                "confirm attendance", self.status.value,
                f"attendance of '{user_id}' is already {attendance.status.value}",
                scrim_id=scrim.scrim_id,
            )

        if attendance.is_rejected:
            self._reopen(scrim, user_id)
        else:
            self.reconcile(scrim)

    def reconcile(self, scrim: "Scrim") -> None:
        attendances = scrim.attendances
        confirmed = [a for a in attendances if a.is_confirmed]
        if len(confirmed) >= scrim.slots and len(confirmed) == len(attendances):
            scrim._transition(ConfirmedState(), LifecycleEvent.ALL_CONFIRMED)

    def _reopen(self, scrim: "Scrim", user_id: str) -> None:
        # The whole confirmation round restarts once the lobby refills
        for application in scrim._applications:
            if application.user_id == user_id and application.is_accepted:
                scrim._applications.remove(application)
                break
        scrim._attendances.clear()
        logger.info(f"[{scrim.scrim_id}] {user_id} declined, attendances cleared")
        scrim._transition(SeekingState(), LifecycleEvent.REOPENED)


class ConfirmedState(ScrimState):
    """Every player confirmed; the scrim may start close to its scheduled time."""

    status = ScrimStatus.CONFIRMED
    refusals = {
        "apply": "the scrim is already confirmed",
        "confirm attendance": "every player already confirmed",
        "finish": "the scrim must be IN_PROGRESS first",
        "admit invited player": "the scrim is already confirmed",
        "withdraw application": "the scrim is already confirmed",
        "commit attendance": "the scrim is already confirmed",
    }

    def start(self, scrim: "Scrim", now: datetime) -> None:
        opens_at = scrim.scheduled_at - timedelta(minutes=scrim.start_window_minutes)
        if now < opens_at:
            raise InvalidTransitionError(
                "start", self.status.value,
                f"more than {scrim.start_window_minutes} minutes before "
                f"the scheduled time {scrim.scheduled_at.isoformat()}",
                scrim_id=scrim.scrim_id,
            )
        scrim._started_at = now
        scrim._transition(InProgressState(), LifecycleEvent.IN_PROGRESS)

    def cancel(self, scrim: "Scrim") -> None:
        scrim._transition(CancelledState(), LifecycleEvent.CANCELLED)


class InProgressState(ScrimState):
    """The match is being played; it can only be finished."""

    status = ScrimStatus.IN_PROGRESS
    refusals = {
        "apply": "the match already started",
        "confirm attendance": "the match already started",
        "start": "the match already started",
        "cancel": "a scrim in progress must be finished first",
        "admit invited player": "the match already started",
        "withdraw application": "the match already started",
        "commit attendance": "the match already started",
    }

    def finish(self, scrim: "Scrim", now: datetime) -> CompletionStats:
        stats = build_completion_stats(scrim, now)
        scrim._completion_stats = stats
        scrim._transition(FinishedState(), LifecycleEvent.FINISHED)
        return stats


class FinishedState(ScrimState):
    """Terminal: the match was played."""

    status = ScrimStatus.FINISHED
    refusals = {
        "apply": "the scrim is finished",
        "confirm attendance": "the scrim is finished",
        "start": "the scrim is finished",
        "finish": "the scrim is already finished",
        "cancel": "a finished scrim cannot be cancelled",
        "admit invited player": "the scrim is finished",
        "withdraw application": "the scrim is finished",
        "commit attendance": "the scrim is finished",
    }

    def record_player_stats(self, scrim: "Scrim", user_id: str, kills: int,
                            assists: int, deaths: int, score: int) -> PlayerStats:
        stats = scrim._completion_stats.record(user_id, kills, assists, deaths, score)
        logger.info(
            f"[{scrim.scrim_id}] Stats for {user_id}: "
            f"{kills}/{deaths}/{assists}, score {score}"
        )
        return stats

    def designate_mvp(self, scrim: "Scrim", user_id: str) -> None:
        scrim._completion_stats.designate_mvp(user_id)
        logger.info(f"[{scrim.scrim_id}] MVP: {user_id}")

    def declare_winner(self, scrim: "Scrim", team: str) -> None:
        scrim._completion_stats.declare_winner(team)
        logger.info(f"[{scrim.scrim_id}] Winner: {scrim._completion_stats.winner}")


class CancelledState(ScrimState):
    """Terminal: the organizer cancelled the scrim."""

    status = ScrimStatus.CANCELLED
    refusals = {
        "apply": "the scrim is cancelled",
        "confirm attendance": "the scrim is cancelled",
        "start": "a cancelled scrim cannot start",
        "finish": "a cancelled scrim cannot finish",
        "cancel": "the scrim is already cancelled",
        "admit invited player": "the scrim is cancelled",
        "withdraw application": "the scrim is cancelled",
        "commit attendance": "the scrim is cancelled",
    }


STATE_CLASSES: Dict[ScrimStatus, Type[ScrimState]] = {
    ScrimStatus.SEEKING: SeekingState,
    ScrimStatus.LOBBY_FORMED: LobbyFormedState,
    ScrimStatus.CONFIRMED: ConfirmedState,
    ScrimStatus.IN_PROGRESS: InProgressState,
    ScrimStatus.FINISHED: FinishedState,
    ScrimStatus.CANCELLED: CancelledState,
}


def create_state(tag: str) -> ScrimState:
    """
    Rebuild a state object from its tag.

    Args:
        tag: State name such as "SEEKING" (case-insensitive)

    Raises:
        ValidationError: If the tag names no known state
    """
    try:
        status = ScrimStatus((tag or "").strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown scrim state: {tag}", state=tag) from None
    return STATE_CLASSES[status]()
