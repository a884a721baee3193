# Area: Lifecycle
"""
escrims._lifecycle.scrim — Scrim aggregate
==========================================

The Scrim is the aggregate root of the lifecycle. It owns the
applications and attendances and delegates every lifecycle operation
to its current ScrimState. Collections are only mutated by the states.

Transitions that matter to players are reported to an optional
NotificationSink. Sink failures are logged and never undo a transition.
"""

from __future__ import annotations
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..collaborators import NotificationSink
from ..errors import DuplicateApplicationError, ValidationError
from ..games import Game, Role, ScrimFormat
from ..players import Player
from .application import Application
from .attendance import Attendance
from .enums import LifecycleEvent, ScrimStatus
from .states import ScrimState, SeekingState
from .statistics import CompletionStats, PlayerStats

logger = logging.getLogger("escrims.lifecycle")

DEFAULT_START_WINDOW_MINUTES = 10


class Scrim:
    """
    A scheduled practice match and its roster.

    Args:
        game: Game being played
        scheduled_at: Planned start time
        rank_min: Lowest accepted rank
        rank_max: Highest accepted rank
        fmt: Match format, defaults to the game's default format
        latency_max: Highest accepted latency in ms, -1 for unlimited
        slots: Roster size, must equal the format's total player count
        required_roles: Roles the organizer wants covered (informational)
        created_by: Organizer user id
        matchmaking_strategy: Preferred strategy name
        notifier: Optional sink for lifecycle events
        start_window_minutes: How early before scheduled_at a start is allowed
        scrim_id: Identifier, a new uuid4 when omitted
        created_at: Creation time, now when omitted

    Raises:
        ValidationError: If the configuration is inconsistent
    """

    def __init__(
        self,
        game: Game,
        scheduled_at: datetime,
        rank_min: int,
        rank_max: int,
        fmt: Optional[ScrimFormat] = None,
        latency_max: int = -1,
        slots: Optional[int] = None,
        required_roles: Optional[Sequence[Role]] = None,
        created_by: Optional[str] = None,
        matchmaking_strategy: str = "MMR",
        notifier: Optional[NotificationSink] = None,
        start_window_minutes: int = DEFAULT_START_WINDOW_MINUTES,
        scrim_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ):
        fmt = fmt or game.default_format
        expected_slots = fmt.total_players
        if not game.is_valid_format(fmt):
            raise ValidationError(
                f"Format '{fmt.name}' does not belong to {game.name}",
                game=game.name, format=fmt.name,
            )
        if slots is not None and slots != expected_slots:
            raise ValidationError(
                f"Slot count {slots} does not match format '{fmt.name}' "
                f"({expected_slots} players)",
                slots=slots, expected=expected_slots,
            )
        if rank_min > rank_max:
            raise ValidationError(
                f"rank_min {rank_min} is greater than rank_max {rank_max}",
                rank_min=rank_min, rank_max=rank_max,
            )
        if latency_max != -1 and latency_max < 0:
            raise ValidationError(
                f"latency_max must be -1 or non-negative, got {latency_max}",
                latency_max=latency_max,
            )
        if start_window_minutes < 0:
            raise ValidationError(
                f"start_window_minutes must be non-negative, got {start_window_minutes}",
                start_window_minutes=start_window_minutes,
            )
        roles = tuple(required_roles or ())
        for role in roles:
            if not game.is_valid_role(role):
                raise ValidationError(
                    f"Role '{role.name}' does not belong to {game.name}",
                    game=game.name, role=role.name,
                )

        self.scrim_id = scrim_id or str(uuid.uuid4())
        self.game = game
        self.format = fmt
        self.scheduled_at = scheduled_at
        self.rank_min = rank_min
        self.rank_max = rank_max
        self.latency_max = latency_max
        self.slots = expected_slots
        self.required_roles: Tuple[Role, ...] = roles
        self.created_by = created_by
        self.created_at = created_at or datetime.now()
        self.matchmaking_strategy = matchmaking_strategy
        self.start_window_minutes = start_window_minutes
        self.notifier = notifier

        self._state: ScrimState = SeekingState()
        self._applications: List[Application] = []
        self._attendances: List[Attendance] = []
        self._started_at: Optional[datetime] = None
        self._completion_stats: Optional[CompletionStats] = None

    # ── Read access ──────────────────────────────────────────

    @property
    def state(self) -> ScrimState:
        return self._state

    @property
    def status(self) -> ScrimStatus:
        return self._state.status

    @property
    def applications(self) -> List[Application]:
        return list(self._applications)

    @property
    def attendances(self) -> List[Attendance]:
        return list(self._attendances)

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    @property
    def completion_stats(self) -> Optional[CompletionStats]:
        return self._completion_stats

    def accepted_applications(self) -> List[Application]:
        return [a for a in self._applications if a.is_accepted]

    def pending_applications(self) -> List[Application]:
        return [a for a in self._applications if a.is_pending]

    def rejected_applications(self) -> List[Application]:
        return [a for a in self._applications if a.is_rejected]

    def confirmed_attendances(self) -> List[Attendance]:
        return [a for a in self._attendances if a.is_confirmed]

    def attendances_with_roles(self) -> List[Attendance]:
        return [a for a in self._attendances if a.has_role]

    def has_applied(self, user_id: str) -> bool:
        return self.application_for(user_id) is not None

    def application_for(self, user_id: str) -> Optional[Application]:
        for application in self._applications:
            if application.user_id == user_id:
                return application
        return None

    def attendance_for(self, user_id: str) -> Optional[Attendance]:
        for attendance in self._attendances:
            if attendance.user_id == user_id:
                return attendance
        return None

    def participant_ids(self) -> List[str]:
        """User ids of every accepted applicant, in application order."""
        return [a.user_id for a in self.accepted_applications()]

    def open_slots(self) -> int:
        return max(0, self.slots - len(self.accepted_applications()))

    # ── Lifecycle operations ─────────────────────────────────

    def apply(self, user_id: str, rank: int, latency_ms: int) -> Application:
        """
        Apply to the scrim with a rank and latency snapshot.

        An applicant outside the rank window or above the latency limit
        is stored as REJECTED with its reason; that is not an error.

        Raises:
            DuplicateApplicationError: If the user already applied
            InvalidTransitionError: If the scrim is not SEEKING
        """
        if self.has_applied(user_id):
            raise DuplicateApplicationError(
                user_id, scrim_id=self.scrim_id, state=self.status.value
            )
        application = Application(
            scrim_id=self.scrim_id, user_id=user_id,
            rank=rank, latency_ms=latency_ms,
        )
        self._state.apply(self, application)
        return application

    def apply_player(self, player: Player) -> Application:
        """Apply using the player's stored rank for this game and latency."""
        rank = player.rank_for(self.game.name)
        if rank is None:
            raise ValidationError(
                f"Player '{player.user_id}' has no rank for {self.game.name}",
                scrim_id=self.scrim_id, state=self.status.value,
                user_id=player.user_id,
            )
        return self.apply(player.user_id, rank, player.latency_ms)

    def confirm_attendance(self, user_id: str, accepted: bool = True) -> None:
        self._state.confirm_attendance(self, user_id, accepted)

    def start(self, now: Optional[datetime] = None) -> None:
        self._state.start(self, now or datetime.now())

    def finish(self, now: Optional[datetime] = None) -> CompletionStats:
        return self._state.finish(self, now or datetime.now())

    def cancel(self) -> None:
        self._state.cancel(self)

    def reconcile(self) -> ScrimStatus:
        """
        Re-evaluate the roster until the state settles.

        A lobby formed from an already confirmed roster moves straight
        on to CONFIRMED.

        Returns:
            The status after reconciliation
        """
        while True:
            before = self._state.status
            self._state.reconcile(self)
            if self._state.status == before:
                return before

    # ── Result recording ─────────────────────────────────────

    def record_player_stats(self, user_id: str, kills: int, assists: int,
                            deaths: int, score: int) -> PlayerStats:
        """
        Record one participant's numbers for a FINISHED scrim.

        Raises:
            InvalidTransitionError: If the scrim is not FINISHED
            NotFoundError: If the user did not take part
            ValidationError: If any number is negative
        """
        return self._state.record_player_stats(self, user_id, kills, assists, deaths, score)

    def designate_mvp(self, user_id: str) -> None:
        self._state.designate_mvp(self, user_id)

    def declare_winner(self, team: str) -> None:
        self._state.declare_winner(self, team)

    # ── Organizer hooks ──────────────────────────────────────

    def admit_invited(self, user_id: str, rank: int, latency_ms: int) -> Application:
        """Add an accepted application for an invited player without forming the lobby."""
        if self.has_applied(user_id):
            raise DuplicateApplicationError(
                user_id, scrim_id=self.scrim_id, state=self.status.value
            )
        application = Application(
            scrim_id=self.scrim_id, user_id=user_id,
            rank=rank, latency_ms=latency_ms,
        )
        self._state.admit_invited(self, application)
        return application

    def withdraw(self, application: Application) -> None:
        self._state.withdraw(self, application)

    def commit_attendance(self, user_id: str, role: Optional[Role]) -> Attendance:
        return self._state.commit_attendance(self, user_id, role)

    # ── Internal ─────────────────────────────────────────────

    def _transition(self, new_state: ScrimState,
                    event: Optional[LifecycleEvent] = None) -> None:
        old = self._state.status
        self._state = new_state
        logger.info(f"[{self.scrim_id}] State: {old.value} → {new_state.status.value}")
        if event is not None:
            self._emit(event)

    def _emit(self, event: LifecycleEvent) -> None:
        if self.notifier is None:
            return
        recipients = self.participant_ids()
        try:
            self.notifier.notify(event, self, recipients)
        except Exception:
            logger.warning(
                f"[{self.scrim_id}] Notification {event.value} failed",
                exc_info=True,
            )

    def _restore(
        self,
        state: ScrimState,
        applications: List[Application],
        attendances: List[Attendance],
        started_at: Optional[datetime] = None,
        completion_stats: Optional[CompletionStats] = None,
    ) -> None:
        """Install stored state and collections without running transitions."""
        self._state = state
        self._applications = list(applications)
        self._attendances = list(attendances)
        self._started_at = started_at
        self._completion_stats = completion_stats

    def __repr__(self) -> str:
        return (
            f"<Scrim {self.scrim_id} {self.game.name} {self.format.name} "
            f"{self.status.value} {len(self.accepted_applications())}/{self.slots}>"
        )
