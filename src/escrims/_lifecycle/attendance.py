# Area: Lifecycle
"""Attendance entity — a roster member's promise to show up."""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..errors import InvalidTransitionError
from ..games import Role
from .enums import AttendanceStatus


@dataclass
class Attendance:
    """
    Attendance record of one accepted applicant.

    Created in bulk when the lobby forms, or by the organizer session on
    confirmation. ``role`` is None until the organizer assigns one.
    """

    scrim_id: str
    user_id: str
    role: Optional[Role] = None
    status: AttendanceStatus = AttendanceStatus.PENDING
    attendance_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    requested_at: datetime = field(default_factory=datetime.now)
    responded_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == AttendanceStatus.PENDING

    @property
    def is_confirmed(self) -> bool:
        return self.status == AttendanceStatus.CONFIRMED

    @property
    def is_rejected(self) -> bool:
        return self.status == AttendanceStatus.REJECTED

    @property
    def has_role(self) -> bool:
        return self.role is not None

    def confirm(self) -> None:
        self._respond(AttendanceStatus.CONFIRMED, "confirm attendance")

    def reject(self) -> None:
        self._respond(AttendanceStatus.REJECTED, "reject attendance")

    def _respond(self, status: AttendanceStatus, operation: str) -> None:
        if not self.is_pending:
            raise InvalidTransitionError(
                operation, self.status.value,
                "only pending attendances can be answered",
                scrim_id=self.scrim_id,
            )
        self.status = status
        self.responded_at = datetime.now()
