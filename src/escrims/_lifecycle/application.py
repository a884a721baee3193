# Area: Lifecycle
"""
escrims._lifecycle.application — Application entity
===================================================

One application per (scrim, user). It snapshots the user's rank and
latency at the moment of applying; those values never change after
creation. Status moves one way, PENDING -> ACCEPTED | REJECTED.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..errors import InvalidTransitionError
from .enums import ApplicationStatus


@dataclass
class Application:
    """
    A user's request to join a scrim's roster.

    Attributes:
        scrim_id: Scrim applied to
        user_id: Applicant
        rank: Applicant's rank for the scrim's game when applying
        latency_ms: Applicant's average latency when applying
        status: PENDING, ACCEPTED or REJECTED
        rejection_reason: Human-readable reason when REJECTED
        application_id: Unique identifier
    """

    scrim_id: str
    user_id: str
    rank: int
    latency_ms: int
    status: ApplicationStatus = ApplicationStatus.PENDING
    rejection_reason: Optional[str] = None
    application_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def __setattr__(self, name, value):
        if name in ("rank", "latency_ms") and name in self.__dict__:
            raise AttributeError(
                f"Application.{name} is fixed once the application is created"
            )
        super().__setattr__(name, value)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    @property
    def is_accepted(self) -> bool:
        return self.status == ApplicationStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == ApplicationStatus.REJECTED

    def accept(self) -> None:
        if not self.is_pending:
            raise InvalidTransitionError(
                "accept application", self.status.value,
                "only pending applications can be accepted",
                scrim_id=self.scrim_id,
            )
        self.status = ApplicationStatus.ACCEPTED
        self.updated_at = datetime.now()

    def reject(self, reason: str) -> None:
        if not self.is_pending:
            raise InvalidTransitionError(
                "reject application", self.status.value,
                "only pending applications can be rejected",
                scrim_id=self.scrim_id,
            )
        self.status = ApplicationStatus.REJECTED
        self.rejection_reason = reason
        self.updated_at = datetime.now()

    def check_requirements(
        self, rank_min: int, rank_max: int, latency_max: int
    ) -> Optional[str]:
        """
        Check the snapshot against a scrim's requirements.

        Args:
            rank_min: Lowest accepted rank
            rank_max: Highest accepted rank
            latency_max: Highest accepted latency in ms, -1 for unlimited

        Returns:
            None if every requirement is met, otherwise the rejection reason
        """
        if self.rank < rank_min:
            return f"Rank too low. Minimum required: {rank_min}"
        if self.rank > rank_max:
            return f"Rank too high. Maximum allowed: {rank_max}"
        if latency_max != -1 and self.latency_ms > latency_max:
            return f"Latency too high. Maximum allowed: {latency_max}ms"
        return None
