# Area: Shared
"""Notification sinks shipped with the package."""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Sequence, Tuple

from ..collaborators import NotificationSink

if TYPE_CHECKING:
    from .._lifecycle.enums import LifecycleEvent
    from .._lifecycle.scrim import Scrim

logger = logging.getLogger("escrims.notifications")


class LoggingNotificationSink(NotificationSink):
    """
    Writes every lifecycle event to the log and remembers it.

    ``delivered`` keeps (event, scrim_id, recipients) tuples in order,
    which makes the sink usable as a recorder in tests.
    """

    def __init__(self):
        self.delivered: List[Tuple["LifecycleEvent", str, Tuple[str, ...]]] = []

    def notify(
        self,
        event: "LifecycleEvent",
        scrim: "Scrim",
        recipients: Sequence[str],
    ) -> None:
        self.delivered.append((event, scrim.scrim_id, tuple(recipients)))
        logger.info(
            f"[{scrim.scrim_id}] {event.value} → {len(recipients)} recipient(s)",
            extra={"scrim_id": scrim.scrim_id, "event": event.value},
        )

    def events(self) -> List["LifecycleEvent"]:
        return [event for event, _, _ in self.delivered]
