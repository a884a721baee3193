# Area: Lifecycle
"""
escrims._lifecycle.enums — Lifecycle enums
==========================================

States of a scrim, the events emitted on its transitions, and the
status values of applications and attendances.
"""

from enum import Enum


class ScrimStatus(Enum):
    """
    States of the scrim state machine.

    State transitions:
    SEEKING -> LOBBY_FORMED (accepted applications reach the slot count)
    LOBBY_FORMED -> CONFIRMED (every attendance confirmed)
    LOBBY_FORMED -> SEEKING (any attendance rejected)
    CONFIRMED -> IN_PROGRESS (start, at most 10 minutes early)
    IN_PROGRESS -> FINISHED (finish)
    SEEKING / LOBBY_FORMED / CONFIRMED -> CANCELLED (cancel)
    FINISHED and CANCELLED are terminal.
    """
    SEEKING = "SEEKING"
    LOBBY_FORMED = "LOBBY_FORMED"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class LifecycleEvent(Enum):
    """
    Events handed to the NotificationSink.

    - LOBBY_FORMED: every slot holds an accepted applicant
    - ALL_CONFIRMED: every attendance confirmed
    - REOPENED: an attendance was rejected, the scrim seeks players again
    - IN_PROGRESS: the match started
    - FINISHED: the match ended
    - CANCELLED: the organizer cancelled the scrim
    """
    LOBBY_FORMED = "LOBBY_FORMED"
    ALL_CONFIRMED = "ALL_CONFIRMED"
    REOPENED = "REOPENED"
    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class ApplicationStatus(Enum):
    """Status of an application; ACCEPTED and REJECTED are terminal."""
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class AttendanceStatus(Enum):
    """Status of an attendance; CONFIRMED and REJECTED are terminal."""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    REJECTED = "REJECTED"
