# Area: Organizer
"""
Organizer session - undoable roster editing before a scrim is confirmed.

This package handles:
- The working roster of RosterSlots
- Invite, AssignRole and SwapRoles actions with exact undo
- Committing the roster as confirmed attendances
"""

from .roster import RosterSlot
from .actions import OrganizerAction, Invite, AssignRole, SwapRoles
from .session import OrganizerSession, EDITABLE_STATES

__all__ = [
    "RosterSlot",
    "OrganizerAction",
    "Invite",
    "AssignRole",
    "SwapRoles",
    "OrganizerSession",
    "EDITABLE_STATES",
]
