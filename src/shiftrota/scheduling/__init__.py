"""Scheduling model: shifts, rotations, teams, non-working periods and the work schedule."""

from .named import Named
from .nonworking import NonWorkingPeriod
from .periods import DAY_OFF, Break, DayOff, Shift, TimePeriod
from .rotation import Rotation, RotationSegment
from .schedule import WorkSchedule
from .team import ShiftInstance, Team, TeamMember, TeamMemberException

__all__ = [
    "Named",
    "TimePeriod",
    "Break",
    "DayOff",
    "DAY_OFF",
    "Shift",
    "RotationSegment",
    "Rotation",
    "NonWorkingPeriod",
    "TeamMember",
    "TeamMemberException",
    "ShiftInstance",
    "Team",
    "WorkSchedule",
]
