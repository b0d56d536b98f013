"""Rotating shift schedules and working-time calculations."""

from .core.errors import (
    DuplicateNameError,
    EntityInUseError,
    OrderingError,
    RotationRangeError,
    ScheduleError,
    ShiftSpansMidnightError,
)
from .scheduling import (
    Break,
    NonWorkingPeriod,
    Rotation,
    RotationSegment,
    Shift,
    ShiftInstance,
    Team,
    TeamMember,
    TeamMemberException,
    WorkSchedule,
)

__version__ = "0.1.0"

__all__ = [
    "WorkSchedule",
    "Shift",
    "Break",
    "Rotation",
    "RotationSegment",
    "Team",
    "TeamMember",
    "TeamMemberException",
    "ShiftInstance",
    "NonWorkingPeriod",
    "ScheduleError",
    "DuplicateNameError",
    "EntityInUseError",
    "OrderingError",
    "RotationRangeError",
    "ShiftSpansMidnightError",
]
