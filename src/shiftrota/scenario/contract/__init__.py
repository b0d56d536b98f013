"""Schedule contract models (Pydantic schemas, validators)."""

from .models import (
    BreakDefinition,
    MemberDefinition,
    NonWorkingPeriodDefinition,
    RotationDefinition,
    ScheduleDefinition,
    SegmentDefinition,
    Settings,
    ShiftDefinition,
    TeamDefinition,
    parse_duration,
)

__all__ = [
    "parse_duration",
    "Settings",
    "BreakDefinition",
    "ShiftDefinition",
    "SegmentDefinition",
    "RotationDefinition",
    "MemberDefinition",
    "TeamDefinition",
    "NonWorkingPeriodDefinition",
    "ScheduleDefinition",
]
