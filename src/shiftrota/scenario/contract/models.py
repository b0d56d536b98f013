"""Pydantic models describing shiftrota schedule definitions."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator

_CLOCK = re.compile(r"^\s*(\d+):(\d{2})(?::(\d{2}))?\s*$")


def parse_duration(value: Any) -> Any:
    """Accept ``{hours, minutes, seconds}`` mappings, ``HH:MM[:SS]`` strings or a number of hours."""

    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError("Duration must be a mapping, an HH:MM[:SS] string or a number of hours")
    if isinstance(value, (int, float)):
        return timedelta(hours=value)
    if isinstance(value, dict):
        unknown = set(value) - {"days", "hours", "minutes", "seconds"}
        if unknown:
            raise ValueError(f"Unknown duration keys: {sorted(unknown)}")
        return timedelta(**{key: float(amount) for key, amount in value.items()})
    if isinstance(value, str):
        match = _CLOCK.match(value)
        if match is None:
            raise ValueError(f"Duration '{value}' is not in HH:MM[:SS] form")
        hours, minutes, seconds = match.groups()
        return timedelta(hours=int(hours), minutes=int(minutes), seconds=int(seconds or 0))
    return value


def parse_time_of_day(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        # YAML 1.1 reads unquoted 07:00 as a base-60 integer
        raise ValueError(f"Time of day {value} looks like an unquoted HH:MM value; quote it")
    return value


DurationField = Annotated[timedelta, BeforeValidator(parse_duration)]
TimeField = Annotated[time, BeforeValidator(parse_time_of_day)]


class Settings(BaseModel):
    """Schedule-wide settings.

    Attributes
    ----------
    reference_zone:
        Zoneinfo key used to measure non-working time. ``None`` defers to the environment / UTC.
    """

    reference_zone: str | None = None


class BreakDefinition(BaseModel):
    name: str
    description: str | None = None
    start: TimeField
    duration: DurationField


class ShiftDefinition(BaseModel):
    """Shift template: start time of day, duration of at most 24 hours, optional breaks."""

    name: str
    description: str | None = None
    start: TimeField
    duration: DurationField
    breaks: list[BreakDefinition] = Field(default_factory=list)

    @field_validator("duration")
    @classmethod
    def _duration_in_range(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("Shift duration must be positive")
        if value > timedelta(days=1):
            raise ValueError("Shift duration cannot exceed 24 hours")
        return value


class SegmentDefinition(BaseModel):
    shift: str
    days_on: int = Field(ge=0)
    days_off: int = Field(default=0, ge=0)


class RotationDefinition(BaseModel):
    name: str
    description: str | None = None
    segments: list[SegmentDefinition]

    @field_validator("segments")
    @classmethod
    def _segments_present(cls, value: list[SegmentDefinition]) -> list[SegmentDefinition]:
        if not value:
            raise ValueError("Rotation must define at least one segment")
        if sum(segment.days_on + segment.days_off for segment in value) == 0:
            raise ValueError("Rotation must span at least one day")
        return value


class MemberDefinition(BaseModel):
    name: str
    description: str | None = None
    member_id: str | None = None


class TeamDefinition(BaseModel):
    """Team anchored to a rotation; ``rotation_start`` is day 1 of the cycle."""

    name: str
    description: str | None = None
    rotation: str
    rotation_start: date
    members: list[MemberDefinition] = Field(default_factory=list)


class NonWorkingPeriodDefinition(BaseModel):
    name: str
    description: str | None = None
    start: datetime
    duration: DurationField

    @field_validator("duration")
    @classmethod
    def _duration_positive(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("Non-working period duration must be positive")
        return value


class ScheduleDefinition(BaseModel):
    """Complete schedule definition as read from YAML.

    Cross-validation checks that names are unique per collection, that rotation segments refer to
    defined shifts, and that teams refer to defined rotations.
    """

    name: str
    description: str | None = None
    settings: Settings = Field(default_factory=Settings)
    shifts: list[ShiftDefinition] = Field(default_factory=list)
    rotations: list[RotationDefinition] = Field(default_factory=list)
    teams: list[TeamDefinition] = Field(default_factory=list)
    non_working_periods: list[NonWorkingPeriodDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _cross_validate(self) -> ScheduleDefinition:
        for label, items in (
            ("shift", self.shifts),
            ("rotation", self.rotations),
            ("team", self.teams),
            ("non-working period", self.non_working_periods),
        ):
            seen: set[str] = set()
            for item in items:
                if item.name in seen:
                    raise ValueError(f"Duplicate {label} name: {item.name}")
                seen.add(item.name)

        shift_names = {shift.name for shift in self.shifts}
        for rotation in self.rotations:
            for segment in rotation.segments:
                if segment.shift not in shift_names:
                    raise ValueError(
                        f"Rotation {rotation.name} references unknown shift={segment.shift}"
                    )

        rotation_names = {rotation.name for rotation in self.rotations}
        for team in self.teams:
            if team.rotation not in rotation_names:
                raise ValueError(f"Team {team.name} references unknown rotation={team.rotation}")
        return self


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
