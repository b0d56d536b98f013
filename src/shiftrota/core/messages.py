"""Message catalog for errors and text summaries."""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    # validation
    "name.not.defined": "The name must be defined.",
    "start.not.defined": "The starting time must be defined.",
    "duration.not.defined": "The duration must be defined and greater than zero.",
    "duration.not.allowed": "The duration cannot exceed 24 hours.",
    "shift.not.defined": "The starting shift must be specified.",
    "days.negative": "The number of days on and days off must be non-negative.",
    "rotation.not.defined": "The rotation must be defined.",
    # uniqueness / referential integrity
    "team.already.exists": "Team {0} already exists.",
    "shift.already.exists": "Shift {0} already exists.",
    "rotation.already.exists": "Rotation {0} already exists.",
    "nonworking.period.already.exists": "Non-working period {0} already exists.",
    "shift.in.use": "Shift {0} is being used by a team rotation and cannot be deleted.",
    "rotation.in.use": "Rotation {0} is being used by team {1} and cannot be deleted.",
    # ordering / range
    "end.earlier.than.start": "The ending {1} is earlier than the starting {0}.",
    "date.before.rotation": "The date {1} precedes the rotation start {0}.",
    "shift.spans.midnight": "Shift {0} spans midnight; specify the side of midnight for {1} to {2}.",
    "rotation.empty": "Rotation {0} has no days defined.",
    "zone.unknown": "No time zone found with key {0}.",
    # labels
    "schedule": "Schedule",
    "period.start": "Start",
    "period.end": "End",
    "breaks": "breaks",
    "rotation.duration": "Rotation duration",
    "rotation.days": "Days in rotation",
    "rotation.working": "Scheduled working time",
    "rotation.periods": "Periods",
    "rotation.on": "on",
    "rotation.off": "off",
    "rotation.percentage": "Percentage worked",
    "rotation.start": "Rotation start",
    "team.hours": "Average hours worked per week",
    "team": "Team",
    "shift": "Shift",
    "member.id": "Member ID",
    "schedule.working": "Working time",
    "schedule.shifts": "Shifts",
    "schedule.teams": "Teams",
    "schedule.coverage": "Total team coverage",
    "schedule.non": "Non-working periods",
    "schedule.total": "Total non-working time (minutes)",
    "shifts.day": "Day",
    "shifts.non.working": "Non-working",
}


def get_message(key: str) -> str:
    """Return the catalog text for ``key`` (raises ``KeyError`` for unknown keys)."""

    return MESSAGES[key]


def format_message(key: str, *args: object) -> str:
    return get_message(key).format(*args)


__all__ = ["MESSAGES", "get_message", "format_message"]
