"""Load YAML schedule definitions into :class:`~shiftrota.scheduling.WorkSchedule` objects."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from shiftrota.scenario.contract.models import ScheduleDefinition
from shiftrota.scheduling import TeamMember, WorkSchedule

logger = logging.getLogger(__name__)

REFERENCE_ZONE_ENV = "SHIFTROTA_REFERENCE_ZONE"

__all__ = ["REFERENCE_ZONE_ENV", "read_definition", "build_schedule", "load_schedule"]


def read_definition(path: str | Path) -> ScheduleDefinition:
    """Parse and validate a YAML schedule definition."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"Schedule file {path} must contain a mapping at the top level")
    return ScheduleDefinition.model_validate(data)


def _resolve_zone(definition: ScheduleDefinition, zone: str | None) -> str:
    if zone:
        return zone
    env_zone = os.environ.get(REFERENCE_ZONE_ENV)
    if env_zone:
        return env_zone
    return definition.settings.reference_zone or "UTC"


def build_schedule(definition: ScheduleDefinition, zone: str | None = None) -> WorkSchedule:
    """Create a work schedule from a validated definition.

    The reference zone is taken from ``zone``, then ``SHIFTROTA_REFERENCE_ZONE``, then
    ``settings.reference_zone``, falling back to UTC.
    """
    schedule = WorkSchedule(
        name=definition.name,
        description=definition.description,
        zone=_resolve_zone(definition, zone),
    )

    shifts = {}
    for shift_def in definition.shifts:
        shift = schedule.create_shift(
            shift_def.name, shift_def.description, shift_def.start, shift_def.duration
        )
        for break_def in shift_def.breaks:
            shift.create_break(
                break_def.name, break_def.description, break_def.start, break_def.duration
            )
        shifts[shift.name] = shift

    rotations = {}
    for rotation_def in definition.rotations:
        rotation = schedule.create_rotation(rotation_def.name, rotation_def.description)
        for segment in rotation_def.segments:
            rotation.add_segment(shifts[segment.shift], segment.days_on, segment.days_off)
        rotations[rotation.name] = rotation

    for team_def in definition.teams:
        team = schedule.create_team(
            team_def.name,
            team_def.description,
            rotations[team_def.rotation],
            team_def.rotation_start,
        )
        for member in team_def.members:
            team.add_member(
                TeamMember(
                    name=member.name, description=member.description, member_id=member.member_id
                )
            )

    for period_def in definition.non_working_periods:
        schedule.create_non_working_period(
            period_def.name, period_def.description, period_def.start, period_def.duration
        )

    logger.debug(
        "Built schedule %s: %d shifts, %d rotations, %d teams, %d non-working periods",
        schedule.name,
        len(schedule.shifts),
        len(schedule.rotations),
        len(schedule.teams),
        len(schedule.non_working_periods),
    )
    return schedule


def load_schedule(path: str | Path, zone: str | None = None) -> WorkSchedule:
    """Read a YAML schedule definition and build the work schedule it describes."""
    return build_schedule(read_definition(path), zone=zone)
