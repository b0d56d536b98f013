"""Work schedule: registry of shifts, rotations, teams and non-working periods."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from shiftrota.core.errors import DuplicateNameError, EntityInUseError, OrderingError
from shiftrota.core.messages import format_message, get_message
from shiftrota.core.timeutils import delta_days
from shiftrota.scheduling.named import Named
from shiftrota.scheduling.nonworking import NonWorkingPeriod
from shiftrota.scheduling.periods import Shift
from shiftrota.scheduling.rotation import Rotation
from shiftrota.scheduling.team import ShiftInstance, Team

logger = logging.getLogger(__name__)

__all__ = ["WorkSchedule"]

ONE_DAY = timedelta(days=1)


class WorkSchedule(Named):
    """Shift schedule worked by one or more teams.

    Attributes
    ----------
    teams, shifts, rotations:
        Registries keyed by name; use the ``create_*`` factories so names stay unique.
    non_working_periods:
        Holidays and outages, kept sorted by start.
    zone:
        Reference zone used to turn local timestamps into instants when measuring non-working
        time. Accepts a ``tzinfo`` or a zoneinfo key.
    """

    teams: list[Team] = Field(default_factory=list)
    shifts: list[Shift] = Field(default_factory=list)
    rotations: list[Rotation] = Field(default_factory=list)
    non_working_periods: list[NonWorkingPeriod] = Field(default_factory=list)
    zone: tzinfo = timezone.utc

    @field_validator("zone", mode="before")
    @classmethod
    def _coerce_zone(cls, value: object) -> object:
        if value is None:
            return timezone.utc
        if isinstance(value, str):
            if value.upper() == "UTC":
                return timezone.utc
            try:
                return ZoneInfo(value)
            except ZoneInfoNotFoundError as exc:
                raise ValueError(format_message("zone.unknown", value)) from exc
        return value

    @field_validator("non_working_periods")
    @classmethod
    def _sort_periods(cls, value: list[NonWorkingPeriod]) -> list[NonWorkingPeriod]:
        return sorted(value)

    def model_post_init(self, __context: Any) -> None:
        for entity in (*self.shifts, *self.teams, *self.non_working_periods):
            entity._work_schedule = self

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name in ("shifts", "teams", "non_working_periods"):
            for entity in getattr(self, name):
                entity._work_schedule = self

    # factories

    def create_shift(
        self, name: str, description: str | None, start: time, duration: timedelta
    ) -> Shift:
        shift = Shift(name=name, description=description, start=start, duration=duration)
        if shift in self.shifts:
            raise DuplicateNameError(format_message("shift.already.exists", name))
        shift._work_schedule = self
        self.shifts.append(shift)
        return shift

    def create_rotation(self, name: str, description: str | None = None) -> Rotation:
        rotation = Rotation(name=name, description=description)
        if rotation in self.rotations:
            raise DuplicateNameError(format_message("rotation.already.exists", name))
        self.rotations.append(rotation)
        return rotation

    def create_team(
        self, name: str, description: str | None, rotation: Rotation, rotation_start: date
    ) -> Team:
        team = Team(
            name=name, description=description, rotation=rotation, rotation_start=rotation_start
        )
        if team in self.teams:
            raise DuplicateNameError(format_message("team.already.exists", name))
        team._work_schedule = self
        self.teams.append(team)
        return team

    def create_non_working_period(
        self,
        name: str,
        description: str | None,
        start_date_time: datetime,
        duration: timedelta,
    ) -> NonWorkingPeriod:
        period = NonWorkingPeriod(
            name=name,
            description=description,
            start_date_time=start_date_time,
            duration=duration,
        )
        if period in self.non_working_periods:
            raise DuplicateNameError(format_message("nonworking.period.already.exists", name))
        period._work_schedule = self
        self.non_working_periods.append(period)
        self.non_working_periods.sort()
        return period

    # deletion

    def delete_shift(self, shift: Shift) -> None:
        """Remove ``shift`` unless a team's rotation still works it."""

        if shift not in self.shifts:
            return
        for team in self.teams:
            if team.rotation.uses_shift(shift):
                raise EntityInUseError(format_message("shift.in.use", shift.name))
        self.shifts.remove(shift)
        logger.debug("Deleted shift %s from %s", shift.name, self.name)

    def delete_rotation(self, rotation: Rotation) -> None:
        if rotation not in self.rotations:
            return
        for team in self.teams:
            if team.rotation == rotation:
                raise EntityInUseError(
                    format_message("rotation.in.use", rotation.name, team.name)
                )
        self.rotations.remove(rotation)
        logger.debug("Deleted rotation %s from %s", rotation.name, self.name)

    def delete_team(self, team: Team) -> None:
        if team in self.teams:
            self.teams.remove(team)
            logger.debug("Deleted team %s from %s", team.name, self.name)

    def delete_non_working_period(self, period: NonWorkingPeriod) -> None:
        if period in self.non_working_periods:
            self.non_working_periods.remove(period)
            logger.debug("Deleted non-working period %s from %s", period.name, self.name)

    # working time

    @property
    def rotation_duration(self) -> timedelta:
        return sum((team.rotation_duration for team in self.teams), timedelta(0))

    @property
    def rotation_working_time(self) -> timedelta:
        return sum((team.rotation.working_time for team in self.teams), timedelta(0))

    def team_working_time(self, team: Team, from_dt: datetime, to_dt: datetime) -> timedelta:
        """Working time of ``team`` in the range, counted from its rotation start at the earliest."""

        if from_dt > to_dt:
            raise OrderingError(format_message("end.earlier.than.start", from_dt, to_dt))
        team_start = datetime.combine(team.rotation_start, time.min)
        if team_start > to_dt:
            return timedelta(0)
        return team.calculate_working_time(max(from_dt, team_start), to_dt)

    def calculate_working_time(self, from_dt: datetime, to_dt: datetime) -> timedelta:
        """Working time of all teams between two timestamps, less non-working time, never negative."""

        total = sum(
            (self.team_working_time(team, from_dt, to_dt) for team in self.teams), timedelta(0)
        )
        total -= self.calculate_non_working_time(from_dt, to_dt)
        return max(total, timedelta(0))

    def _instant(self, value: datetime) -> datetime:
        return value.replace(tzinfo=self.zone).astimezone(timezone.utc)

    def calculate_non_working_time(self, from_dt: datetime, to_dt: datetime) -> timedelta:
        """Overlap of ``[from_dt, to_dt]`` with the non-working periods.

        Single sweep over the start-sorted periods; stops at the first period that begins at or
        after ``to_dt`` or that ends at or after it.
        """

        if from_dt > to_dt:
            raise OrderingError(format_message("end.earlier.than.start", from_dt, to_dt))

        from_instant = self._instant(from_dt)
        to_instant = self._instant(to_dt)
        total = timedelta(0)

        for period in self.non_working_periods:
            start = self._instant(period.start_date_time)
            end = self._instant(period.end_date_time)

            if from_instant >= end:
                continue
            if to_instant <= start:
                break

            total += min(end, to_instant) - max(start, from_instant)

            if end >= to_instant:
                break

        return total

    # shift instances

    def get_shift_instances_for_day(self, day: date) -> list[ShiftInstance]:
        """Instances starting on ``day``, excluding teams not yet started and non-working days."""

        instances: list[ShiftInstance] = []
        for team in self.teams:
            if team.rotation_start > day:
                continue
            instance = team.get_shift_instance_for_day(day)
            if instance is None:
                continue
            start_day = instance.start_date_time.date()
            if any(period.is_in_period(start_day) for period in self.non_working_periods):
                continue
            instances.append(instance)
        instances.sort()
        return instances

    def get_all_shift_instances_for_day(self, day: date) -> list[ShiftInstance]:
        """Instances starting on ``day`` plus yesterday's instances that end on ``day``."""

        instances = self.get_shift_instances_for_day(day)
        for instance in self.get_shift_instances_for_day(day - ONE_DAY):
            if instance.end_date_time.date() == day:
                instances.append(instance)
        instances.sort()
        return instances

    def get_shift_instances_for_time(self, moment: datetime) -> list[ShiftInstance]:
        return [
            instance
            for instance in self.get_all_shift_instances_for_day(moment.date())
            if instance.is_in_shift_instance(moment)
        ]

    def shift_instances_by_day(
        self, start: date, end: date
    ) -> list[tuple[date, list[ShiftInstance]]]:
        """Shift instances for every day from ``start`` to ``end`` inclusive."""

        if end < start:
            raise OrderingError(format_message("end.earlier.than.start", start, end))
        days = [start + timedelta(days=offset) for offset in range(delta_days(start, end) + 1)]
        return [(day, self.get_shift_instances_for_day(day)) for day in days]

    def print_shift_instances(
        self, start: date, end: date, echo: Callable[[str], Any] = print
    ) -> None:
        for index, (day, instances) in enumerate(self.shift_instances_by_day(start, end), start=1):
            echo(f"[{index}] {get_message('shifts.day')}: {day}")
            if not instances:
                echo(f"   {get_message('shifts.non.working')}")
                continue
            for count, instance in enumerate(instances, start=1):
                echo(f"   ({count}){instance}")

    def describe(self) -> str:
        try:
            lines = [
                f"{get_message('schedule')}: {self}",
                f"{get_message('rotation.duration')}: {self.rotation_duration}, "
                f"{get_message('schedule.working')}: {self.rotation_working_time}",
                f"{get_message('schedule.shifts')}: ",
            ]
            lines.extend(
                f"   ({count}) {shift.describe()}" for count, shift in enumerate(self.shifts, start=1)
            )
            lines.append(f"{get_message('schedule.teams')}: ")
            coverage = 0.0
            for count, team in enumerate(self.teams, start=1):
                lines.append(f"   ({count}) {team.describe()}")
                coverage += team.percentage_worked
            lines.append(f"{get_message('schedule.coverage')}: {coverage:.2f}%")

            if self.non_working_periods:
                lines.append(f"{get_message('schedule.non')}:")
                total = timedelta(0)
                for count, period in enumerate(self.non_working_periods, start=1):
                    total += period.duration
                    lines.append(f"   ({count}) {period.describe()}")
                lines.append(f"{get_message('schedule.total')}: {int(total.total_seconds() // 60)}")
            return "\n".join(lines)
        except (KeyError, ValueError, ZeroDivisionError) as exc:
            logger.debug("Could not describe schedule %s: %s", self.name, exc)
            return self.name
