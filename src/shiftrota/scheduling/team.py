"""Teams working a rotation, their shift instances and members."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from shiftrota.core.errors import OrderingError, RotationRangeError, ScheduleError
from shiftrota.core.messages import format_message, get_message
from shiftrota.core.timeutils import delta_days, second_of_day
from shiftrota.scheduling.named import Named
from shiftrota.scheduling.periods import Shift
from shiftrota.scheduling.rotation import Rotation

if TYPE_CHECKING:  # pragma: no cover
    from shiftrota.scheduling.schedule import WorkSchedule

logger = logging.getLogger(__name__)

__all__ = ["TeamMember", "TeamMemberException", "ShiftInstance", "Team"]

ONE_DAY = timedelta(days=1)


class TeamMember(Named):
    """Person assigned to a team; two members are the same person when their ids match."""

    member_id: str | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TeamMember):
            return False
        if self.member_id is None or other.member_id is None:
            return self is other
        return self.member_id == other.member_id

    def __hash__(self) -> int:
        return hash((self.name, self.member_id))

    def describe(self) -> str:
        try:
            return f"{self}, {get_message('member.id')}: {self.member_id}"
        except KeyError as exc:
            logger.debug("Could not describe member %s: %s", self.name, exc)
            return self.name


class TeamMemberException(BaseModel):
    """Member swap for the shift instance starting at ``date_time``."""

    model_config = ConfigDict(validate_assignment=True)

    date_time: datetime
    reason: str | None = None
    addition: TeamMember | None = None
    removal: TeamMember | None = None


@dataclass(frozen=True, slots=True)
class ShiftInstance:
    """A shift worked by a team on a specific date."""

    shift: Shift
    team: Team
    start_date_time: datetime

    @property
    def end_date_time(self) -> datetime:
        return self.start_date_time + self.shift.duration

    def is_in_shift_instance(self, moment: datetime) -> bool:
        return self.start_date_time <= moment <= self.end_date_time

    def __lt__(self, other: ShiftInstance) -> bool:
        return self.start_date_time < other.start_date_time

    def __str__(self) -> str:
        try:
            return (
                f" {get_message('team')}: {self.team.name}, {get_message('shift')}: {self.shift.name}, "
                f"{get_message('period.start')}: {self.start_date_time}, "
                f"{get_message('period.end')}: {self.end_date_time}"
            )
        except KeyError as exc:
            logger.debug("Could not format shift instance: %s", exc)
            return f"{self.team.name}/{self.shift.name}@{self.start_date_time}"


class Team(Named):
    """Group of people rotating through ``rotation``, anchored so ``rotation_start`` is day 1.

    Attributes
    ----------
    rotation:
        Shared rotation definition (several teams may reference the same instance).
    rotation_start:
        Calendar date of the first day of the cycle; earlier dates are outside the rotation.
    members / member_exceptions:
        Assigned people and per-instance swaps keyed by shift-instance start.
    """

    rotation: Rotation
    rotation_start: date
    members: list[TeamMember] = Field(default_factory=list)
    member_exceptions: list[TeamMemberException] = Field(default_factory=list)
    _work_schedule: Any = PrivateAttr(default=None)
    _exception_cache: dict[datetime, TeamMemberException] | None = PrivateAttr(default=None)
    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    @field_validator("rotation", mode="before")
    @classmethod
    def _rotation_defined(cls, value: object) -> object:
        if value is None:
            raise ValueError(get_message("rotation.not.defined"))
        return value

    @field_validator("rotation_start", mode="before")
    @classmethod
    def _start_defined(cls, value: object) -> object:
        if value is None:
            raise ValueError(get_message("start.not.defined"))
        return value

    @property
    def work_schedule(self) -> WorkSchedule | None:
        return self._work_schedule

    # rotation statistics

    @property
    def rotation_duration(self) -> timedelta:
        return self.rotation.duration

    @property
    def percentage_worked(self) -> float:
        return self.rotation.working_time / self.rotation_duration * 100.0

    @property
    def hours_worked_per_week(self) -> timedelta:
        days = self.rotation_duration / ONE_DAY
        return self.rotation.working_time * (7.0 / days)

    # rotation lookups

    def get_day_in_rotation(self, day: date) -> int:
        """1-based position of ``day`` in the rotation cycle.

        Raises
        ------
        RotationRangeError
            When ``day`` precedes ``rotation_start``.
        """

        delta = delta_days(self.rotation_start, day)
        if delta < 0:
            raise RotationRangeError(
                format_message("date.before.rotation", self.rotation_start, day)
            )
        day_count = self.rotation.day_count
        if day_count == 0:
            raise ScheduleError(format_message("rotation.empty", self.rotation.name))
        return delta % day_count + 1

    def get_shift_instance_for_day(self, day: date) -> ShiftInstance | None:
        """Shift instance starting on ``day``, or ``None`` on a day off."""

        period = self.rotation.get_periods()[self.get_day_in_rotation(day) - 1]
        if not period.is_working_period():
            return None
        return ShiftInstance(
            shift=period,  # type: ignore[arg-type]
            team=self,
            start_date_time=datetime.combine(day, period.start),
        )

    def is_day_off(self, day: date) -> bool:
        period = self.rotation.get_periods()[self.get_day_in_rotation(day) - 1]
        return not period.is_working_period()

    def calculate_working_time(self, from_dt: datetime, to_dt: datetime) -> timedelta:
        """Scheduled working time between two local timestamps.

        Steps one day at a time, adding the after-midnight tail of the previous day's shift and the
        part of the current day's shift that falls inside the range. Whole rotation cycles that lie
        strictly inside the range are added in one step from ``rotation.working_time``.

        Raises
        ------
        OrderingError
            When ``from_dt`` is later than ``to_dt``.
        RotationRangeError
            When the range starts before ``rotation_start``.
        """

        if from_dt > to_dt:
            raise OrderingError(format_message("end.earlier.than.start", from_dt, to_dt))

        total = timedelta(0)
        this_date = from_dt.date()
        this_time = from_dt.time()
        to_date = to_dt.date()
        to_time = to_dt.time()
        day_count = self.rotation.day_count
        cycle_working_time = self.rotation.working_time

        # the rotation is undefined before its start, so nothing carries over into day 1
        last_shift: Shift | None = None
        yesterday = this_date - ONE_DAY
        if yesterday >= self.rotation_start:
            instance = self.get_shift_instance_for_day(yesterday)
            if instance is not None:
                last_shift = instance.shift

        while this_date <= to_date:
            last_day = this_date == to_date

            if last_shift is not None and last_shift.spans_midnight():
                if not last_day or to_time != time.min:
                    after_midnight = second_of_day(last_shift.end)
                    from_second = second_of_day(this_time)
                    if after_midnight > from_second:
                        total += timedelta(seconds=after_midnight - from_second)

            instance = self.get_shift_instance_for_day(this_date)
            if instance is not None:
                last_shift = instance.shift
                day_end = to_time if last_day else time.max
                total += last_shift.calculate_working_time(this_time, day_end, True)
            else:
                last_shift = None

            if self.get_day_in_rotation(this_date) == day_count:
                # whole cycles strictly before the last date; last_shift stays valid because
                # every skipped cycle ends on the same rotation slot as this_date
                cycles = (delta_days(this_date, to_date) - 1) // day_count
                if cycles > 0:
                    total += cycle_working_time * cycles
                    this_date += timedelta(days=cycles * day_count)
                    logger.debug("Team %s skipped %d rotation cycles", self.name, cycles)

            this_date += ONE_DAY
            this_time = time.min

        return total

    # members

    def add_member(self, member: TeamMember) -> None:
        if member not in self.members:
            self.members.append(member)

    def remove_member(self, member: TeamMember) -> None:
        if member in self.members:
            self.members.remove(member)

    def has_member(self, member: TeamMember) -> bool:
        return member in self.members

    @property
    def exception_cache_built(self) -> bool:
        return self._exception_cache is not None

    def add_member_exception(self, exception: TeamMemberException) -> None:
        with self._lock:
            self.member_exceptions.append(exception)
            self._exception_cache = None

    def remove_member_exception(self, exception: TeamMemberException) -> None:
        with self._lock:
            if exception in self.member_exceptions:
                self.member_exceptions.remove(exception)
            self._exception_cache = None

    def get_member_exception(self, start: datetime) -> TeamMemberException | None:
        with self._lock:
            if self._exception_cache is None:
                self._exception_cache = {exc.date_time: exc for exc in self.member_exceptions}
            return self._exception_cache.get(start)

    def get_members_for_instance(self, instance: ShiftInstance) -> list[TeamMember]:
        """Assigned members adjusted by the exception for this instance, if any."""

        members = list(self.members)
        exception = self.get_member_exception(instance.start_date_time)
        if exception is None:
            return members
        if exception.removal is not None and exception.removal in members:
            members.remove(exception.removal)
        if exception.addition is not None and exception.addition not in members:
            members.append(exception.addition)
        return members

    def __lt__(self, other: Team) -> bool:
        return self.name < other.name

    def describe(self) -> str:
        try:
            return (
                f"{self}, {get_message('rotation.start')}: {self.rotation_start}, "
                f"{self.rotation.describe()}, {get_message('rotation.percentage')}: "
                f"{self.percentage_worked:.2f}%, {get_message('team.hours')}: "
                f"{self.hours_worked_per_week}"
            )
        except (KeyError, ValueError, ZeroDivisionError) as exc:
            logger.debug("Could not describe team %s: %s", self.name, exc)
            return self.name
