"""Time-of-day periods: shifts, breaks and the rotation day-off sentinel."""

from __future__ import annotations

import logging
from datetime import time, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import Field, PrivateAttr, field_validator

from shiftrota.core.errors import ShiftSpansMidnightError
from shiftrota.core.messages import format_message, get_message
from shiftrota.core.timeutils import (
    SECONDS_PER_DAY,
    plus_duration,
    second_of_day,
    to_rounded_second,
)
from shiftrota.scheduling.named import Named

if TYPE_CHECKING:  # pragma: no cover
    from shiftrota.scheduling.schedule import WorkSchedule

logger = logging.getLogger(__name__)

__all__ = ["TimePeriod", "Break", "DayOff", "Shift", "DAY_OFF"]

FULL_DAY = timedelta(seconds=SECONDS_PER_DAY)


class TimePeriod(Named):
    """Named period starting at a time of day and lasting at most 24 hours.

    ``end`` is ``start + duration`` taken modulo one day, so a period that runs past midnight has
    an ``end`` earlier than its ``start``.
    """

    start: time
    duration: timedelta

    @field_validator("start", mode="before")
    @classmethod
    def _start_defined(cls, value: object) -> object:
        if value is None:
            raise ValueError(get_message("start.not.defined"))
        return value

    @field_validator("duration", mode="before")
    @classmethod
    def _duration_defined(cls, value: object) -> object:
        if value is None:
            raise ValueError(get_message("duration.not.defined"))
        return value

    @field_validator("duration")
    @classmethod
    def _duration_in_range(cls, value: timedelta) -> timedelta:
        if value.total_seconds() <= 0:
            raise ValueError(get_message("duration.not.defined"))
        if value > FULL_DAY:
            raise ValueError(get_message("duration.not.allowed"))
        return value

    @property
    def end(self) -> time:
        return plus_duration(self.start, self.duration)

    def is_working_period(self) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        try:
            return (
                f"{self}, {get_message('period.start')}: {self.start} ({self.duration}), "
                f"{get_message('period.end')}: {self.end}"
            )
        except (KeyError, ValueError) as exc:
            logger.debug("Could not describe period %s: %s", self.name, exc)
            return self.name


class Break(TimePeriod):
    """Working period inside a shift (lunch, rest); counted as worked time."""

    def is_working_period(self) -> bool:
        return True


class DayOff(TimePeriod):
    """24-hour non-working day inside a rotation."""

    def is_working_period(self) -> bool:
        return False


DAY_OFF = DayOff(
    name="DAY_OFF",
    description="24 hour off period",
    start=time(0, 0),
    duration=FULL_DAY,
)


class Shift(TimePeriod):
    """Scheduled working period, possibly crossing midnight, with optional breaks.

    Working-time arithmetic is done on whole seconds of the day. A shift that crosses midnight is
    ambiguous for a single time of day, so callers pick the side of midnight explicitly.
    """

    breaks: list[Break] = Field(default_factory=list)
    _work_schedule: Any = PrivateAttr(default=None)

    def is_working_period(self) -> bool:
        return True

    @property
    def work_schedule(self) -> WorkSchedule | None:
        return self._work_schedule

    def add_break(self, period: Break) -> None:
        if period not in self.breaks:
            self.breaks.append(period)

    def remove_break(self, period: Break) -> None:
        if period in self.breaks:
            self.breaks.remove(period)

    def create_break(
        self,
        name: str,
        description: str | None,
        start: time,
        duration: timedelta,
    ) -> Break:
        period = Break(name=name, description=description, start=start, duration=duration)
        self.add_break(period)
        return period

    def calculate_break_time(self) -> timedelta:
        return sum((b.duration for b in self.breaks), timedelta(0))

    def spans_midnight(self) -> bool:
        return to_rounded_second(self.end) <= to_rounded_second(self.start)

    def calculate_working_time(
        self,
        from_time: time,
        to_time: time,
        before_midnight: bool | None = None,
    ) -> timedelta:
        """Working time of this shift between two times of day.

        Parameters
        ----------
        from_time, to_time:
            Query bounds. ``to_time`` earlier than ``from_time`` means the query crosses midnight.
        before_midnight:
            Required for shifts that span midnight: ``True`` reads a ``from_time`` that precedes
            both the shift start and end as belonging to the day the shift starts, ``False`` as
            the morning after. Omit it for shifts inside a single day.

        Raises
        ------
        ShiftSpansMidnightError
            When ``before_midnight`` is omitted for a shift crossing midnight.
        """

        if before_midnight is None:
            if self.spans_midnight():
                raise ShiftSpansMidnightError(
                    format_message("shift.spans.midnight", self.name, from_time, to_time)
                )
            before_midnight = True

        start_second = to_rounded_second(self.start)
        end_second = to_rounded_second(self.end)
        from_second = to_rounded_second(from_time)
        to_second = to_rounded_second(to_time)

        delta = to_second - from_second

        # start-to-start on a 24 hour shift is the whole shift
        if delta == 0 and from_second == start_second and self.duration == FULL_DAY:
            delta = SECONDS_PER_DAY

        if delta < 0:
            delta += SECONDS_PER_DAY

        if self.spans_midnight():
            if from_second < start_second and from_second < end_second and not before_midnight:
                from_second += SECONDS_PER_DAY
            to_second = from_second + delta
            end_second += SECONDS_PER_DAY

        from_second = min(max(from_second, start_second), end_second)
        to_second = min(max(to_second, start_second), end_second)

        return timedelta(seconds=max(to_second - from_second, 0))

    def is_in_shift(self, value: time) -> bool:
        start = self.start
        end = self.end

        if start < end:
            return start <= value <= end

        # crosses midnight: after-midnight part, then before-midnight part
        second = second_of_day(value)
        return second <= second_of_day(end) or second >= second_of_day(start)

    def __lt__(self, other: Shift) -> bool:
        return self.name < other.name

    def describe(self) -> str:
        text = super().describe()
        if self.breaks:
            try:
                text += f"\n      {len(self.breaks)} {get_message('breaks')}:"
            except KeyError as exc:
                logger.debug("Could not describe breaks of %s: %s", self.name, exc)
            for period in self.breaks:
                text += f"\n      {period.describe()}"
        return text
