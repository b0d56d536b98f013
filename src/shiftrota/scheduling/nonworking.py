"""Non-recurring non-working periods (holidays, planned outages)."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from pydantic import PrivateAttr, field_validator

from shiftrota.core.messages import get_message
from shiftrota.scheduling.named import Named

if TYPE_CHECKING:  # pragma: no cover
    from shiftrota.scheduling.schedule import WorkSchedule

logger = logging.getLogger(__name__)

__all__ = ["NonWorkingPeriod"]


class NonWorkingPeriod(Named):
    """Absolute calendar interval during which no team works.

    Attributes
    ----------
    start_date_time:
        Local start timestamp.
    duration:
        Positive length of the period; may span several days.
    """

    start_date_time: datetime
    duration: timedelta
    _work_schedule: Any = PrivateAttr(default=None)

    @field_validator("start_date_time", mode="before")
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
    def _duration_positive(cls, value: timedelta) -> timedelta:
        if value.total_seconds() <= 0:
            raise ValueError(get_message("duration.not.defined"))
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        # the owning schedule sweeps its periods in start order
        if name == "start_date_time" and self._work_schedule is not None:
            self._work_schedule.non_working_periods.sort()

    @property
    def end_date_time(self) -> datetime:
        return self.start_date_time + self.duration

    @property
    def work_schedule(self) -> WorkSchedule | None:
        return self._work_schedule

    def is_in_period(self, day: date) -> bool:
        """True when ``day`` falls between the start and end dates, both inclusive."""

        return self.start_date_time.date() <= day <= self.end_date_time.date()

    def __lt__(self, other: NonWorkingPeriod) -> bool:
        return self.start_date_time < other.start_date_time

    def describe(self) -> str:
        try:
            return (
                f"{self}, {get_message('period.start')}: {self.start_date_time} ({self.duration}), "
                f"{get_message('period.end')}: {self.end_date_time}"
            )
        except (KeyError, ValueError) as exc:
            logger.debug("Could not describe non-working period %s: %s", self.name, exc)
            return self.name
