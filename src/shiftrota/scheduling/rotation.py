"""Rotations: ordered segments of days on a shift followed by days off."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from shiftrota.core.messages import get_message
from shiftrota.scheduling.named import Named
from shiftrota.scheduling.periods import DAY_OFF, Shift, TimePeriod

logger = logging.getLogger(__name__)

__all__ = ["RotationSegment", "Rotation"]

_SEGMENT_FIELDS = frozenset({"starting_shift", "days_on", "days_off", "sequence"})


class RotationSegment(BaseModel):
    """Part of a rotation: ``days_on`` days of ``starting_shift`` followed by ``days_off`` days off.

    Attributes
    ----------
    starting_shift:
        Shift worked on each of the on days. ``None`` only for a default-constructed segment.
    days_on / days_off:
        Non-negative day counts.
    sequence:
        1-based position inside the owning rotation; fixes the expansion order.
    """

    model_config = ConfigDict(validate_assignment=True)

    starting_shift: Shift | None = None
    days_on: int = 0
    days_off: int = 0
    sequence: int = 0
    _rotation: Any = PrivateAttr(default=None)

    @field_validator("days_on", "days_off")
    @classmethod
    def _days_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(get_message("days.negative"))
        return value

    @model_validator(mode="after")
    def _shift_for_days_on(self) -> RotationSegment:
        if self.starting_shift is None and self.days_on > 0:
            raise ValueError(get_message("shift.not.defined"))
        return self

    @property
    def rotation(self) -> Rotation | None:
        return self._rotation

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name in _SEGMENT_FIELDS and self._rotation is not None:
            self._rotation.invalidate_periods()

    def __lt__(self, other: RotationSegment) -> bool:
        return self.sequence < other.sequence


class Rotation(Named):
    """Sequence of shifts and days off that a team repeats.

    The flat day sequence (``periods``) is built on first use and cached. Adding a segment, changing
    a segment, or replacing ``segments`` clears the cache; the rebuild and the invalidation share a
    lock so a reader never sees a half-built sequence.
    """

    segments: list[RotationSegment] = Field(default_factory=list)
    _periods: tuple[TimePeriod, ...] | None = PrivateAttr(default=None)
    _lock: Any = PrivateAttr(default_factory=threading.RLock)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "segments":
            for segment in self.segments:
                segment._rotation = self
            self.invalidate_periods()

    def model_post_init(self, __context: Any) -> None:
        for segment in self.segments:
            segment._rotation = self

    @property
    def periods_cached(self) -> bool:
        return self._periods is not None

    def invalidate_periods(self) -> None:
        with self._lock:
            self._periods = None

    def get_periods(self) -> tuple[TimePeriod, ...]:
        with self._lock:
            if self._periods is None:
                periods: list[TimePeriod] = []
                for segment in sorted(self.segments):
                    if segment.starting_shift is not None:
                        periods.extend([segment.starting_shift] * segment.days_on)
                    periods.extend([DAY_OFF] * segment.days_off)
                self._periods = tuple(periods)
                logger.debug("Rotation %s expanded to %d days", self.name, len(periods))
            return self._periods

    @property
    def periods(self) -> tuple[TimePeriod, ...]:
        return self.get_periods()

    @property
    def day_count(self) -> int:
        return len(self.get_periods())

    @property
    def duration(self) -> timedelta:
        return timedelta(days=self.day_count)

    @property
    def working_time(self) -> timedelta:
        return sum(
            (period.duration for period in self.get_periods() if period.is_working_period()),
            timedelta(0),
        )

    def add_segment(self, starting_shift: Shift, days_on: int, days_off: int) -> RotationSegment:
        if starting_shift is None:
            raise ValueError(get_message("shift.not.defined"))
        segment = RotationSegment(starting_shift=starting_shift, days_on=days_on, days_off=days_off)
        with self._lock:
            self.segments.append(segment)
            segment.sequence = len(self.segments)
            segment._rotation = self
            self._periods = None
        return segment

    def uses_shift(self, shift: Shift) -> bool:
        return any(period == shift for period in self.get_periods())

    def __lt__(self, other: Rotation) -> bool:
        return self.name < other.name

    def describe(self) -> str:
        try:
            on = get_message("rotation.on")
            off = get_message("rotation.off")
            periods = ", ".join(
                f"{period.name} ({on if period.is_working_period() else off})"
                for period in self.get_periods()
            )
            return (
                f"{self}\n{get_message('rotation.periods')}: [{periods}], "
                f"{get_message('rotation.duration')}: {self.duration}, "
                f"{get_message('rotation.days')}: {self.day_count}, "
                f"{get_message('rotation.working')}: {self.working_time}"
            )
        except (KeyError, ValueError) as exc:
            logger.debug("Could not describe rotation %s: %s", self.name, exc)
            return self.name
