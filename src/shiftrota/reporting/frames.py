"""Tabular exports of shift instances and working time."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pandas as pd

from shiftrota.core.errors import OrderingError
from shiftrota.core.messages import format_message
from shiftrota.scheduling import WorkSchedule

__all__ = [
    "INSTANCE_COLUMNS",
    "WORKING_TIME_COLUMNS",
    "SCHEDULE_TOTAL",
    "shift_instance_dataframe",
    "working_time_dataframe",
]

INSTANCE_COLUMNS = ["date", "team", "shift", "start", "end", "hours"]
WORKING_TIME_COLUMNS = ["date", "team", "hours"]
SCHEDULE_TOTAL = "(schedule)"


def _hours(value: timedelta) -> float:
    return value.total_seconds() / 3600.0


def shift_instance_dataframe(schedule: WorkSchedule, start: date, end: date) -> pd.DataFrame:
    """Return one row per shift instance starting between ``start`` and ``end`` (inclusive).

    Parameters
    ----------
    schedule :
        Work schedule to expand.
    start, end :
        Inclusive date range. ``end`` earlier than ``start`` raises :class:`OrderingError`.

    Returns
    -------
    pandas.DataFrame
        Columns ``date``, ``team``, ``shift``, ``start``, ``end`` and ``hours``. Days covered by a
        non-working period contribute no rows.
    """

    rows = [
        {
            "date": day,
            "team": instance.team.name,
            "shift": instance.shift.name,
            "start": instance.start_date_time,
            "end": instance.end_date_time,
            "hours": _hours(instance.shift.duration),
        }
        for day, instances in schedule.shift_instances_by_day(start, end)
        for instance in instances
    ]
    return pd.DataFrame(rows, columns=INSTANCE_COLUMNS)


def working_time_dataframe(schedule: WorkSchedule, start: date, end: date) -> pd.DataFrame:
    """Return scheduled working hours per team per calendar day.

    Each day also gets a ``(schedule)`` row holding the sum over teams less the non-working time
    of that day, clipped at zero. Teams whose rotation has not started yet are left out.
    """

    if end < start:
        raise OrderingError(format_message("end.earlier.than.start", start, end))

    rows: list[dict[str, object]] = []
    day = start
    while day <= end:
        day_start = datetime.combine(day, time.min)
        # team arithmetic rounds time.max up to the next midnight, so both measure the same day
        day_end = datetime.combine(day, time.max)
        next_midnight = day_start + timedelta(days=1)
        total = timedelta(0)
        for team in schedule.teams:
            if team.rotation_start > day:
                continue
            worked = team.calculate_working_time(day_start, day_end)
            total += worked
            rows.append({"date": day, "team": team.name, "hours": _hours(worked)})

        non_working = schedule.calculate_non_working_time(day_start, next_midnight)
        net = max(total - non_working, timedelta(0))
        rows.append({"date": day, "team": SCHEDULE_TOTAL, "hours": _hours(net)})
        day += timedelta(days=1)

    return pd.DataFrame(rows, columns=WORKING_TIME_COLUMNS)
