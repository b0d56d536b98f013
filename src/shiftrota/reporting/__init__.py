"""Reporting helpers (pandas exports)."""

from .frames import (
    INSTANCE_COLUMNS,
    SCHEDULE_TOTAL,
    WORKING_TIME_COLUMNS,
    shift_instance_dataframe,
    working_time_dataframe,
)

__all__ = [
    "INSTANCE_COLUMNS",
    "WORKING_TIME_COLUMNS",
    "SCHEDULE_TOTAL",
    "shift_instance_dataframe",
    "working_time_dataframe",
]
