"""Core utilities shared across shiftrota modules."""

from .errors import (
    DuplicateNameError,
    EntityInUseError,
    OrderingError,
    RotationRangeError,
    ScheduleError,
    ShiftSpansMidnightError,
)
from .messages import MESSAGES, format_message, get_message

__all__ = [
    "ScheduleError",
    "DuplicateNameError",
    "EntityInUseError",
    "OrderingError",
    "RotationRangeError",
    "ShiftSpansMidnightError",
    "MESSAGES",
    "get_message",
    "format_message",
]
