"""Common shiftrota exceptions."""


class ScheduleError(ValueError):
    """Raised when a schedule operation is given invalid or conflicting input."""


class DuplicateNameError(ScheduleError):
    """Raised when an entity with the same name already exists in its collection."""


class EntityInUseError(ScheduleError):
    """Raised when deleting an entity that is still referenced elsewhere in the schedule."""


class OrderingError(ScheduleError):
    """Raised when a range ends before it starts."""


class RotationRangeError(ScheduleError):
    """Raised when a date precedes a team's rotation start."""


class ShiftSpansMidnightError(ScheduleError):
    """Raised when a single-day calculation is requested for a shift that crosses midnight."""


__all__ = [
    "ScheduleError",
    "DuplicateNameError",
    "EntityInUseError",
    "OrderingError",
    "RotationRangeError",
    "ShiftSpansMidnightError",
]
