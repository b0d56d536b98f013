"""Schedule loading utilities."""

from .loaders import REFERENCE_ZONE_ENV, build_schedule, load_schedule, read_definition

__all__ = ["REFERENCE_ZONE_ENV", "build_schedule", "load_schedule", "read_definition"]
