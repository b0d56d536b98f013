"""CLI helper utilities for shiftrota."""

from __future__ import annotations

import logging
from datetime import date, datetime

import typer
from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def parse_date(value: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date argument."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise typer.BadParameter(f"Expected a date in YYYY-MM-DD form (got '{value}')") from exc


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO timestamp; a bare date means midnight."""
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise typer.BadParameter(
            f"Expected a timestamp in YYYY-MM-DD[THH:MM[:SS]] form (got '{value}')"
        ) from exc
    if parsed.tzinfo is not None:
        raise typer.BadParameter(f"Timestamps are local; drop the UTC offset from '{value}'")
    return parsed


def configure_logging(level: str, console: Console | None = None) -> None:
    """Route library logging through a rich handler at ``level``."""
    name = level.upper()
    if name not in LOG_LEVELS:
        raise typer.BadParameter(f"Log level must be one of {', '.join(LOG_LEVELS)} (got '{level}')")
    logging.basicConfig(
        level=name,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=False, show_path=False)],
        force=True,
    )


def format_hours(hours: float) -> str:
    return f"{hours:.2f}"


__all__ = ["LOG_LEVELS", "parse_date", "parse_timestamp", "configure_logging", "format_hours"]
