from __future__ import annotations

from pathlib import Path

import click
import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shiftrota.cli._utils import (
    LOG_LEVELS,
    configure_logging,
    format_hours,
    parse_date,
    parse_timestamp,
)
from shiftrota.core.errors import ScheduleError
from shiftrota.reporting import shift_instance_dataframe
from shiftrota.scenario.io import load_schedule
from shiftrota.scheduling import WorkSchedule

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
LOG_LEVEL = click.Choice(list(LOG_LEVELS), case_sensitive=False)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level for library output.",
        click_type=LOG_LEVEL,
    ),
    zone: str | None = typer.Option(
        None, "--zone", help="Reference zone for non-working time (overrides the schedule file)."
    ),
):
    """Inspect rotating shift schedules defined in YAML."""
    configure_logging(log_level, console=Console(stderr=True))
    ctx.obj = {"zone": zone}


def _zone(ctx: typer.Context) -> str | None:
    return (ctx.obj or {}).get("zone")


def _load(path: Path, zone: str | None) -> WorkSchedule:
    try:
        return load_schedule(path, zone=zone)
    except (OSError, yaml.YAMLError, ValueError) as exc:
        console.print(f"[red]Could not load {path}:[/red] {escape(str(exc))}")
        raise typer.Exit(1)


@app.command()
def show(ctx: typer.Context, schedule_path: Path = typer.Argument(..., metavar="SCHEDULE")):
    """Print a summary of the schedule's shifts, rotations, teams and non-working periods."""
    schedule = _load(schedule_path, _zone(ctx))

    t = Table(title=f"Schedule: {schedule.name}")
    t.add_column("Shift")
    t.add_column("Start")
    t.add_column("Duration")
    t.add_column("Breaks")
    for shift in schedule.shifts:
        t.add_row(shift.name, str(shift.start), str(shift.duration), str(shift.calculate_break_time()))
    console.print(t)

    t = Table(title="Rotations")
    t.add_column("Rotation")
    t.add_column("Days")
    t.add_column("Working")
    for rotation in schedule.rotations:
        t.add_row(rotation.name, str(rotation.day_count), str(rotation.working_time))
    console.print(t)

    t = Table(title="Teams")
    t.add_column("Team")
    t.add_column("Rotation")
    t.add_column("Start")
    t.add_column("% worked")
    t.add_column("Hours/week")
    for team in schedule.teams:
        t.add_row(
            team.name,
            team.rotation.name,
            str(team.rotation_start),
            format_hours(team.percentage_worked),
            format_hours(team.hours_worked_per_week.total_seconds() / 3600.0),
        )
    console.print(t)

    if schedule.non_working_periods:
        t = Table(title="Non-working periods")
        t.add_column("Name")
        t.add_column("Start")
        t.add_column("End")
        for period in schedule.non_working_periods:
            t.add_row(period.name, str(period.start_date_time), str(period.end_date_time))
        console.print(t)


@app.command()
def instances(
    ctx: typer.Context,
    schedule_path: Path = typer.Argument(..., metavar="SCHEDULE"),
    start: str = typer.Option(..., "--start", help="First day (YYYY-MM-DD)."),
    end: str = typer.Option(..., "--end", help="Last day (YYYY-MM-DD), inclusive."),
    out: Path | None = typer.Option(None, "--out", help="Optional CSV path for the instance table."),
):
    """List the shift instances worked on each day of a date range."""
    schedule = _load(schedule_path, _zone(ctx))
    start_day = parse_date(start)
    end_day = parse_date(end)

    try:
        days = schedule.shift_instances_by_day(start_day, end_day)
    except ScheduleError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    t = Table(title=f"Shift instances: {schedule.name}")
    t.add_column("Day")
    t.add_column("Team")
    t.add_column("Shift")
    t.add_column("Start")
    t.add_column("End")
    for day, day_instances in days:
        if not day_instances:
            t.add_row(str(day), "-", "[dim]non-working[/]", "", "")
            continue
        for instance in day_instances:
            t.add_row(
                str(day),
                instance.team.name,
                instance.shift.name,
                str(instance.start_date_time),
                str(instance.end_date_time),
            )
    console.print(t)

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        shift_instance_dataframe(schedule, start_day, end_day).to_csv(str(out), index=False)
        console.print(f"Saved shift instances to {out}")


@app.command("working-time")
def working_time(
    ctx: typer.Context,
    schedule_path: Path = typer.Argument(..., metavar="SCHEDULE"),
    from_: str = typer.Option(..., "--from", help="Start timestamp (YYYY-MM-DD[THH:MM])."),
    to: str = typer.Option(..., "--to", help="End timestamp (YYYY-MM-DD[THH:MM])."),
):
    """Scheduled working hours per team and for the whole schedule."""
    schedule = _load(schedule_path, _zone(ctx))
    from_dt = parse_timestamp(from_)
    to_dt = parse_timestamp(to)

    t = Table(title=f"Working time {from_dt} to {to_dt}")
    t.add_column("Team")
    t.add_column("Hours")
    try:
        for team in schedule.teams:
            if team.rotation_start > to_dt.date():
                t.add_row(team.name, "[dim]not started[/]")
                continue
            worked = schedule.team_working_time(team, from_dt, to_dt)
            t.add_row(team.name, format_hours(worked.total_seconds() / 3600.0))
        non_working = schedule.calculate_non_working_time(from_dt, to_dt)
        net = schedule.calculate_working_time(from_dt, to_dt)
    except ScheduleError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)
    t.add_row("Non-working", format_hours(non_working.total_seconds() / 3600.0))
    t.add_row("Schedule", format_hours(net.total_seconds() / 3600.0))
    console.print(t)


@app.command()
def day(
    ctx: typer.Context,
    schedule_path: Path = typer.Argument(..., metavar="SCHEDULE"),
    date_value: str = typer.Argument(..., metavar="DATE"),
):
    """Show where each team is in its rotation on a given date."""
    schedule = _load(schedule_path, _zone(ctx))
    target = parse_date(date_value)

    t = Table(title=f"{schedule.name}: {target}")
    t.add_column("Team")
    t.add_column("Day")
    t.add_column("Shift")
    for team in schedule.teams:
        if team.rotation_start > target:
            t.add_row(team.name, "-", "[dim]not started[/]")
            continue
        position = team.get_day_in_rotation(target)
        instance = team.get_shift_instance_for_day(target)
        label = instance.shift.name if instance is not None else "off"
        t.add_row(team.name, f"{position}/{team.rotation.day_count}", label)
    console.print(t)


if __name__ == "__main__":
    app()
