from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from shiftrota.core.errors import (
    DuplicateNameError,
    EntityInUseError,
    OrderingError,
    RotationRangeError,
)
from shiftrota.core.timeutils import plus_duration
from shiftrota.scheduling import Rotation, Shift, WorkSchedule

REFERENCE = date(2016, 10, 31)
ONE_SECOND = timedelta(seconds=1)
FULL_DAY = timedelta(hours=24)


def _hours(value: float) -> timedelta:
    return timedelta(hours=value)


def _check_shifts(schedule: WorkSchedule) -> None:
    assert schedule.shifts
    for shift in schedule.shifts:
        start, end = shift.start, shift.end
        side = True if shift.spans_midnight() else None
        assert shift.calculate_working_time(start, end, side) == shift.duration

        expected = FULL_DAY if shift.duration == FULL_DAY else timedelta(0)
        assert shift.calculate_working_time(start, start, side) == expected
        assert shift.calculate_working_time(end, end, side) == expected


def _check_teams(schedule: WorkSchedule, hours_per_rotation: timedelta, rotation_days: timedelta) -> None:
    assert schedule.teams
    for team in schedule.teams:
        assert team.name
        assert team.get_day_in_rotation(team.rotation_start) == 1
        assert team.rotation.working_time == hours_per_rotation
        assert team.percentage_worked > 0.0
        assert team.rotation_duration == rotation_days
        assert team.rotation.duration == rotation_days
        assert team.rotation.working_time <= team.rotation.duration


def _check_instances(schedule: WorkSchedule, reference: date) -> None:
    rotation = schedule.teams[0].rotation
    days = rotation.duration.days + 1
    for offset in range(days):
        day = reference + timedelta(days=offset)
        for instance in schedule.get_shift_instances_for_day(day):
            shift = instance.shift
            assert instance.start_date_time < instance.end_date_time
            assert shift.is_in_shift(shift.start)
            assert shift.is_in_shift(plus_duration(shift.start, ONE_SECOND))
            assert shift.is_in_shift(shift.end)
            assert shift.is_in_shift(plus_duration(shift.end, -ONE_SECOND))
            if shift.duration != FULL_DAY:
                assert not shift.is_in_shift(plus_duration(shift.start, -ONE_SECOND))
                assert not shift.is_in_shift(plus_duration(shift.end, ONE_SECOND))

            at_start = instance.start_date_time
            assert instance in schedule.get_shift_instances_for_time(at_start)
            assert instance in schedule.get_shift_instances_for_time(at_start + ONE_SECOND)
            assert instance in schedule.get_shift_instances_for_time(instance.end_date_time)


def _check_deletions(schedule: WorkSchedule) -> None:
    for team in list(schedule.teams):
        schedule.delete_team(team)
    assert schedule.teams == []
    for shift in list(schedule.shifts):
        schedule.delete_shift(shift)
    assert schedule.shifts == []
    for period in list(schedule.non_working_periods):
        schedule.delete_non_working_period(period)
    assert schedule.non_working_periods == []


def run_base_checks(
    schedule: WorkSchedule,
    hours_per_rotation: timedelta,
    rotation_days: timedelta,
    reference: date,
) -> None:
    assert schedule.name
    assert schedule.description
    lines: list[str] = []
    schedule.print_shift_instances(reference, reference + rotation_days, echo=lines.append)
    assert lines[0].startswith("[1] ")
    assert schedule.describe().startswith("Schedule: ")
    _check_shifts(schedule)
    _check_teams(schedule, hours_per_rotation, rotation_days)
    _check_instances(schedule, reference)
    _check_deletions(schedule)


def test_nursing_icu_shifts():
    schedule = WorkSchedule(name="Nursing ICU", description="Two 12 hr shifts, four teams")
    day = schedule.create_shift("Day", "Day shift", time(6, 0), _hours(12))
    night = schedule.create_shift("Night", "Night shift", time(18, 0), _hours(12))

    day_rotation = schedule.create_rotation("Day", "Day")
    day_rotation.add_segment(day, 3, 4)
    day_rotation.add_segment(day, 4, 3)
    inverse_day = schedule.create_rotation("Inverse Day", "Inverse Day")
    inverse_day.add_segment(day, 0, 3)
    inverse_day.add_segment(day, 4, 4)
    inverse_day.add_segment(day, 3, 0)
    night_rotation = schedule.create_rotation("Night", "Night")
    night_rotation.add_segment(night, 4, 3)
    night_rotation.add_segment(night, 3, 4)
    inverse_night = schedule.create_rotation("Inverse Night", "Inverse Night")
    inverse_night.add_segment(night, 0, 4)
    inverse_night.add_segment(night, 3, 3)
    inverse_night.add_segment(night, 4, 0)

    start = date(2014, 1, 6)
    schedule.create_team("A", "Day shift", day_rotation, start)
    schedule.create_team("B", "Day inverse shift", inverse_day, start)
    schedule.create_team("C", "Night shift", night_rotation, start)
    schedule.create_team("D", "Night inverse shift", inverse_night, start)

    run_base_checks(schedule, _hours(84), timedelta(days=14), start)


def test_postal_service_shifts():
    schedule = WorkSchedule(name="Postal Service", description="Six 9 hr shifts, rotating every 42 days")
    day = schedule.create_shift("Day", "day shift", time(8, 0), _hours(9))
    rotation = schedule.create_rotation("Day", "Day")
    rotation.add_segment(day, 3, 7)
    for _ in range(4):
        rotation.add_segment(day, 1, 7)

    start = date(2017, 1, 27)
    for index, letter in enumerate("ABCDEF"):
        schedule.create_team(
            f"Team {letter}", f"{letter} team", rotation, start - timedelta(days=7 * index)
        )

    run_base_checks(schedule, _hours(63), timedelta(days=42), start)


def test_firefighter_shifts_2():
    schedule = WorkSchedule(name="Seattle", description="Four 24 hour alternating shifts")
    shift = schedule.create_shift("24 Hours", "24 hour shift", time(7, 0), _hours(24))
    rotation = schedule.create_rotation("24 Hours", "24 Hours")
    rotation.add_segment(shift, 1, 4)
    rotation.add_segment(shift, 1, 2)

    schedule.create_team("A", "Platoon1", rotation, date(2014, 2, 2))
    schedule.create_team("B", "Platoon2", rotation, date(2014, 2, 4))
    schedule.create_team("C", "Platoon3", rotation, date(2014, 1, 31))
    schedule.create_team("D", "Platoon4", rotation, date(2014, 1, 29))

    run_base_checks(schedule, _hours(48), timedelta(days=8), date(2014, 2, 4))


def test_firefighter_shifts_1(firefighter_schedule):
    red, black, green = firefighter_schedule.teams

    instances = firefighter_schedule.get_shift_instances_for_day(date(2017, 3, 1))
    assert [i.team for i in instances] == [green]
    instances = firefighter_schedule.get_shift_instances_for_day(date(2017, 3, 3))
    assert [i.team for i in instances] == [red]
    instances = firefighter_schedule.get_shift_instances_for_day(date(2017, 3, 9))
    assert [i.team for i in instances] == [black]

    run_base_checks(firefighter_schedule, _hours(144), timedelta(days=18), date(2017, 2, 1))


def test_manufacturing_shifts():
    schedule = WorkSchedule(name="Manufacturing Company - four twelves", description="Four 12 hour alternating day/night shifts")
    day = schedule.create_shift("Day", "Day shift", time(7, 0), _hours(12))
    night = schedule.create_shift("Night", "Night shift", time(19, 0), _hours(12))
    day_rotation = schedule.create_rotation("Day", "Day")
    day_rotation.add_segment(day, 7, 7)
    night_rotation = schedule.create_rotation("Night", "Night")
    night_rotation.add_segment(night, 7, 7)

    schedule.create_team("A", "A day shift", day_rotation, date(2014, 1, 2))
    schedule.create_team("B", "B night shift", night_rotation, date(2014, 1, 2))
    schedule.create_team("C", "C day shift", day_rotation, date(2014, 1, 9))
    schedule.create_team("D", "D night shift", night_rotation, date(2014, 1, 9))

    run_base_checks(schedule, _hours(84), timedelta(days=14), date(2014, 1, 9))


def test_low_night_demand():
    schedule = WorkSchedule(name="Low Night Demand Plan", description="Low night demand")
    day = schedule.create_shift("Day", "Day shift", time(7, 0), _hours(8))
    swing = schedule.create_shift("Swing", "Swing shift", time(15, 0), _hours(8))
    night = schedule.create_shift("Night", "Night shift", time(23, 0), _hours(8))

    rotation = schedule.create_rotation("Low night demand", "Low night demand")
    for shift, on, off in [
        (day, 3, 0),
        (swing, 4, 3),
        (day, 4, 0),
        (swing, 3, 4),
        (day, 3, 0),
        (night, 4, 3),
        (day, 4, 0),
        (night, 3, 4),
    ]:
        rotation.add_segment(shift, on, off)

    for index, offset in enumerate([0, -21, -7, -28, -14, -35], start=1):
        schedule.create_team(f"Team{index}", f"Team {index}", rotation, REFERENCE + timedelta(days=offset))

    run_base_checks(schedule, _hours(224), timedelta(days=42), REFERENCE)


def test_three_team_fixed_24():
    schedule = WorkSchedule(name="3 Team Fixed 24 Plan", description="Fire departments")
    shift = schedule.create_shift("24 Hour", "24 hour shift", time(0, 0), _hours(24))
    rotation = schedule.create_rotation("3 Team Fixed 24 Plan", "3 Team Fixed 24 Plan")
    rotation.add_segment(shift, 1, 1)
    rotation.add_segment(shift, 1, 1)
    rotation.add_segment(shift, 1, 4)

    schedule.create_team("Team1", "First team", rotation, REFERENCE)
    schedule.create_team("Team2", "Second team", rotation, REFERENCE - timedelta(days=3))
    schedule.create_team("Team3", "Third team", rotation, REFERENCE - timedelta(days=6))

    run_base_checks(schedule, _hours(72), timedelta(days=9), REFERENCE)


def test_compressed_549():
    schedule = WorkSchedule(name="5/4/9 Plan", description="Compressed work schedule.")
    day1 = schedule.create_shift("Day1", "Day shift #1", time(7, 0), _hours(9))
    day2 = schedule.create_shift("Day2", "Day shift #2", time(7, 0), _hours(8))
    rotation = schedule.create_rotation("5/4/9", "5/4/9")
    rotation.add_segment(day1, 4, 0)
    rotation.add_segment(day2, 1, 3)
    rotation.add_segment(day1, 4, 3)
    rotation.add_segment(day1, 4, 2)
    rotation.add_segment(day1, 4, 0)
    rotation.add_segment(day2, 1, 2)

    schedule.create_team("Team1", "First team", rotation, REFERENCE)
    schedule.create_team("Team2", "Second team", rotation, REFERENCE - timedelta(days=14))

    run_base_checks(schedule, _hours(160), timedelta(days=28), REFERENCE)


@pytest.fixture
def generic_schedule() -> WorkSchedule:
    schedule = WorkSchedule(name="Regular 40 hour work week", description="9 to 5")
    schedule.create_non_working_period("MEMORIAL DAY", "Memorial day", datetime(2016, 5, 30), _hours(24))
    schedule.create_non_working_period("INDEPENDENCE DAY", "Independence day", datetime(2016, 7, 4), _hours(24))
    schedule.create_non_working_period("LABOR DAY", "Labor day", datetime(2016, 9, 5), _hours(24))
    schedule.create_non_working_period(
        "THANKSGIVING", "Thanksgiving day and day after", datetime(2016, 11, 24), _hours(48)
    )
    schedule.create_non_working_period(
        "CHRISTMAS SHUTDOWN", "Christmas week scheduled maintenance", datetime(2016, 12, 25, 0, 30), _hours(168)
    )

    shift1 = schedule.create_shift("Shift1", "Shift #1", time(7, 0), _hours(8))
    shift1.create_break("10AM", "10 am break", time(10, 0), timedelta(minutes=15))
    shift1.create_break("LUNCH", "lunch", time(12, 0), _hours(1))
    shift1.create_break("2PM", "2 pm break", time(14, 0), timedelta(minutes=15))
    shift2 = schedule.create_shift("Shift2", "Shift #2", time(15, 0), _hours(8))

    rotation1 = Rotation(name="Shift1", description="Shift1")
    rotation1.add_segment(shift1, 5, 2)
    rotation2 = Rotation(name="Shift2", description="Shift2")
    rotation2.add_segment(shift2, 5, 2)

    start = date(2016, 1, 1)
    schedule.create_team("Team1", "Team #1", rotation1, start)
    schedule.create_team("Team2", "Team #2", rotation2, start)
    return schedule


@pytest.mark.parametrize("team_index", [0, 1])
def test_generic_running_totals(generic_schedule, team_index):
    team = generic_schedule.teams[team_index]
    shift = team.rotation.segments[0].starting_shift
    from_dt = datetime.combine(date(2016, 1, 8), shift.start)
    expected = timedelta(0)
    for offset in range(21):
        to_dt = from_dt + timedelta(days=offset)
        assert team.calculate_working_time(from_dt, to_dt) == expected
        period = team.rotation.periods[team.get_day_in_rotation(to_dt.date()) - 1]
        if isinstance(period, Shift):
            expected += shift.duration


def test_generic_holidays(generic_schedule):
    team1, team2 = generic_schedule.teams
    shift1 = generic_schedule.shifts[0]
    assert shift1.calculate_break_time() == timedelta(minutes=90)
    assert shift1.work_schedule is generic_schedule
    assert team1.work_schedule is generic_schedule
    assert not team1.is_day_off(date(2016, 1, 1))

    memorial_day = generic_schedule.non_working_periods[0]
    assert memorial_day.name == "MEMORIAL DAY"
    assert not memorial_day.is_in_period(date(2016, 1, 1))
    assert generic_schedule.get_shift_instances_for_day(date(2016, 5, 30)) == []

    # both teams work 8 h on the Monday holiday, which removes 24 h
    from_dt = datetime(2016, 5, 30)
    to_dt = datetime(2016, 5, 31)
    assert team1.calculate_working_time(from_dt, to_dt) + team2.calculate_working_time(from_dt, to_dt) == _hours(16)
    assert generic_schedule.calculate_working_time(from_dt, to_dt) == timedelta(0)

    # no holidays in January
    from_dt = datetime(2016, 1, 8, 7, 0)
    to_dt = from_dt + timedelta(days=21)
    teams_total = team1.calculate_working_time(from_dt, to_dt) + team2.calculate_working_time(from_dt, to_dt)
    assert generic_schedule.calculate_non_working_time(from_dt, to_dt) == timedelta(0)
    assert generic_schedule.calculate_working_time(from_dt, to_dt) == teams_total


def test_generic_base_checks(generic_schedule):
    run_base_checks(generic_schedule, _hours(40), timedelta(days=7), date(2016, 1, 1))


def test_scenario_e_rotation_start():
    schedule = WorkSchedule(name="Anchor", description="Anchor")
    shift = schedule.create_shift("Day", "Day", time(9, 0), _hours(8))
    rotation = schedule.create_rotation("Week", "Week")
    rotation.add_segment(shift, 5, 2)
    team = schedule.create_team("Team", "Team", rotation, date(2020, 6, 1))
    assert team.get_day_in_rotation(date(2020, 6, 1)) == 1
    with pytest.raises(RotationRangeError):
        team.get_day_in_rotation(date(2020, 5, 31))


def test_duplicate_names_leave_collections_unchanged():
    schedule = WorkSchedule(name="Duplicates", description="Duplicates")
    shift = schedule.create_shift("Test", "Test shift", time(7, 0), _hours(24))
    rotation = schedule.create_rotation("Rotation", "Rotation")
    rotation.add_segment(shift, 5, 2)
    schedule.create_team("Team", "Team", rotation, date(2016, 12, 31))

    with pytest.raises(DuplicateNameError):
        schedule.create_shift("Test", "Other", time(8, 0), _hours(1))
    with pytest.raises(DuplicateNameError):
        schedule.create_rotation("Rotation")
    with pytest.raises(DuplicateNameError):
        schedule.create_team("Team", "Team", rotation, date(2016, 12, 31))
    assert len(schedule.shifts) == 1
    assert len(schedule.rotations) == 1
    assert len(schedule.teams) == 1
    assert schedule.shifts[0].start == time(7, 0)


def test_delete_in_use():
    schedule = WorkSchedule(name="In use", description="In use")
    shift = schedule.create_shift("Test", "Test shift", time(7, 0), _hours(8))
    spare = schedule.create_shift("Spare", "Unused shift", time(8, 0), _hours(8))
    rotation = schedule.create_rotation("Rotation", "Rotation")
    rotation.add_segment(shift, 5, 2)
    team = schedule.create_team("Team", "Team", rotation, date(2017, 1, 1))

    with pytest.raises(EntityInUseError):
        schedule.delete_shift(shift)
    with pytest.raises(EntityInUseError):
        schedule.delete_rotation(rotation)
    assert shift in schedule.shifts
    assert rotation in schedule.rotations

    schedule.delete_shift(spare)
    assert spare not in schedule.shifts

    schedule.delete_team(team)
    schedule.delete_rotation(rotation)
    schedule.delete_shift(shift)
    assert schedule.shifts == []
    assert schedule.rotations == []


def test_ordering_errors():
    schedule = WorkSchedule(name="Ordering", description="Ordering")
    shift = schedule.create_shift("Test", "Test shift", time(7, 0), _hours(24))
    rotation = schedule.create_rotation("Rotation", "Rotation")
    rotation.add_segment(shift, 5, 2)
    schedule.create_team("Team", "Team", rotation, date(2016, 12, 31))

    assert schedule.calculate_working_time(datetime(2017, 1, 1, 7), datetime(2017, 2, 1)) > timedelta(0)
    with pytest.raises(OrderingError):
        schedule.calculate_working_time(datetime(2017, 1, 2), datetime(2017, 1, 1))
    with pytest.raises(OrderingError):
        schedule.print_shift_instances(date(2017, 1, 2), date(2017, 1, 1))


def test_teams_not_started_are_skipped(firefighter_schedule):
    red, black, green = firefighter_schedule.teams
    day = date(2017, 1, 10)
    instances = firefighter_schedule.get_shift_instances_for_day(day)
    assert black not in [i.team for i in instances]

    from_dt = datetime(2017, 1, 30)
    # Black starts on 2017-02-01; the second shift runs until 07:00 on the 3rd
    assert firefighter_schedule.team_working_time(black, from_dt, datetime(2017, 2, 3)) == _hours(41)
    assert firefighter_schedule.team_working_time(black, from_dt, datetime(2017, 2, 3, 7)) == _hours(48)
    assert firefighter_schedule.team_working_time(black, from_dt, datetime(2017, 1, 31)) == timedelta(0)


def test_all_instances_for_day_include_overnight_shifts():
    schedule = WorkSchedule(name="Overnight", description="Overnight")
    night = schedule.create_shift("Night", "Night", time(22, 0), _hours(8))
    rotation = schedule.create_rotation("Nights", "Nights")
    rotation.add_segment(night, 1, 0)
    schedule.create_team("N", "Night team", rotation, date(2020, 1, 1))

    day = date(2020, 1, 2)
    starting = schedule.get_shift_instances_for_day(day)
    assert [i.start_date_time for i in starting] == [datetime(2020, 1, 2, 22)]
    everything = schedule.get_all_shift_instances_for_day(day)
    assert [i.start_date_time for i in everything] == [datetime(2020, 1, 1, 22), datetime(2020, 1, 2, 22)]
    at_three = schedule.get_shift_instances_for_time(datetime(2020, 1, 2, 3))
    assert [i.start_date_time for i in at_three] == [datetime(2020, 1, 1, 22)]
    assert schedule.get_shift_instances_for_time(datetime(2020, 1, 2, 12)) == []


def test_rotation_totals(firefighter_schedule):
    assert firefighter_schedule.rotation_duration == timedelta(days=54)
    assert firefighter_schedule.rotation_working_time == _hours(432)
    assert "Total team coverage" in firefighter_schedule.describe()
