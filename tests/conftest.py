from datetime import date, time, timedelta

import pytest

from shiftrota.scheduling import WorkSchedule


@pytest.fixture
def firefighter_schedule() -> WorkSchedule:
    """Three teams on a 2-on/2-off, 2-on/2-off, 2-on/8-off cycle of 24 hour shifts."""
    schedule = WorkSchedule(name="Kern Co.", description="Three 24 hour alternating shifts")
    shift = schedule.create_shift("24 Hour", "24 hour shift", time(7, 0), timedelta(hours=24))
    rotation = schedule.create_rotation("24 Hour", "2 days ON, 2 OFF, 2 ON, 2 OFF, 2 ON, 8 OFF")
    rotation.add_segment(shift, 2, 2)
    rotation.add_segment(shift, 2, 2)
    rotation.add_segment(shift, 2, 8)
    schedule.create_team("Red", "A Shift", rotation, date(2017, 1, 8))
    schedule.create_team("Black", "B Shift", rotation, date(2017, 2, 1))
    schedule.create_team("Green", "C Shift", rotation, date(2017, 1, 2))
    return schedule


@pytest.fixture
def schedule_yaml(tmp_path):
    path = tmp_path / "schedule.yaml"
    path.write_text(
        """
name: Plant
description: Two teams, 12 hour day and night shifts
shifts:
  - name: Day
    start: "07:00"
    duration: "12:00"
    breaks:
      - name: Lunch
        start: "12:00"
        duration: {minutes: 30}
  - name: Night
    start: "19:00"
    duration: {hours: 12}
rotations:
  - name: DN
    description: 2 days on, 2 nights on, 4 off
    segments:
      - {shift: Day, days_on: 2, days_off: 0}
      - {shift: Night, days_on: 2, days_off: 4}
teams:
  - name: A
    rotation: DN
    rotation_start: 2021-01-01
    members:
      - {name: Ann, member_id: "1"}
  - name: B
    rotation: DN
    rotation_start: 2021-01-05
non_working_periods:
  - name: New Year
    start: 2021-01-01 00:00:00
    duration: {hours: 24}
""",
        encoding="utf-8",
    )
    return path
