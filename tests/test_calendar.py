from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from trackbit.errors import ValidationError
from trackbit.services.calendar_export import PRODID, generate_ics

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def _lines(text):
    return text.split("\r\n")


def test_calendar_has_daily_morning_and_evening_events():
    text = generate_ics(now=NOW, tz="UTC")
    lines = _lines(text)

    assert lines[0] == "BEGIN:VCALENDAR"
    assert f"PRODID:{PRODID}" in lines
    assert "VERSION:2.0" in lines
    assert text.count("BEGIN:VEVENT") == 2
    assert "DTSTART:20240115T070000Z" in lines
    assert "DTEND:20240115T073000Z" in lines
    assert "DTSTART:20240115T200000Z" in lines
    assert "DTSTAMP:20240115T120000Z" in lines
    assert lines.count("RRULE:FREQ=DAILY") == 2
    assert "SUMMARY:Morning Routine" in lines


def test_local_times_are_converted_to_utc():
    lines = _lines(generate_ics(now=NOW, tz="America/New_York"))
    assert "DTSTART:20240115T120000Z" in lines
    assert "DTSTART:20240116T010000Z" in lines


def test_routines_with_reminders_get_their_own_event():
    routines = [
        SimpleNamespace(id=1, name="Stretching", description=None, reminder_time="06:30", archived_at=None),
        SimpleNamespace(id=2, name="Silent", description=None, reminder_time=None, archived_at=None),
        SimpleNamespace(id=3, name="Old", description=None, reminder_time="09:00", archived_at=NOW),
    ]
    text = generate_ics(now=NOW, tz="UTC", routines=routines)

    assert text.count("BEGIN:VEVENT") == 3
    assert "SUMMARY:Stretching" in _lines(text)
    assert "DTSTART:20240115T063000Z" in _lines(text)


def test_unknown_timezone_is_rejected():
    with pytest.raises(ValidationError):
        generate_ics(now=NOW, tz="Mars/Olympus")
