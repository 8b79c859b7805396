from datetime import datetime, time, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from icalendar import Calendar, Event

from trackbit.config import settings
from trackbit.errors import ValidationError

PRODID = "-//Trackbit//Habit Tracker//EN"
EVENT_MINUTES = 30

FIXED_EVENTS = [
    ("morning-routine", "Morning Routine", "Start your day with your morning habits.", time(7, 0)),
    ("evening-routine", "Evening Routine", "Wind down and check off today's habits.", time(20, 0)),
]


def _zone(name: Optional[str]) -> ZoneInfo:
    try:
        return ZoneInfo(name or settings.CALENDAR_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name}")


def _event(uid: str, summary: str, description: str, local_start: datetime, stamp: datetime) -> Event:
    start = local_start.astimezone(timezone.utc)
    event = Event()
    event.add("uid", uid)
    event.add("dtstamp", stamp)
    event.add("dtstart", start)
    event.add("dtend", start + timedelta(minutes=EVENT_MINUTES))
    event.add("summary", summary)
    event.add("description", description)
    event.add("rrule", {"freq": "DAILY"})
    return event


def generate_ics(now: Optional[datetime] = None, tz: Optional[str] = None, routines: Iterable = ()) -> str:
    """Daily morning and evening reminders, plus one per routine with a reminder time.

    Local times are converted to UTC so every timestamp renders as
    ``YYYYMMDDThhmmssZ``.
    """
    zone = _zone(tz)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    stamp = now.astimezone(timezone.utc).replace(microsecond=0)
    today = now.astimezone(zone).date()
    day_key = today.strftime("%Y%m%d")

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")

    for key, summary, description, at in FIXED_EVENTS:
        local_start = datetime.combine(today, at, tzinfo=zone)
        cal.add_component(_event(f"trackbit-{key}-{day_key}@trackbit", summary, description, local_start, stamp))

    for routine in routines:
        if not routine.reminder_time or routine.archived_at is not None:
            continue
        hour, minute = (int(part) for part in routine.reminder_time.split(":"))
        local_start = datetime.combine(today, time(hour, minute), tzinfo=zone)
        description = routine.description or f"Time for your {routine.name} routine."
        cal.add_component(_event(f"trackbit-routine-{routine.id}-{day_key}@trackbit", routine.name, description, local_start, stamp))

    return cal.to_ical().decode("utf-8")
