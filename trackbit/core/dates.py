"""Calendar helpers for the habit scheduling model.

Weekdays follow the Sunday=0 convention used by stored ``target_days``,
not Python's Monday=0 ``date.weekday()``.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])


def format_date(value: DateLike) -> str:
    return parse_date(value).strftime("%Y-%m-%d")


def format_date_for_display(value: DateLike) -> str:
    d = parse_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_month_for_display(value: DateLike) -> str:
    return parse_date(value).strftime("%B %Y")


def day_of_week(value: DateLike) -> int:
    return (parse_date(value).weekday() + 1) % 7


def day_label(day: int) -> str:
    return DAY_LABELS[day % 7]


def is_due_on(habit, value: DateLike) -> bool:
    if habit.frequency == "daily":
        return True
    return day_of_week(value) in set(habit.target_days or [])


def date_range(start: DateLike, end: DateLike) -> List[date]:
    start_d, end_d = parse_date(start), parse_date(end)
    if start_d > end_d:
        return []
    return [start_d + timedelta(days=i) for i in range((end_d - start_d).days + 1)]


def trailing_window(days: int, today: DateLike) -> List[date]:
    """Dates in [today - days, today], inclusive on both ends."""
    end = parse_date(today)
    return date_range(end - timedelta(days=max(days, 0)), end)


def start_of_week(value: DateLike, week_starts_on: int = 0) -> date:
    d = parse_date(value)
    offset = (day_of_week(d) - week_starts_on) % 7
    return d - timedelta(days=offset)


def get_days_of_week(week_starts_on: int = 0) -> List[str]:
    if week_starts_on == 1:
        return DAY_LABELS[1:] + DAY_LABELS[:1]
    return list(DAY_LABELS)


def get_dates_for_week(value: DateLike, week_starts_on: int = 0) -> List[date]:
    first = start_of_week(value, week_starts_on)
    return [first + timedelta(days=i) for i in range(7)]


def get_dates_for_month(value: DateLike, week_starts_on: int = 0) -> List[List[date]]:
    """Six-week calendar grid covering the month of ``value``."""
    first_of_month = parse_date(value).replace(day=1)
    grid_start = start_of_week(first_of_month, week_starts_on)
    return [
        [grid_start + timedelta(days=week * 7 + day) for day in range(7)]
        for week in range(6)
    ]


def shift_weeks(value: DateLike, weeks: int) -> date:
    return parse_date(value) + timedelta(weeks=weeks)


def shift_months(value: DateLike, months: int) -> date:
    d = parse_date(value)
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = _days_in_month(year, month)
    return date(year, month, min(d.day, last_day))


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - timedelta(days=1)).day


def distinct_sorted(dates: Iterable[DateLike]) -> List[date]:
    return sorted({parse_date(d) for d in dates})
