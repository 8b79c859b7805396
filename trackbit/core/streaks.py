from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Set

from trackbit.core.dates import DateLike, date_range, distinct_sorted, is_due_on, parse_date, trailing_window


@dataclass
class StreakStats:
    current: int = 0
    longest: int = 0
    last_completed_date: Optional[date] = None


def streak_runs(completed_dates: Iterable[DateLike]) -> List[int]:
    """Lengths of consecutive-day runs, oldest first."""
    runs: List[int] = []
    previous: Optional[date] = None
    for d in distinct_sorted(completed_dates):
        if previous is not None and d - previous == timedelta(days=1):
            runs[-1] += 1
        else:
            runs.append(1)
        previous = d
    return runs


def compute_streak(completed_dates: Iterable[DateLike], previous_longest: int = 0) -> StreakStats:
    dates = distinct_sorted(completed_dates)
    if not dates:
        return StreakStats(current=0, longest=max(previous_longest, 0))

    runs = streak_runs(dates)
    return StreakStats(
        current=runs[-1],
        longest=max(max(runs), previous_longest),
        last_completed_date=dates[-1],
    )


def completion_rate(habit, completed_dates: Iterable[DateLike], days: int = 30, today: Optional[DateLike] = None) -> float:
    """Percentage of scheduled dates in the trailing window that were completed."""
    today_d = parse_date(today) if today is not None else date.today()
    scheduled = [d for d in trailing_window(days, today_d) if is_due_on(habit, d)]
    if not scheduled:
        return 0.0

    done: Set[date] = {parse_date(d) for d in completed_dates}
    hits = sum(1 for d in scheduled if d in done)
    return hits / len(scheduled) * 100


def completion_rate_for_date(habits, completed_pairs: Set[tuple], day: DateLike) -> float:
    """Share of active habits due on ``day`` that have a completed log.

    ``completed_pairs`` holds ``(habit_id, date)`` tuples.
    """
    d = parse_date(day)
    due = [h for h in habits if h.archived_at is None and is_due_on(h, d)]
    if not due:
        return 0.0
    done = sum(1 for h in due if (h.id, d) in completed_pairs)
    return done / len(due) * 100


def completion_rate_for_range(habits, completed_pairs: Set[tuple], start: DateLike, end: DateLike) -> float:
    """Mean of the non-zero daily rates in the range."""
    rates = [completion_rate_for_date(habits, completed_pairs, d) for d in date_range(start, end)]
    rates = [r for r in rates if r > 0]
    if not rates:
        return 0.0
    return sum(rates) / len(rates)
