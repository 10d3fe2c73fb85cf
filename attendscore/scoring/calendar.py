"""
Calendar helpers for attendance scoring.

Weekday indices follow the Sunday-based convention used by the weekend
settings: 0=Sunday, 1=Monday, ... 6=Saturday.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date, timedelta

from attendscore.scoring.models import LeaveInterval, LeaveStatus

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

DEFAULT_WEEKEND: frozenset[int] = frozenset({FRIDAY, SATURDAY})

_ONE_DAY = timedelta(days=1)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every date from start to end, both inclusive. Empty if end < start."""
    cur = start
    while cur <= end:
        yield cur
        cur += _ONE_DAY


def weekday_index(d: date) -> int:
    """Sunday-based weekday index (date.weekday() is Monday-based)."""
    return d.isoweekday() % 7


def resolve_weekend(weekend_weekdays: Iterable[int] | None) -> frozenset[int]:
    if weekend_weekdays is None:
        return DEFAULT_WEEKEND
    return frozenset(weekend_weekdays)


def resolve_holidays(holidays: Iterable[date] | None) -> frozenset[date]:
    if holidays is None:
        return frozenset()
    return frozenset(holidays)


def is_countable(d: date, weekend: frozenset[int], holidays: frozenset[date]) -> bool:
    return weekday_index(d) not in weekend and d not in holidays


def expand_leave(
    intervals: Iterable[LeaveInterval],
    employee_key: str,
    window_start: date,
    window_end: date,
) -> set[date]:
    """
    Dates covered by the employee's approved leave, clipped to the window.

    Work is proportional to the number of covered days, not to
    intervals x window length.
    """
    covered: set[date] = set()
    for leave in intervals:
        if leave.employee_key != employee_key or leave.status is not LeaveStatus.APPROVED:
            continue
        start = max(leave.start_date, window_start)
        end = min(leave.end_date, window_end)
        covered.update(iter_days(start, end))
    return covered


def count_working_days(
    start: date,
    end: date,
    holidays: Iterable[date] | None = None,
    weekend_weekdays: Iterable[int] | None = None,
) -> int:
    """Weekdays outside the weekend set that are not holidays."""
    weekend = resolve_weekend(weekend_weekdays)
    holiday_set = resolve_holidays(holidays)
    return sum(1 for d in iter_days(start, end) if is_countable(d, weekend, holiday_set))
