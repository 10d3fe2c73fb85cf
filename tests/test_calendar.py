from __future__ import annotations

from datetime import date

from attendscore.scoring.calendar import (
    DEFAULT_WEEKEND,
    FRIDAY,
    SATURDAY,
    SUNDAY,
    count_working_days,
    expand_leave,
    iter_days,
    weekday_index,
)
from attendscore.scoring.models import LeaveStatus
from tests.conftest import leave


def test_weekday_index_is_sunday_based():
    assert weekday_index(date(2026, 1, 4)) == SUNDAY
    assert weekday_index(date(2026, 1, 9)) == FRIDAY
    assert weekday_index(date(2026, 1, 10)) == SATURDAY
    assert DEFAULT_WEEKEND == {FRIDAY, SATURDAY}


def test_iter_days_inclusive():
    days = list(iter_days(date(2026, 1, 30), date(2026, 2, 2)))
    assert days == [date(2026, 1, 30), date(2026, 1, 31), date(2026, 2, 1), date(2026, 2, 2)]
    assert list(iter_days(date(2026, 1, 4), date(2026, 1, 4))) == [date(2026, 1, 4)]


def test_iter_days_inverted_is_empty():
    assert list(iter_days(date(2026, 1, 8), date(2026, 1, 4))) == []


def test_expand_leave_clips_and_filters():
    intervals = [
        leave("1001", date(2025, 12, 28), date(2026, 1, 5)),
        leave("1001", date(2026, 1, 7), date(2026, 1, 7), LeaveStatus.REJECTED),
        leave("1001", date(2026, 1, 8), date(2026, 1, 8), LeaveStatus.PENDING),
        leave("2002", date(2026, 1, 6), date(2026, 1, 6)),
    ]
    covered = expand_leave(intervals, "1001", date(2026, 1, 4), date(2026, 1, 8))
    assert covered == {date(2026, 1, 4), date(2026, 1, 5)}


def test_expand_leave_inverted_interval_covers_nothing():
    covered = expand_leave(
        [leave("1001", date(2026, 1, 8), date(2026, 1, 5))],
        "1001",
        date(2026, 1, 1),
        date(2026, 1, 31),
    )
    assert covered == set()


def test_count_working_days():
    # Sun 4 .. Sat 10: Friday and Saturday are off by default
    assert count_working_days(date(2026, 1, 4), date(2026, 1, 10)) == 5
    assert count_working_days(date(2026, 1, 4), date(2026, 1, 10), holidays={date(2026, 1, 6)}) == 4
    # Saturday/Sunday weekend
    assert count_working_days(date(2026, 1, 4), date(2026, 1, 10), weekend_weekdays={0, 6}) == 5
    assert count_working_days(date(2026, 1, 10), date(2026, 1, 4)) == 0
