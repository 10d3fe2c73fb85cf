"""
Range reconciliation: turns punches, approved leave and the work calendar
into a per-employee attendance score.

Each day of the range is resolved in a fixed order:

  1. weekend weekday or holiday -> not countable, not scored
  2. approved leave             -> 1.0
  3. earliest check-in          -> 1.0 on time / late point / 0.0 unreadable
  4. nothing                    -> 0.0 (absent)

All inputs are passed in explicitly. Nothing here reads settings or keeps
state between calls, so one call per employee can run in parallel with any
other.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from datetime import date

from attendscore.scoring.calendar import (
    expand_leave,
    iter_days,
    resolve_holidays,
    resolve_weekend,
    weekday_index,
)
from attendscore.scoring.classifier import (
    DEFAULT_POLICY,
    DayOutcome,
    ScoringPolicy,
    classify_check_in,
    point_for,
)
from attendscore.scoring.models import (
    AttendanceBreakdown,
    AttendancePunch,
    AttendanceReport,
    AttendanceScoreSummary,
    DayStatus,
    EmployeeRef,
    LeaveInterval,
    ManualPoints,
)
from attendscore.scoring.timeparse import ParsedTime, parse_check_in


def _require(**kwargs: object) -> None:
    for name, value in kwargs.items():
        if value is None:
            raise ValueError(f"{name} is required")


def _check_in_rank(check_in: str) -> tuple[int, int]:
    # Unreadable check-ins sort after every readable one.
    parsed = parse_check_in(check_in)
    if isinstance(parsed, ParsedTime):
        return (0, parsed.minutes)
    return (1, 0)


def index_earliest_punches(
    punches: Iterable[AttendancePunch],
    employee_key: str,
    start_date: date,
    end_date: date,
) -> dict[date, AttendancePunch]:
    """
    Map each date in range to the employee's punch with the earliest check-in.

    Punches without a check-in never create or replace an entry. On equal
    check-in times the first punch seen is kept.
    """
    earliest: dict[date, AttendancePunch] = {}
    ranks: dict[date, tuple[int, int]] = {}
    for punch in punches:
        if punch.employee_key != employee_key or not punch.check_in:
            continue
        if not (start_date <= punch.date <= end_date):
            continue
        rank = _check_in_rank(punch.check_in)
        if punch.date not in ranks or rank < ranks[punch.date]:
            earliest[punch.date] = punch
            ranks[punch.date] = rank
    return earliest


def _walk(
    start_date: date,
    end_date: date,
    earliest: dict[date, AttendancePunch],
    on_leave: set[date],
    holidays: frozenset[date],
    weekend: frozenset[int],
    policy: ScoringPolicy,
) -> Iterator[DayStatus]:
    for day in iter_days(start_date, end_date):
        # Non-working days are not scored but still show any punch
        if weekday_index(day) in weekend or day in holidays:
            punch = earliest.get(day)
            yield DayStatus(
                date=day,
                status="weekend" if weekday_index(day) in weekend else "holiday",
                check_in=punch.check_in if punch else None,
            )
            continue

        if day in on_leave:
            outcome = DayOutcome.ON_LEAVE
            check_in = None
        elif day in earliest:
            check_in = earliest[day].check_in
            outcome = classify_check_in(check_in, policy)
        else:
            outcome = DayOutcome.ABSENT
            check_in = None

        yield DayStatus(
            date=day,
            status=outcome.value,
            point=point_for(outcome, policy),
            check_in=check_in,
        )


def reconcile_days(
    employee_key: str,
    start_date: date,
    end_date: date,
    punches: Iterable[AttendancePunch],
    approved_leave: Iterable[LeaveInterval],
    holidays: Iterable[date] | None = None,
    weekend_weekdays: Iterable[int] | None = None,
    policy: ScoringPolicy | None = None,
) -> Iterator[DayStatus]:
    """
    Status of every date in [start_date, end_date], in increasing date order.

    Countable days carry a point; weekend and holiday days carry None.
    An inverted range yields nothing.
    """
    _require(employee_key=employee_key, start_date=start_date, end_date=end_date)
    _require(punches=punches, approved_leave=approved_leave)

    earliest = index_earliest_punches(punches, employee_key, start_date, end_date)
    on_leave = expand_leave(approved_leave, employee_key, start_date, end_date)
    return _walk(
        start_date,
        end_date,
        earliest,
        on_leave,
        resolve_holidays(holidays),
        resolve_weekend(weekend_weekdays),
        policy or DEFAULT_POLICY,
    )


def _tally(days: Iterable[DayStatus]) -> tuple[AttendanceScoreSummary, AttendanceBreakdown]:
    total_points = 0.0
    total_countable_days = 0
    counts = {"on_time": 0, "late": 0, "absent": 0, "leave": 0}
    for day in days:
        if not day.countable:
            continue
        total_countable_days += 1
        total_points += day.point
        counts[day.status] += 1

    breakdown = AttendanceBreakdown(
        on_time_days=counts["on_time"],
        late_days=counts["late"],
        absent_days=counts["absent"],
        leave_days=counts["leave"],
    )
    return AttendanceScoreSummary.from_totals(total_points, total_countable_days), breakdown


def compute_attendance_score(
    employee_key: str,
    start_date: date,
    end_date: date,
    punches: Iterable[AttendancePunch],
    approved_leave: Iterable[LeaveInterval],
    holidays: Iterable[date] | None = None,
    weekend_weekdays: Iterable[int] | None = None,
    policy: ScoringPolicy | None = None,
) -> AttendanceScoreSummary:
    """
    Attendance score of one employee over an inclusive date range.

    Only Approved leave intervals of this employee are used, so callers may
    pass unfiltered leave. Punches outside the range or for other employees
    are ignored. weekend_weekdays defaults to Friday and Saturday, holidays
    to none. Returns the all-zero summary when no day in range is countable.
    """
    days = reconcile_days(
        employee_key, start_date, end_date, punches, approved_leave,
        holidays, weekend_weekdays, policy,
    )
    summary, _ = _tally(days)
    return summary


def build_report(
    employee_key: str,
    start_date: date,
    end_date: date,
    punches: Iterable[AttendancePunch],
    approved_leave: Iterable[LeaveInterval],
    holidays: Iterable[date] | None = None,
    weekend_weekdays: Iterable[int] | None = None,
    policy: ScoringPolicy | None = None,
) -> AttendanceReport:
    """Summary, per-outcome day counts and the daily calendar in one pass."""
    days = list(
        reconcile_days(
            employee_key, start_date, end_date, punches, approved_leave,
            holidays, weekend_weekdays, policy,
        )
    )
    summary, breakdown = _tally(days)
    return AttendanceReport(
        employee_key=employee_key,
        start_date=start_date,
        end_date=end_date,
        summary=summary,
        breakdown=breakdown,
        days=days,
    )


def exempt_score(
    employee_key: str, manual_points: Iterable[ManualPoints] | None = None
) -> AttendanceScoreSummary:
    """Average of the employee's manual entries; zero when there are none."""
    return AttendanceScoreSummary.from_manual_points(
        [entry.points for entry in manual_points or () if entry.employee_key == employee_key]
    )


def exempt_report(
    employee_key: str,
    start_date: date,
    end_date: date,
    manual_points: Iterable[ManualPoints] | None = None,
) -> AttendanceReport:
    return AttendanceReport(
        employee_key=employee_key,
        start_date=start_date,
        end_date=end_date,
        summary=exempt_score(employee_key, manual_points),
        breakdown=AttendanceBreakdown(),
        days=[],
        attendance_exempt=True,
    )


def score_employees(
    employees: Iterable[EmployeeRef],
    start_date: date,
    end_date: date,
    punches: Iterable[AttendancePunch],
    approved_leave: Iterable[LeaveInterval],
    holidays: Iterable[date] | None = None,
    weekend_weekdays: Iterable[int] | None = None,
    policy: ScoringPolicy | None = None,
    manual_points: Iterable[ManualPoints] | None = None,
) -> dict[str, AttendanceScoreSummary]:
    """
    Score many employees against shared punch and leave collections.

    Exempt employees are not scored from punches; they get the average of
    their manual points, or the zero summary without any. Inputs are grouped
    by employee once, so the cost is linear in the number of punches and
    leave days.
    """
    punches_by_key: dict[str, list[AttendancePunch]] = defaultdict(list)
    for punch in punches:
        punches_by_key[punch.employee_key].append(punch)
    leave_by_key: dict[str, list[LeaveInterval]] = defaultdict(list)
    for leave in approved_leave:
        leave_by_key[leave.employee_key].append(leave)
    manual_by_key: dict[str, list[ManualPoints]] = defaultdict(list)
    for entry in manual_points or ():
        manual_by_key[entry.employee_key].append(entry)

    holiday_set = resolve_holidays(holidays)
    weekend = resolve_weekend(weekend_weekdays)

    results: dict[str, AttendanceScoreSummary] = {}
    for employee in employees:
        if employee.attendance_exempt:
            results[employee.employee_key] = exempt_score(
                employee.employee_key, manual_by_key.get(employee.employee_key, [])
            )
            continue
        results[employee.employee_key] = compute_attendance_score(
            employee.employee_key,
            start_date,
            end_date,
            punches_by_key.get(employee.employee_key, []),
            leave_by_key.get(employee.employee_key, []),
            holiday_set,
            weekend,
            policy,
        )
    return results
