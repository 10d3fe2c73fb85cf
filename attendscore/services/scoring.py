"""
Attendance scoring service.

Loads the scoring inputs through an AttendanceSource, hands them to the
pure engine and reports data-quality problems (unreadable check-in times)
to the log. Scoring policy comes from settings unless passed in.

Employees flagged attendance_exempt are never scored from punches: every
entry point here returns the average of their manual points instead.
"""

import logging
from collections.abc import Iterable
from datetime import date

from attendscore.core.config import settings
from attendscore.scoring.classifier import ScoringPolicy
from attendscore.scoring.models import (
    AttendancePunch,
    AttendanceReport,
    AttendanceScoreSummary,
    EmployeeRef,
)
from attendscore.scoring.reconciler import (
    build_report,
    compute_attendance_score,
    exempt_report,
    exempt_score,
    score_employees,
)
from attendscore.scoring.timeparse import ParseFailure, parse_check_in
from attendscore.services.attendance_source import AttendanceSource

logger = logging.getLogger(__name__)


def _warn_unreadable_check_ins(punches: Iterable[AttendancePunch]) -> int:
    count = 0
    for punch in punches:
        if not punch.check_in:
            continue
        parsed = parse_check_in(punch.check_in)
        if isinstance(parsed, ParseFailure):
            count += 1
            logger.warning(
                "Unreadable check-in '%s' for employee=%s date=%s (%s); scored as absent",
                punch.check_in, punch.employee_key, punch.date, parsed.reason,
            )
    return count


async def _is_exempt(source: AttendanceSource, employee_key: str) -> bool:
    # Unknown keys are scored from punches (and come out fully absent)
    employee = await source.get_employee(employee_key)
    return employee is not None and employee.attendance_exempt


async def score_employee(
    source: AttendanceSource,
    employee_key: str,
    start: date,
    end: date,
    policy: ScoringPolicy | None = None,
) -> AttendanceScoreSummary:
    if await _is_exempt(source, employee_key):
        manual = await source.get_manual_points(employee_key)
        logger.debug(
            "Employee %s is exempt; using %d manual point entries", employee_key, len(manual)
        )
        return exempt_score(employee_key, manual)

    punches = await source.get_punches(start, end, employee_key)
    leave = await source.get_approved_leave(start, end, employee_key)
    holidays = await source.get_holidays(start, end)
    weekend = await source.get_weekend_days()

    _warn_unreadable_check_ins(punches)
    summary = compute_attendance_score(
        employee_key, start, end, punches, leave, holidays, weekend,
        policy or settings.scoring_policy(),
    )
    logger.debug(
        "Score employee=%s %s..%s: points=%.1f countable=%d pct=%.1f",
        employee_key, start, end, summary.total_points,
        summary.total_countable_days, summary.percentage,
    )
    return summary


async def report_employee(
    source: AttendanceSource,
    employee_key: str,
    start: date,
    end: date,
    policy: ScoringPolicy | None = None,
) -> AttendanceReport:
    if await _is_exempt(source, employee_key):
        manual = await source.get_manual_points(employee_key)
        return exempt_report(employee_key, start, end, manual)

    punches = await source.get_punches(start, end, employee_key)
    leave = await source.get_approved_leave(start, end, employee_key)
    holidays = await source.get_holidays(start, end)
    weekend = await source.get_weekend_days()

    _warn_unreadable_check_ins(punches)
    return build_report(
        employee_key, start, end, punches, leave, holidays, weekend,
        policy or settings.scoring_policy(),
    )


async def score_all_employees(
    source: AttendanceSource,
    start: date,
    end: date,
    policy: ScoringPolicy | None = None,
) -> list[tuple[EmployeeRef, AttendanceScoreSummary]]:
    """Scores for every active employee, in the source's listing order."""
    employees = await source.list_employees()
    if not employees:
        return []

    punches = await source.get_punches(start, end)
    leave = await source.get_approved_leave(start, end)
    holidays = await source.get_holidays(start, end)
    weekend = await source.get_weekend_days()
    manual = (
        await source.get_manual_points()
        if any(emp.attendance_exempt for emp in employees)
        else []
    )

    unreadable = _warn_unreadable_check_ins(punches)
    scores = score_employees(
        employees, start, end, punches, leave, holidays, weekend,
        policy or settings.scoring_policy(),
        manual,
    )
    logger.info(
        "Scored %d employees for %s..%s (punches=%d, leave=%d, unreadable check-ins=%d)",
        len(employees), start, end, len(punches), len(leave), unreadable,
    )
    return [(emp, scores[emp.employee_key]) for emp in employees]
