"""
Attendance score API routes.

Scores are computed on demand from punches, approved leave, holidays and
the weekend policy; nothing is cached or persisted.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from attendscore.core.config import settings
from attendscore.core.middleware import ensure_can_view, get_current_user, require_role
from attendscore.db.models import User
from attendscore.schemas.scores import EmployeeScore
from attendscore.scoring.models import AttendanceReport, AttendanceScoreSummary
from attendscore.services.attendance_source import AttendanceSource, get_attendance_source
from attendscore.services.scoring import report_employee, score_all_employees, score_employee

router = APIRouter()


def resolve_range(date_from: date | None, date_to: date | None) -> tuple[date, date]:
    """Defaults: SCORING_START_DATE .. today. An inverted range is allowed and scores zero."""
    return (
        date_from or settings.SCORING_START_DATE,
        date_to or date.today(),
    )


@router.get(
    "/",
    response_model=list[EmployeeScore],
    summary="Attendance scores for all active employees",
)
async def list_scores(
    date_from: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    source: AttendanceSource = Depends(get_attendance_source),
    _current_user: User = Depends(require_role("admin", "manager")),
) -> list[EmployeeScore]:
    df, dt = resolve_range(date_from, date_to)
    scored = await score_all_employees(source, df, dt)
    return [
        EmployeeScore(
            employee_key=emp.employee_key,
            full_name=emp.full_name,
            attendance_exempt=emp.attendance_exempt,
            summary=summary,
        )
        for emp, summary in scored
    ]


@router.get(
    "/{employee_key}",
    response_model=AttendanceScoreSummary,
    summary="Attendance score summary for one employee",
)
async def get_score(
    employee_key: str,
    date_from: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    source: AttendanceSource = Depends(get_attendance_source),
    current_user: User = Depends(get_current_user),
) -> AttendanceScoreSummary:
    ensure_can_view(employee_key, current_user)
    df, dt = resolve_range(date_from, date_to)

    return await score_employee(source, employee_key, df, dt)


@router.get(
    "/{employee_key}/report",
    response_model=AttendanceReport,
    summary="Score, outcome counts and daily statuses for one employee",
)
async def get_report(
    employee_key: str,
    date_from: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    source: AttendanceSource = Depends(get_attendance_source),
    current_user: User = Depends(get_current_user),
) -> AttendanceReport:
    ensure_can_view(employee_key, current_user)
    df, dt = resolve_range(date_from, date_to)

    return await report_employee(source, employee_key, df, dt)
