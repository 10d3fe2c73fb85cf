from datetime import date

from fastapi import APIRouter, Depends, Query

from attendscore.api.scores import resolve_range
from attendscore.core.middleware import get_current_user
from attendscore.db.models import User
from attendscore.schemas.scores import WorkingDays
from attendscore.scoring.calendar import count_working_days
from attendscore.services.attendance_source import AttendanceSource, get_attendance_source

router = APIRouter()


@router.get(
    "/working-days",
    response_model=WorkingDays,
    summary="Number of working days (no weekend, no holiday) in a date range",
)
async def get_working_days(
    date_from: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    date_to: date | None = Query(default=None, description="ISO date YYYY-MM-DD"),
    source: AttendanceSource = Depends(get_attendance_source),
    _current_user: User = Depends(get_current_user),
) -> WorkingDays:
    df, dt = resolve_range(date_from, date_to)
    holidays = await source.get_holidays(df, dt)
    weekend = await source.get_weekend_days()
    return WorkingDays(
        date_from=df,
        date_to=dt,
        working_days=count_working_days(df, dt, holidays, weekend),
    )
