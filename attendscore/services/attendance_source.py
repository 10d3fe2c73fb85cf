"""
Database-backed inputs for attendance scoring.

Fetches punches, leave, holidays, manual points and the weekend policy with
SQLAlchemy and converts rows into the plain scoring models. This is the only
place the scoring flow waits on I/O; the engine runs on already-loaded data.
"""

import logging
from datetime import date

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from attendscore.core.config import settings
from attendscore.db.models import (
    AppSetting,
    AttendanceLog,
    Holiday,
    LeaveRequest,
    ManualAttendancePoint,
    User,
)
from attendscore.db.session import get_db
from attendscore.scoring.models import AttendancePunch, EmployeeRef, LeaveInterval, ManualPoints

logger = logging.getLogger(__name__)

WEEKEND_SETTING_KEY = "weekend"


class AttendanceSource:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_employee(self, employee_key: str) -> EmployeeRef | None:
        result = await self.db.execute(select(User).where(User.employee_key == employee_key))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return EmployeeRef.model_validate(user)

    async def list_employees(self) -> list[EmployeeRef]:
        """Every active user, whatever the role; exemption is per employee."""
        result = await self.db.execute(
            select(User).where(User.is_active.is_(True)).order_by(User.full_name)
        )
        return [EmployeeRef.model_validate(u) for u in result.scalars().all()]

    async def get_manual_points(self, employee_key: str | None = None) -> list[ManualPoints]:
        """Manual attendance points; all employees when employee_key is None."""
        stmt = select(ManualAttendancePoint)
        if employee_key is not None:
            stmt = stmt.where(ManualAttendancePoint.employee_key == employee_key)
        result = await self.db.execute(stmt.order_by(ManualAttendancePoint.id))
        return [ManualPoints.model_validate(entry) for entry in result.scalars().all()]

    async def get_punches(
        self, start: date, end: date, employee_key: str | None = None
    ) -> list[AttendancePunch]:
        """Punches in [start, end]; all employees when employee_key is None."""
        stmt = select(AttendanceLog).where(AttendanceLog.date.between(start, end))
        if employee_key is not None:
            stmt = stmt.where(AttendanceLog.employee_key == employee_key)
        result = await self.db.execute(stmt.order_by(AttendanceLog.date, AttendanceLog.id))
        return [AttendancePunch.model_validate(log) for log in result.scalars().all()]

    async def get_approved_leave(
        self, start: date, end: date, employee_key: str | None = None
    ) -> list[LeaveInterval]:
        """Approved leave intervals overlapping [start, end]."""
        stmt = select(LeaveRequest).where(
            LeaveRequest.status == "Approved",
            LeaveRequest.start_date <= end,
            LeaveRequest.end_date >= start,
        )
        if employee_key is not None:
            stmt = stmt.where(LeaveRequest.employee_key == employee_key)
        result = await self.db.execute(stmt)
        return [LeaveInterval.model_validate(leave) for leave in result.scalars().all()]

    async def get_holidays(self, start: date, end: date) -> set[date]:
        result = await self.db.execute(
            select(Holiday.date).where(Holiday.date.between(start, end))
        )
        return set(result.scalars().all())

    async def get_weekend_days(self) -> set[int]:
        """Weekend weekdays from app_settings, falling back to WEEKEND_DAYS."""
        result = await self.db.execute(
            select(AppSetting.value).where(AppSetting.key == WEEKEND_SETTING_KEY)
        )
        value = result.scalar_one_or_none()
        days = value.get("days") if isinstance(value, dict) else None
        if days is None:
            return set(settings.WEEKEND_DAYS)
        try:
            weekend = {int(d) for d in days}
        except (TypeError, ValueError):
            logger.warning("Invalid weekend setting %r, using defaults %s", value, settings.WEEKEND_DAYS)
            return set(settings.WEEKEND_DAYS)
        return {d for d in weekend if 0 <= d <= 6}


async def get_attendance_source(db: AsyncSession = Depends(get_db)) -> AttendanceSource:
    return AttendanceSource(db)
