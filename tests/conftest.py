"""
conftest.py: shared fixtures for scoring tests.

Strategy:
- Engine tests call the pure scoring functions directly.
- API tests run the FastAPI app over httpx ASGITransport. The database-backed
  AttendanceSource is replaced with InMemorySource through dependency
  overrides, and callers authenticate with real signed access tokens whose
  "sub" is looked up in an in-memory user table.
- Calendar used throughout: January 2026, weekend Friday+Saturday, so
  Sun 2026-01-04 .. Thu 2026-01-08 is one full work week.
"""

from __future__ import annotations

from datetime import date

import pytest
import pytest_asyncio
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from httpx import ASGITransport, AsyncClient

from attendscore.core.middleware import _subject, _unauthorized, bearer_scheme, get_current_user
from attendscore.core.security import create_access_token
from attendscore.db.models import User
from attendscore.main import app
from attendscore.scoring.models import (
    AttendancePunch,
    EmployeeRef,
    LeaveInterval,
    LeaveStatus,
    ManualPoints,
)
from attendscore.services.attendance_source import get_attendance_source

WEEK_START = date(2026, 1, 4)  # Sunday
WEEK_END = date(2026, 1, 8)  # Thursday


# ---------------------------------------------------------------------------
# In-memory replacement for the database-backed AttendanceSource
# ---------------------------------------------------------------------------


class InMemorySource:
    def __init__(
        self,
        employees: list[EmployeeRef] | None = None,
        punches: list[AttendancePunch] | None = None,
        leave: list[LeaveInterval] | None = None,
        holidays: set[date] | None = None,
        weekend: set[int] | None = None,
        manual_points: list[ManualPoints] | None = None,
    ) -> None:
        self.employees = employees or []
        self.punches = punches or []
        self.leave = leave or []
        self.holidays = holidays or set()
        self.weekend = weekend if weekend is not None else {5, 6}
        self.manual_points = manual_points or []

    async def get_employee(self, employee_key: str) -> EmployeeRef | None:
        return next((e for e in self.employees if e.employee_key == employee_key), None)

    async def list_employees(self) -> list[EmployeeRef]:
        return list(self.employees)

    async def get_punches(self, start, end, employee_key=None) -> list[AttendancePunch]:
        return [
            p for p in self.punches
            if start <= p.date <= end and employee_key in (None, p.employee_key)
        ]

    async def get_approved_leave(self, start, end, employee_key=None) -> list[LeaveInterval]:
        return [
            lv for lv in self.leave
            if lv.status is LeaveStatus.APPROVED
            and lv.start_date <= end
            and lv.end_date >= start
            and employee_key in (None, lv.employee_key)
        ]

    async def get_holidays(self, start, end) -> set[date]:
        return {d for d in self.holidays if start <= d <= end}

    async def get_weekend_days(self) -> set[int]:
        return set(self.weekend)

    async def get_manual_points(self, employee_key=None) -> list[ManualPoints]:
        return [m for m in self.manual_points if employee_key in (None, m.employee_key)]


def punch(employee_key: str, day: date, check_in: str | None, check_out: str | None = None) -> AttendancePunch:
    return AttendancePunch(employee_key=employee_key, date=day, check_in=check_in, check_out=check_out)


def leave(
    employee_key: str,
    start: date,
    end: date,
    status: LeaveStatus = LeaveStatus.APPROVED,
) -> LeaveInterval:
    return LeaveInterval(employee_key=employee_key, start_date=start, end_date=end, status=status)


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


@pytest.fixture
def week_punches() -> list[AttendancePunch]:
    """
    Employee 1001 over Sun..Thu 2026-01-04..08:
    on time Sun/Mon/Tue, nothing Wed, approved leave Thu.
    """
    return [
        punch("1001", date(2026, 1, 4), "07:10 AM", "3:00 PM"),
        punch("1001", date(2026, 1, 5), "7:25am", "3:05 PM"),
        punch("1001", date(2026, 1, 6), "07:30", "15:00"),
    ]


@pytest.fixture
def week_leave() -> list[LeaveInterval]:
    return [leave("1001", date(2026, 1, 8), date(2026, 1, 8))]


@pytest.fixture
def source(week_punches, week_leave) -> InMemorySource:
    return InMemorySource(
        employees=[
            EmployeeRef(employee_key="1001", full_name="Mona Saleh"),
            EmployeeRef(employee_key="1002", full_name="Omar Haddad", attendance_exempt=True),
            EmployeeRef(employee_key="1003", full_name="Rana Khalil"),
        ],
        punches=week_punches + [
            punch("1002", date(2026, 1, 4), "09:40 AM"),
            punch("1003", date(2026, 1, 4), "8:15 AM"),
            punch("1003", date(2026, 1, 5), "bad value"),
        ],
        leave=week_leave + [
            leave("1003", date(2026, 1, 6), date(2026, 1, 7), LeaveStatus.PENDING),
        ],
        # 1002 is exempt: scored from these (average 8.5), not from the 09:40 punch
        manual_points=[
            ManualPoints(employee_key="1002", points=8.0),
            ManualPoints(employee_key="1002", points=9.0),
        ],
    )


# ---------------------------------------------------------------------------
# Users and tokens
# ---------------------------------------------------------------------------


@pytest.fixture
def users() -> dict[str, User]:
    return {
        "1001": User(employee_key="1001", role="employee", full_name="Mona Saleh", is_active=True),
        "1003": User(employee_key="1003", role="employee", full_name="Rana Khalil", is_active=True),
        "9000": User(employee_key="9000", role="manager", full_name="HR Manager", is_active=True),
        "9001": User(employee_key="9001", role="admin", full_name="HR Admin", is_active=True),
    }


def auth_headers(employee_key: str) -> dict:
    token = create_access_token(data={"sub": employee_key})
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# HTTP client fixture
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(source: InMemorySource, users: dict[str, User]) -> AsyncClient:
    """HTTPX async client with the data source and user lookup overridden."""

    async def current_user_from_token(
        credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    ) -> User:
        employee_key = _subject(credentials)
        user = users.get(employee_key)
        if user is None:
            raise _unauthorized()
        return user

    app.dependency_overrides[get_attendance_source] = lambda: source
    app.dependency_overrides[get_current_user] = current_user_from_token

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
