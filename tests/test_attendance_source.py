"""
AttendanceSource query and conversion tests.

The AsyncSession is replaced by a recorder that returns canned ORM rows and
keeps every executed statement, so the WHERE clauses can be checked without
a database.

Tests:
  - TestListEmployees : all active users, any role
  - TestManualPoints  : rows → ManualPoints, per-employee filter
  - TestWeekendDays   : app_settings value, fallback, invalid values
"""

from __future__ import annotations

import logging

from attendscore.core.config import settings
from attendscore.db.models import ManualAttendancePoint, User
from attendscore.scoring.models import EmployeeRef, ManualPoints
from attendscore.services.attendance_source import AttendanceSource


class _Result:
    def __init__(self, rows: list) -> None:
        self._rows = rows

    def scalars(self) -> "_Result":
        return self

    def all(self) -> list:
        return list(self._rows)

    def scalar_one_or_none(self):
        return self._rows[0] if self._rows else None


class RecordingSession:
    def __init__(self, *results: list) -> None:
        self.results = list(results)
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return _Result(self.results.pop(0) if self.results else [])


def _user(employee_key: str, role: str, exempt: bool = False) -> User:
    return User(
        employee_key=employee_key,
        role=role,
        full_name=f"User {employee_key}",
        is_active=True,
        attendance_exempt=exempt,
    )


class TestListEmployees:
    async def test_managers_who_clock_in_are_listed(self) -> None:
        session = RecordingSession([_user("9000", "manager"), _user("1001", "employee")])
        employees = await AttendanceSource(session).list_employees()

        assert [e.employee_key for e in employees] == ["9000", "1001"]
        where = str(session.statements[0].whereclause)
        assert "is_active" in where
        assert "role" not in where

    async def test_exempt_flag_is_carried(self) -> None:
        session = RecordingSession([_user("1002", "employee", exempt=True)])
        employee = await AttendanceSource(session).get_employee("1002")
        assert employee == EmployeeRef(
            employee_key="1002", full_name="User 1002", attendance_exempt=True
        )

    async def test_unknown_employee(self) -> None:
        assert await AttendanceSource(RecordingSession([])).get_employee("7777") is None


class TestManualPoints:
    async def test_rows_converted(self) -> None:
        session = RecordingSession([
            ManualAttendancePoint(employee_key="1002", points=8.0),
            ManualAttendancePoint(employee_key="1002", points=9.0),
        ])
        entries = await AttendanceSource(session).get_manual_points("1002")

        assert entries == [
            ManualPoints(employee_key="1002", points=8.0),
            ManualPoints(employee_key="1002", points=9.0),
        ]
        assert "employee_key" in str(session.statements[0].whereclause)

    async def test_all_employees(self) -> None:
        session = RecordingSession([])
        assert await AttendanceSource(session).get_manual_points() == []
        assert session.statements[0].whereclause is None


class TestWeekendDays:
    async def test_from_app_settings(self) -> None:
        session = RecordingSession([{"days": [0, 6]}])
        assert await AttendanceSource(session).get_weekend_days() == {0, 6}

    async def test_missing_row_falls_back(self) -> None:
        session = RecordingSession([])
        assert await AttendanceSource(session).get_weekend_days() == set(settings.WEEKEND_DAYS)

    async def test_out_of_range_days_dropped(self) -> None:
        session = RecordingSession([{"days": [5, 9]}])
        assert await AttendanceSource(session).get_weekend_days() == {5}

    async def test_invalid_value_logged(self, caplog) -> None:
        session = RecordingSession([{"days": ["fri"]}])
        with caplog.at_level(logging.WARNING):
            weekend = await AttendanceSource(session).get_weekend_days()
        assert weekend == set(settings.WEEKEND_DAYS)
        assert "Invalid weekend setting" in caplog.text
