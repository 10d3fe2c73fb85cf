import enum
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field


class LeaveStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AttendancePunch(BaseModel):
    model_config = {"frozen": True, "from_attributes": True}

    employee_key: str
    date: date
    check_in: str | None = None
    check_out: str | None = None


class LeaveInterval(BaseModel):
    model_config = {"frozen": True, "from_attributes": True}

    employee_key: str
    start_date: date
    end_date: date
    status: LeaveStatus = LeaveStatus.APPROVED


class AttendanceScoreSummary(BaseModel):
    model_config = {"frozen": True}

    total_points: float = 0.0
    total_countable_days: int = 0
    percentage: float = Field(default=0.0, ge=0.0, le=100.0)
    normalized_score: float = Field(default=0.0, ge=0.0, le=10.0)

    @classmethod
    def from_totals(cls, total_points: float, total_countable_days: int) -> "AttendanceScoreSummary":
        if total_countable_days <= 0:
            return cls()
        percentage = min(total_points / total_countable_days * 100, 100.0)
        return cls(
            total_points=total_points,
            total_countable_days=total_countable_days,
            percentage=percentage,
            normalized_score=percentage / 10,
        )

    @classmethod
    def from_manual_points(cls, points: list[float]) -> "AttendanceScoreSummary":
        """
        Summary for an exempt employee: the average of manual entries, which
        are already on the 0..10 scale. Each entry counts as one scored day
        worth points / 10.
        """
        if not points:
            return cls()
        average = sum(points) / len(points)
        return cls(
            total_points=sum(points) / 10,
            total_countable_days=len(points),
            percentage=min(average * 10, 100.0),
            normalized_score=min(average, 10.0),
        )


class ManualPoints(BaseModel):
    """A manual attendance score (0..10) recorded for an exempt employee."""

    model_config = {"frozen": True, "from_attributes": True}

    employee_key: str
    points: float = Field(ge=0.0, le=10.0)


class DayStatus(BaseModel):
    model_config = {"frozen": True}

    date: date
    status: Literal["weekend", "holiday", "leave", "on_time", "late", "absent"]
    point: float | None = None
    check_in: str | None = None

    @property
    def countable(self) -> bool:
        return self.point is not None


class AttendanceBreakdown(BaseModel):
    on_time_days: int = 0
    late_days: int = 0
    absent_days: int = 0
    leave_days: int = 0


class AttendanceReport(BaseModel):
    employee_key: str
    start_date: date
    end_date: date
    summary: AttendanceScoreSummary
    breakdown: AttendanceBreakdown
    days: list[DayStatus]
    # Exempt reports carry the manual-points summary and no daily rows
    attendance_exempt: bool = False


class EmployeeRef(BaseModel):
    """Who to score in a bulk run."""

    model_config = {"frozen": True, "from_attributes": True}

    employee_key: str
    full_name: str | None = None
    attendance_exempt: bool = False
