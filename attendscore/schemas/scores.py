from datetime import date

from pydantic import BaseModel

from attendscore.scoring.models import AttendanceScoreSummary


class EmployeeScore(BaseModel):
    employee_key: str
    full_name: str | None
    attendance_exempt: bool
    summary: AttendanceScoreSummary


class WorkingDays(BaseModel):
    date_from: date
    date_to: date
    working_days: int
