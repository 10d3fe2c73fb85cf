import datetime
import uuid

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    Index,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Badge number on the time clock; punches and leave refer to it
    employee_key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(
        Enum("admin", "manager", "employee", name="user_role"),
        nullable=False,
        default="employee",
    )
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    attendance_exempt: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} employee_key={self.employee_key} role={self.role}>"


class AttendanceLog(Base):
    __tablename__ = "attendance_logs"

    __table_args__ = (
        Index("ix_attendance_employee_date", "employee_key", "date"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    employee_key: Mapped[str] = mapped_column(String(64), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    # Raw wall-clock strings as exported by the time clock ("7:25 AM", "07:25")
    check_in: Mapped[str | None] = mapped_column(String(32), nullable=True)
    check_out: Mapped[str | None] = mapped_column(String(32), nullable=True)
    source: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<AttendanceLog id={self.id} employee_key={self.employee_key} "
            f"date={self.date} check_in={self.check_in}>"
        )


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    __table_args__ = (
        Index("ix_leave_employee_dates", "employee_key", "start_date", "end_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_key: Mapped[str] = mapped_column(String(64), nullable=False)
    leave_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        Enum("Pending", "Approved", "Rejected", name="leave_status_enum"),
        nullable=False,
        default="Pending",
    )

    def __repr__(self) -> str:
        return (
            f"<LeaveRequest id={self.id} employee_key={self.employee_key} "
            f"{self.start_date}..{self.end_date} status={self.status}>"
        )


class Holiday(Base):
    __tablename__ = "holidays"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime.date] = mapped_column(Date, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Holiday date={self.date} name={self.name}>"


class AppSetting(Base):
    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[dict | None] = mapped_column(JSONB, nullable=True)


class ManualAttendancePoint(Base):
    """HR-entered attendance score (0..10) for an employee exempt from punch scoring."""

    __tablename__ = "manual_attendance_points"

    __table_args__ = (
        Index("ix_manual_points_employee", "employee_key"),
        CheckConstraint("points >= 0 AND points <= 10", name="ck_manual_points_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employee_key: Mapped[str] = mapped_column(String(64), nullable=False)
    points: Mapped[float] = mapped_column(Numeric(4, 2, asdecimal=False), nullable=False)
    note: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<ManualAttendancePoint employee_key={self.employee_key} points={self.points}>"
