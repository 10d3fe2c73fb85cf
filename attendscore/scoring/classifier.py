from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from attendscore.scoring.timeparse import ParseFailure, parse_check_in, parse_clock

DEFAULT_CUTOFF = "07:30"
DEFAULT_LATE_POINT = 0.5


class DayOutcome(str, enum.Enum):
    ON_LEAVE = "leave"
    ON_TIME = "on_time"
    LATE = "late"
    ABSENT = "absent"


class ScoringPolicy(BaseModel):
    """Cutoff and point values used to score one countable day."""

    model_config = {"frozen": True}

    cutoff_minutes: int = Field(default=7 * 60 + 30, ge=0)
    late_point: float = Field(default=DEFAULT_LATE_POINT, ge=0.0, le=1.0)

    @classmethod
    def from_clock(cls, cutoff: str = DEFAULT_CUTOFF, late_point: float = DEFAULT_LATE_POINT) -> ScoringPolicy:
        return cls(cutoff_minutes=parse_clock(cutoff).minutes, late_point=late_point)


DEFAULT_POLICY = ScoringPolicy()


def classify_check_in(raw: str | None, policy: ScoringPolicy = DEFAULT_POLICY) -> DayOutcome:
    """On time up to and including the cutoff minute, late after it."""
    parsed = parse_check_in(raw)
    if isinstance(parsed, ParseFailure):
        return DayOutcome.ABSENT
    if parsed.minutes <= policy.cutoff_minutes:
        return DayOutcome.ON_TIME
    return DayOutcome.LATE


def point_for(outcome: DayOutcome, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    if outcome is DayOutcome.LATE:
        return policy.late_point
    if outcome is DayOutcome.ABSENT:
        return 0.0
    return 1.0


def check_in_point(raw: str | None, policy: ScoringPolicy = DEFAULT_POLICY) -> float:
    return point_for(classify_check_in(raw, policy), policy)
