from datetime import date

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from attendscore.scoring.classifier import ScoringPolicy
from attendscore.scoring.timeparse import parse_clock


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    DATABASE_URL: str = "postgresql+asyncpg://attend:attend_secret@db:5432/attendscore"
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15

    # Scoring policy; defaults reproduce historical scores
    ON_TIME_CUTOFF: str = "07:30"
    LATE_POINT: float = Field(default=0.5, ge=0.0, le=1.0)

    # 0=Sunday .. 6=Saturday; used when app_settings has no "weekend" row
    WEEKEND_DAYS: list[int] = [5, 6]

    # Default start of the scoring window for dashboard queries
    SCORING_START_DATE: date = date(2025, 9, 1)

    @field_validator("ON_TIME_CUTOFF")
    @classmethod
    def valid_cutoff(cls, v: str) -> str:
        parse_clock(v)
        return v

    @field_validator("WEEKEND_DAYS")
    @classmethod
    def valid_weekdays(cls, v: list[int]) -> list[int]:
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("Weekend days must be between 0 (Sunday) and 6 (Saturday)")
        return v

    def scoring_policy(self) -> ScoringPolicy:
        return ScoringPolicy.from_clock(self.ON_TIME_CUTOFF, self.LATE_POINT)


settings = Settings()
