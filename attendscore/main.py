import logging
import subprocess
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from attendscore.api.calendar import router as calendar_router
from attendscore.api.scores import router as scores_router
from attendscore.core.config import settings

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run Alembic migrations on startup."""
    logger.info("Running Alembic migrations...")
    try:
        result = subprocess.run(
            ["alembic", "upgrade", "head"],
            capture_output=True,
            text=True,
            cwd=_PROJECT_ROOT,
        )
        if result.returncode != 0:
            logger.error("Alembic migration failed:\n%s", result.stderr)
        else:
            logger.info("Migrations applied successfully:\n%s", result.stdout)
    except OSError as exc:
        logger.exception("Failed to run migrations: %s", exc)

    logger.info(
        "Scoring policy: cutoff=%s late_point=%.2f default_weekend=%s",
        settings.ON_TIME_CUTOFF, settings.LATE_POINT, settings.WEEKEND_DAYS,
    )

    yield

    logger.info("Shutting down AttendScore backend.")


app = FastAPI(
    title="AttendScore API",
    description="Attendance scoring for HR dashboards and KPI rollups.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(scores_router, prefix="/api/scores", tags=["Scores"])
app.include_router(calendar_router, prefix="/api/calendar", tags=["Calendar"])


@app.get("/health", tags=["System"])
async def health_check() -> dict:
    return {"status": "ok"}
