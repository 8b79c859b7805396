import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(ROOT_DIR / ".env")


def _optional_int(raw: Optional[str]) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "Trackbit API")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./trackbit.db")
    AUTO_CREATE_SCHEMA: bool = os.getenv("AUTO_CREATE_SCHEMA", "1") == "1"
    CORS_ORIGINS: list[str] = [
        item.strip()
        for item in os.getenv("CORS_ORIGINS", "*").split(",")
        if item.strip()
    ]
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

    COACH_API_URL: str = os.getenv("COACH_API_URL", "").strip()
    COACH_TIMEOUT_SECONDS: float = float(os.getenv("COACH_TIMEOUT_SECONDS", "8"))

    GOAL_EFFECTIVE_THRESHOLD: float = float(os.getenv("GOAL_EFFECTIVE_THRESHOLD", "0.8"))
    GOAL_MODERATE_THRESHOLD: float = float(os.getenv("GOAL_MODERATE_THRESHOLD", "0.5"))

    SUGGESTION_LIMIT: int = int(os.getenv("SUGGESTION_LIMIT", "5"))
    SUGGESTION_SEED: Optional[int] = _optional_int(os.getenv("SUGGESTION_SEED"))
    RECOMMENDATION_LIMIT: int = int(os.getenv("RECOMMENDATION_LIMIT", "8"))

    CALENDAR_TIMEZONE: str = os.getenv("CALENDAR_TIMEZONE", "UTC").strip() or "UTC"


settings = Settings()
