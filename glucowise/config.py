from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the GlucoWise backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("GLUCOWISE_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("GLUCOWISE_DB_PATH") or (self.data_root / "glucowise.db")
        ).expanduser()
        # In production you MUST set GLUCOWISE_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("GLUCOWISE_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("GLUCOWISE_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("GLUCOWISE_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.log_level: str = (os.environ.get("GLUCOWISE_LOG_LEVEL") or "INFO").upper()

        # Day keys (YYYY-MM-DD) are computed in this timezone.
        self.timezone: str = os.environ.get("GLUCOWISE_TIMEZONE") or "UTC"
        self.persist_store: bool = (os.environ.get("GLUCOWISE_PERSIST_STORE") or "1").strip() not in {"0", "false", "False"}

        # Next-meal recommendation thresholds.
        self.high_gi_threshold: float = float(os.environ.get("GLUCOWISE_HIGH_GI") or "70")
        self.high_carb_threshold: float = float(os.environ.get("GLUCOWISE_HIGH_CARBS_G") or "60")
        self.low_fiber_threshold: float = float(os.environ.get("GLUCOWISE_LOW_FIBER_G") or "5")

        # Default daily goals, used until the user sets their own.
        self.default_steps_goal: int = int(os.environ.get("GLUCOWISE_STEPS_GOAL") or "10000")
        self.default_calories_goal: float = float(os.environ.get("GLUCOWISE_CALORIES_GOAL") or "2000")
        self.default_burn_goal: float = float(os.environ.get("GLUCOWISE_BURN_GOAL") or "400")
        self.default_activity_minutes_goal: int = int(os.environ.get("GLUCOWISE_ACTIVITY_MIN_GOAL") or "30")

        cors = os.environ.get("GLUCOWISE_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
