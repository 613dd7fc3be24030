from __future__ import annotations

import os
from pathlib import Path
from typing import List


def _env_flag(name: str, default: str) -> bool:
    return (os.environ.get(name) or default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Centralized configuration for the HealthQuest backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent

        self.data_root: Path = Path(
            os.environ.get("HEALTHQUEST_DATA_ROOT") or (repo_root / "data")
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("HEALTHQUEST_DB_PATH") or (self.data_root / "healthquest.db")
        ).expanduser()
        self.public_dir: Path = Path(
            os.environ.get("HEALTHQUEST_PUBLIC_DIR") or (repo_root / "Public")
        ).expanduser()

        # ---- Nutritionix ----
        # Both credentials are required; without them food search goes straight to the local list.
        self.nutritionix_app_id: str | None = os.environ.get("NUTRITIONIX_APP_ID") or None
        self.nutritionix_app_key: str | None = os.environ.get("NUTRITIONIX_APP_KEY") or None
        self.nutritionix_base_url: str = os.environ.get(
            "NUTRITIONIX_BASE_URL", "https://trackapi.nutritionix.com/v2"
        )
        self.nutritionix_timeout: float = float(os.environ.get("NUTRITIONIX_TIMEOUT") or "10")

        # ---- Food log retention ----
        self.foodlog_retention_days: int = int(os.environ.get("FOODLOG_RETENTION_DAYS") or "1")
        self.foodlog_cleanup_interval_sec: float = float(
            os.environ.get("FOODLOG_CLEANUP_INTERVAL_SEC") or str(24 * 60 * 60)
        )
        self.foodlog_cleanup_initial_delay_sec: float = float(
            os.environ.get("FOODLOG_CLEANUP_INITIAL_DELAY_SEC") or "5"
        )
        self.foodlog_cleanup_enabled: bool = _env_flag("FOODLOG_CLEANUP_ENABLED", "true")

        self.log_level: str = (os.environ.get("HEALTHQUEST_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("HEALTHQUEST_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]

    @property
    def nutritionix_configured(self) -> bool:
        return bool(self.nutritionix_app_id and self.nutritionix_app_key)


settings = Settings()
