"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
import logging
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="EMERGEWISE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "EmergeWise Disaster Response API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")
    scoring_tables_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON file overriding the built-in scoring tables (regional calibration).",
    )
    missing_metric_policy: Literal["best_case", "worst_case"] = Field(
        default="best_case",
        description="How routes with unknown distance/time are ordered in preference sorts.",
    )
    fallback_speed_kmh: float = Field(default=50.0, gt=0.0)
    osrm_base_url: Optional[str] = Field(
        default=None,
        description="Base URL for the OSRM routing service (e.g., https://router.project-osrm.org).",
    )
    osrm_profiles: tuple[str, ...] = Field(
        default=("driving", "walking"),
        description="OSRM profiles queried when planning a point-to-point evacuation route.",
    )
    osrm_timeout_seconds: float = Field(default=10.0, gt=0.0)
    osrm_max_retries: int = Field(default=2, ge=0)
    osrm_backoff_seconds: float = Field(default=0.5, ge=0.0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    # Background jobs
    enable_jobs: bool = False
    stale_alert_interval_seconds: int = Field(default=300, ge=1)
    stale_alert_age_minutes: int = Field(default=60, ge=1)
    capacity_check_interval_seconds: int = Field(default=900, ge=1)
    capacity_warning_ratio: float = Field(default=0.9, gt=0.0)
    daily_stats_interval_seconds: int = Field(default=86400, ge=1)

    @field_validator("scoring_tables_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path | None:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "osrm_profiles", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once for the API process and the job runner."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
