"""
Configuration module for the Drug GENIE Health Score Service.
Uses Pydantic BaseSettings for validation - app fails fast if required config is missing.
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.
    Required fields will cause the app to fail fast if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database Configuration
    genie_svc_db_dir: str = Field(default="data", description="Database directory")
    genie_svc_db_file: str = Field(default="drug_genie.db", description="Database filename")
    genie_svc_db_busy_timeout: int = Field(default=5000, description="SQLite busy timeout in milliseconds")

    # API Configuration
    genie_svc_host: str = Field(default="0.0.0.0", description="API host")
    genie_svc_port: int = Field(default=8000, description="API port")
    genie_svc_reload: bool = Field(default=False, description="Enable hot reload")

    # Health Score Configuration
    genie_svc_score_window_days: int = Field(
        default=30,
        gt=0,
        description="Trailing window in days used by the activity, consistency and diversity metrics",
    )
    genie_svc_streak_lookback: int = Field(
        default=90,
        gt=0,
        description="Number of most recent activity records inspected for the engagement streak",
    )
    genie_svc_scoring_profile: Optional[str] = Field(
        default=None,
        description="Path to a scoring profile YAML file (defaults to core/scoring.yaml)",
    )

    # API Authentication Configuration
    genie_svc_api_key: str = Field(
        ...,  # Required - no default means fail fast if missing
        description="API key for authenticating requests to the Health Score Service",
        min_length=32,  # Enforce minimum key length for security
    )

    @model_validator(mode="after")
    def validate_scoring_profile(self) -> "Settings":
        """Warn early when a custom scoring profile path does not exist."""
        if self.genie_svc_scoring_profile and not Path(self.genie_svc_scoring_profile).is_file():
            logger.warning(
                "GENIE_SVC_SCORING_PROFILE points to a missing file - the service will fail on first score",
                extra={"path": self.genie_svc_scoring_profile},
            )
        return self

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.genie_svc_db_dir) / self.genie_svc_db_file)

    def ensure_directories(self) -> None:
        """Ensure required directories exist."""
        Path(self.genie_svc_db_dir).mkdir(parents=True, exist_ok=True)


# Create global settings instance - fails fast if required config is missing
settings = Settings()

# Ensure directories exist on import
settings.ensure_directories()

DATABASE_DIR = settings.genie_svc_db_dir
DATABASE_FILE = settings.genie_svc_db_file
DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.genie_svc_db_busy_timeout

API_HOST = settings.genie_svc_host
API_PORT = settings.genie_svc_port
API_RELOAD = settings.genie_svc_reload

SCORE_WINDOW_DAYS = settings.genie_svc_score_window_days
STREAK_LOOKBACK = settings.genie_svc_streak_lookback
SCORING_PROFILE_PATH = settings.genie_svc_scoring_profile

API_KEY = settings.genie_svc_api_key
