"""
Core module for application configuration, logging, and shared constants.

This module provides:
- Settings: Application configuration via pydantic-settings
- Dependency injection: FastAPI Depends() functions for services and repositories
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: UTC-first datetime handling
- Scoring profile: Weights and lookup tables for the health score
"""
from core.config import settings, Settings

# Dependency injection - import functions for FastAPI Depends()
from core.dependencies import (
    get_database,
    get_activity_repository,
    get_medication_repository,
    get_activity_service,
    get_medication_service,
    get_health_score_service,
    reset_database,
)

# Exception classes for consistent error handling
from core.exceptions import (
    GenieServiceError,
    PreconditionError,
    InvalidRecordDataError,
    DatabaseError,
    StoreUnavailableError,
    setup_exception_handlers,
)

# UTC datetime utilities
from core.datetime_utils import (
    utc_now,
    to_utc,
    utc_day,
    window_start,
    days_between,
    parse_datetime,
    format_iso,
    to_db_string,
    from_db_string,
)
from core.config import (
    DATABASE_DIR,
    DATABASE_FILE,
    DATABASE_PATH,
    API_HOST,
    API_PORT,
    API_RELOAD,
    SCORE_WINDOW_DAYS,
    STREAK_LOOKBACK,
    SCORING_PROFILE_PATH,
)

from core.scoring_profile import (
    ScoringProfile,
    WEIGHT_KEYS,
    parse_scoring_profile,
    load_scoring_profile,
    get_scoring_profile,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Dependency injection
    "get_database",
    "get_activity_repository",
    "get_medication_repository",
    "get_activity_service",
    "get_medication_service",
    "get_health_score_service",
    "reset_database",
    # Exceptions
    "GenieServiceError",
    "PreconditionError",
    "InvalidRecordDataError",
    "DatabaseError",
    "StoreUnavailableError",
    "setup_exception_handlers",
    # Datetime utilities
    "utc_now",
    "to_utc",
    "utc_day",
    "window_start",
    "days_between",
    "parse_datetime",
    "format_iso",
    "to_db_string",
    "from_db_string",
    # Config exports
    "DATABASE_DIR",
    "DATABASE_FILE",
    "DATABASE_PATH",
    "API_HOST",
    "API_PORT",
    "API_RELOAD",
    "SCORE_WINDOW_DAYS",
    "STREAK_LOOKBACK",
    "SCORING_PROFILE_PATH",
    # Scoring profile
    "ScoringProfile",
    "WEIGHT_KEYS",
    "parse_scoring_profile",
    "load_scoring_profile",
    "get_scoring_profile",
]
