"""
FastAPI Dependency Injection configuration for the Health Score Service.

This module wires the Service and Repository layers together so routers
only ever ask for a service:

    API Layer (Routers)
         ↓ Depends()
    Service Layer (ActivityService, MedicationService, HealthScoreService)
         ↓ Injected
    Repository Layer (ActivityRepository, MedicationRepository)
         ↓ Injected
    Database (SQLite Connection)

Usage in Routers:
    from core.dependencies import get_health_score_service

    @router.get("/health-score")
    async def get_health_score(
        service: HealthScoreService = Depends(get_health_score_service)
    ):
        return service.compute_health_score(...)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_database] = lambda: test_database
"""
import logging
from typing import Optional

from core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# DATABASE DEPENDENCY
# =============================================================================

# The Database class is imported when first needed
_database_instance: Optional["Database"] = None


def get_database() -> "Database":
    """
    Get the database instance (created once, then reused).

    Returns:
        Database: The configured database instance.

    Note:
        Import here to avoid circular imports with repositories.
    """
    global _database_instance

    if _database_instance is None:
        from repositories.base import Database

        logger.info(f"Initializing database: {settings.database_path}")
        _database_instance = Database(
            db_path=settings.database_path,
            busy_timeout=settings.genie_svc_db_busy_timeout
        )
        logger.info("Database initialized successfully")

    return _database_instance


def reset_database() -> None:
    """
    Reset the database instance (for testing only).
    """
    global _database_instance
    _database_instance = None


# =============================================================================
# REPOSITORY DEPENDENCIES
# =============================================================================

def get_activity_repository() -> "ActivityRepository":
    """
    Get an ActivityRepository instance with database injected.

    Returns:
        ActivityRepository: Log store for activity records.
    """
    from repositories import ActivityRepository

    db = get_database()
    return ActivityRepository(db=db)


def get_medication_repository() -> "MedicationRepository":
    """Get a MedicationRepository instance with database injected."""
    from repositories import MedicationRepository

    db = get_database()
    return MedicationRepository(db=db)


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_activity_service() -> "ActivityService":
    """
    Get an ActivityService instance with repository injected.

    Returns:
        ActivityService: Service for activity logging and stats.
    """
    from services import ActivityService

    return ActivityService(activity_repository=get_activity_repository())


def get_medication_service() -> "MedicationService":
    """
    Get a MedicationService instance with repository and scoring profile injected.

    Returns:
        MedicationService: Service for medication logging and adherence summaries.
    """
    from services import MedicationService
    from core.scoring_profile import get_scoring_profile

    return MedicationService(
        medication_repository=get_medication_repository(),
        profile=get_scoring_profile()
    )


def get_health_score_service() -> "HealthScoreService":
    """
    Get a HealthScoreService instance.

    The scoring window, streak lookback and scoring profile come from
    settings, so every request in a process scores with the same tunables.

    Returns:
        HealthScoreService: Service for computing health scores.
    """
    from services import HealthScoreService
    from core.scoring_profile import get_scoring_profile

    return HealthScoreService(
        activity_repository=get_activity_repository(),
        profile=get_scoring_profile(),
        window_days=settings.genie_svc_score_window_days,
        streak_lookback=settings.genie_svc_streak_lookback
    )


# =============================================================================
# DEPENDENCY OVERRIDE HELPERS (FOR TESTING)
# =============================================================================

class DependencyOverrides:
    """
    Context manager for temporarily overriding dependencies in tests.

    Usage:
        with DependencyOverrides(app) as overrides:
            overrides.set(get_database, mock_database)
            # Run tests with overridden dependency
        # Dependencies restored after context exits
    """

    def __init__(self, app):
        self.app = app
        self._original_overrides = {}

    def __enter__(self):
        self._original_overrides = self.app.dependency_overrides.copy()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.app.dependency_overrides = self._original_overrides

    def set(self, dependency, override):
        """Set a dependency override."""
        self.app.dependency_overrides[dependency] = override

    def clear(self):
        """Clear all overrides."""
        self.app.dependency_overrides = self._original_overrides.copy()
