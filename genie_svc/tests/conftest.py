"""
Shared pytest fixtures for the Health Score Service tests.

Key patterns:

1. Database Isolation: Each test gets a fresh temporary database
2. DI Override: Use app.dependency_overrides to inject test dependencies
3. Service Injection: Services are created with test repositories

Fixture Hierarchy:
    temp_db → repositories → services → test_app → client
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from fastapi import FastAPI

# Set test API key before importing config modules
# This must happen before any config imports
TEST_API_KEY = "test-api-key-for-testing-purposes-12345678"
os.environ.setdefault("GENIE_SVC_API_KEY", TEST_API_KEY)

from repositories.base import Database
from repositories import ActivityRepository, MedicationRepository
from services import ActivityService, MedicationService, HealthScoreService
from models.activity import ActivityRecord
from core.exceptions import setup_exception_handlers
from core.scoring_profile import load_scoring_profile
from core import dependencies as deps
from core.auth import verify_api_key

TEST_USER_ID = "user-123"

# Fixed reference time for pure scoring tests
NOW = datetime(2025, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_db():
    """
    Create a temporary database for testing.

    This fixture creates a fresh SQLite database in a temp file,
    ensuring complete isolation between tests.
    """
    fd, db_path = tempfile.mkstemp(suffix='.db')
    os.close(fd)

    db = Database(db_path=db_path)
    yield db

    # Cleanup (WAL mode leaves -wal/-shm files next to the database)
    for path in (db_path, f"{db_path}-wal", f"{db_path}-shm"):
        if os.path.exists(path):
            os.unlink(path)


@pytest.fixture
def profile():
    """The bundled scoring profile."""
    return load_scoring_profile()


@pytest.fixture
def activity_repo(temp_db):
    """Create an ActivityRepository with the test database."""
    return ActivityRepository(db=temp_db)


@pytest.fixture
def medication_repo(temp_db):
    """Create a MedicationRepository with the test database."""
    return MedicationRepository(db=temp_db)


@pytest.fixture
def activity_service(activity_repo):
    """Create an ActivityService with the test repository."""
    return ActivityService(activity_repository=activity_repo)


@pytest.fixture
def medication_service(medication_repo, profile):
    """Create a MedicationService with the test repository."""
    return MedicationService(medication_repository=medication_repo, profile=profile)


@pytest.fixture
def health_score_service(activity_repo, profile):
    """Create a HealthScoreService with the test repository and default window."""
    return HealthScoreService(activity_repository=activity_repo, profile=profile)


@pytest.fixture
def make_record():
    """
    Factory for in-memory activity records.

    ``days_ago`` counts back from NOW; records default to mid-morning UTC.
    """
    def _make(activity_type="login", days_ago=0, hour=9, user_id=TEST_USER_ID):
        timestamp = (NOW - timedelta(days=days_ago)).replace(hour=hour, minute=0, second=0)
        return ActivityRecord(
            user_id=user_id,
            activity_type=activity_type,
            timestamp=timestamp,
            action=f"{activity_type} action",
        )
    return _make


@pytest.fixture
def seed_activity(activity_repo):
    """
    Factory that stores activity relative to the current time.

    API tests go through the real clock, so stored timestamps are offsets
    from now rather than from NOW.
    """
    def _seed(activity_type="login", days_ago=0, user_id=TEST_USER_ID, count=1):
        now = datetime.now(timezone.utc)
        for _ in range(count):
            activity_repo.add(
                user_id=user_id,
                activity_type=activity_type,
                action=f"{activity_type} action",
                timestamp=now - timedelta(days=days_ago),
            )
    return _seed


@pytest.fixture
def test_app(temp_db, activity_repo, medication_repo, activity_service, medication_service, health_score_service):
    """
    Create a FastAPI test app with dependency overrides.

    - Uses the real routers (testing actual endpoint code)
    - Injects test database and services via dependency_overrides
    - Registers exception handlers for proper error response testing
    """
    from api.routers import health_router, health_score_router, activities_router, medications_router

    app = FastAPI(title="Drug GENIE Health Score API Test")

    # Register exception handlers (same as production)
    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_database] = lambda: temp_db
    app.dependency_overrides[deps.get_activity_repository] = lambda: activity_repo
    app.dependency_overrides[deps.get_medication_repository] = lambda: medication_repo
    app.dependency_overrides[deps.get_activity_service] = lambda: activity_service
    app.dependency_overrides[deps.get_medication_service] = lambda: medication_service
    app.dependency_overrides[deps.get_health_score_service] = lambda: health_score_service

    # Override auth to skip API key verification in tests
    # X-User-ID is still required: identity is part of what is under test
    async def skip_auth():
        return TEST_API_KEY
    app.dependency_overrides[verify_api_key] = skip_auth

    app.include_router(health_router)
    app.include_router(health_score_router)
    app.include_router(activities_router)
    app.include_router(medications_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)


@pytest.fixture
def user_headers():
    """Headers identifying the test user."""
    return {"X-User-ID": TEST_USER_ID}


@pytest.fixture
def now():
    """Fixed reference time matching make_record."""
    return NOW
