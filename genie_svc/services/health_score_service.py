"""
Service layer for health score computation.

Fetches a user's activity from the log store and hands it to the pure
aggregator in services.scoring. Every call recomputes from scratch; there
is no caching between requests and nothing is written.

Architecture:
    API Layer (routers) → HealthScoreService → ActivityRepository → Database
                                  ↓
                        services.scoring (pure)

Dependency Injection:
    HealthScoreService receives its repository and scoring profile via
    constructor injection. Use core.dependencies.get_health_score_service().
"""
import logging
import sqlite3
from datetime import datetime
from typing import Optional

from repositories import ActivityRepository
from models.health_score import HealthScoreResult
from services.scoring import build_health_score
from core.scoring_profile import ScoringProfile
from core.exceptions import StoreUnavailableError
from core.datetime_utils import to_utc, utc_now, window_start
from core.middleware import get_metrics_collector

logger = logging.getLogger(__name__)


class HealthScoreService:
    """
    Computes the activity-based health score for one user at a time.

    The caller must already have resolved the user's identity; this
    service does not authenticate.
    """

    def __init__(
        self,
        activity_repository: ActivityRepository,
        profile: ScoringProfile,
        window_days: int = 30,
        streak_lookback: int = 90,
    ):
        """
        Initialize the health score service.

        Args:
            activity_repository: Log store for activity records.
            profile: Scoring tunables.
            window_days: Trailing window for activity, consistency and diversity.
            streak_lookback: How many of the most recent records the streak inspects.
        """
        if window_days <= 0:
            raise ValueError(f"window_days must be positive, got {window_days}")
        self._activity_repo = activity_repository
        self._profile = profile
        self._window_days = window_days
        self._streak_lookback = streak_lookback

    def compute_health_score(self, user_id: str, now: Optional[datetime] = None) -> HealthScoreResult:
        """
        Compute the health score for a user.

        Args:
            user_id: Resolved identity of the caller.
            now: Reference time (defaults to the current UTC time). Records
                after ``now`` are ignored, so the same ``now`` gives the same
                result however many records arrive later.

        Returns:
            HealthScoreResult for the user. A user with no activity gets a
            score of 0 with the welcome insights, not an error.

        Raises:
            StoreUnavailableError: If the log store cannot be read. No
                partial score is returned.
        """
        now = to_utc(now) if now else utc_now()
        since = window_start(now, self._window_days)

        try:
            window_records = self._activity_repo.query_activity(user_id, since, until=now)
            streak_records = self._activity_repo.query_recent_activity(user_id, self._streak_lookback, until=now)
            latest = self._activity_repo.latest_activity(user_id, until=now)
        except sqlite3.Error as e:
            logger.error(
                f"Log store read failed while computing health score: {e}",
                extra={"user_id": user_id},
                exc_info=True
            )
            get_metrics_collector().record_score_result(success=False)
            raise StoreUnavailableError(operation="compute_health_score") from e

        result = build_health_score(
            window_records=window_records,
            streak_records=streak_records,
            now=now,
            window_days=self._window_days,
            profile=self._profile,
            last_activity_date=latest.timestamp if latest else None,
        )

        get_metrics_collector().record_score_result(success=True)
        logger.info(
            "Health score computed",
            extra={
                "user_id": user_id,
                "overall_score": result.overall_score,
                "total_activities": result.activity_level.total,
                "has_data": result.has_data,
            }
        )
        return result
