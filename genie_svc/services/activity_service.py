"""
Service layer for activity log operations.

Architecture:
    API Layer (routers) → ActivityService → ActivityRepository → Database

Dependency Injection:
    ActivityService receives its repository via constructor injection.
    Use core.dependencies.get_activity_service() in routers with Depends().
"""
import logging
import sqlite3
from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from repositories import ActivityRepository
from schemas import (
    ActivityResponse,
    ActivityCount,
    DailyActivityCount,
    ActivityStatsResponse,
)
from core.exceptions import DatabaseError
from core.datetime_utils import to_utc, utc_day, utc_now, window_start

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Service layer for recording and summarizing user activity.
    """

    def __init__(self, activity_repository: ActivityRepository):
        """
        Initialize the activity service.

        Args:
            activity_repository: ActivityRepository instance for data access.
                Injected via core.dependencies.get_activity_service().
        """
        self._repo = activity_repository

    def log_activity(
        self,
        user_id: str,
        activity_type: str,
        action: str,
        details: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        user_name: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> ActivityResponse:
        """
        Record one user action.

        Args:
            user_id: Resolved identity of the caller.
            activity_type: Tracked feature (validated by the schema layer).
            action: What the user did.
            details: Optional free-form details.
            metadata: Optional feature-specific attributes.
            user_name: Optional display name.
            timestamp: When it happened (defaults to now, normalized to UTC).

        Raises:
            DatabaseError: If the record cannot be stored.
        """
        timestamp = to_utc(timestamp) if timestamp else utc_now()
        try:
            record = self._repo.add(
                user_id=user_id,
                activity_type=activity_type,
                action=action,
                timestamp=timestamp,
                details=details,
                metadata=metadata,
                user_name=user_name,
            )
        except sqlite3.Error as e:
            logger.error(f"Database error logging activity: {e}", exc_info=True)
            raise DatabaseError(operation="log_activity") from e

        logger.info(
            "Activity logged",
            extra={"user_id": user_id, "activity_type": activity_type}
        )
        return ActivityResponse(**record.to_dict())

    def get_user_activities(self, user_id: str, limit: int = 20) -> List[ActivityResponse]:
        """Get the caller's most recent activities, newest first."""
        records = self._repo.query_recent_activity(user_id, limit)
        return [ActivityResponse(**record.to_dict()) for record in records]

    def get_activity_stats(
        self,
        user_id: str,
        days: int = 7,
        now: Optional[datetime] = None,
    ) -> ActivityStatsResponse:
        """
        Summarize the caller's activity over the last ``days`` days.

        Returns:
            Counts per activity type (most frequent first) and a daily
            trend by UTC day (oldest first).
        """
        now = to_utc(now) if now else utc_now()
        records = self._repo.query_activity(user_id, window_start(now, days), until=now)

        by_type = Counter(record.activity_type for record in records)
        by_day = Counter(utc_day(record.timestamp) for record in records)

        return ActivityStatsResponse(
            days=days,
            activity_counts=[
                ActivityCount(activity_type=activity_type, count=count)
                for activity_type, count in by_type.most_common()
            ],
            daily_trend=[
                DailyActivityCount(date=day.isoformat(), count=by_day[day])
                for day in sorted(by_day)
            ],
            total_activities=len(records),
        )
