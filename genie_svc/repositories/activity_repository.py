"""
Repository for activity log database operations.

Architecture:
    ActivityRepository is the data access layer for activity records.
    It should be injected via core.dependencies.get_activity_repository().

All SQL is encapsulated in this repository - no SQL in service or API layers.
Every read returns records newest first.
"""
import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from repositories.base import Database, upper_bound
from models.activity import ActivityRecord
from core.datetime_utils import to_db_string

logger = logging.getLogger(__name__)

_COLUMNS = "id, user_id, user_name, activity_type, action, details, metadata, timestamp"


class ActivityRepository:
    """
    Repository for activity log operations.

    Activity records are append-only: there is no update or delete.
    """

    def __init__(self, db: Database):
        """
        Initialize the activity repository.

        Args:
            db: Database instance for data access.
                Injected via core.dependencies.get_activity_repository().
        """
        self._db = db

    def add(
        self,
        user_id: str,
        activity_type: str,
        action: str,
        timestamp: datetime,
        details: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        user_name: Optional[str] = None,
    ) -> ActivityRecord:
        """
        Append an activity record and return it as stored.

        Uses a single transaction to insert and read back the row.
        """
        conn = self._db.get_connection()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO activity_logs
                (user_id, user_name, activity_type, action, details, metadata, timestamp)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                user_name,
                activity_type,
                action,
                details,
                json.dumps(metadata) if metadata else None,
                to_db_string(timestamp),
            ))

            cursor.execute(
                f"SELECT {_COLUMNS} FROM activity_logs WHERE id = ?",
                (cursor.lastrowid,)
            )
            row = cursor.fetchone()

            conn.commit()
            return ActivityRecord.from_row(row)
        finally:
            conn.close()

    def query_activity(
        self,
        user_id: str,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> List[ActivityRecord]:
        """
        Get a user's activity records between ``since`` and ``until``.

        Args:
            user_id: Owner of the records.
            since: Inclusive lower bound on the record timestamp.
            until: Inclusive upper bound (no bound when None).

        Returns:
            Records ordered by timestamp descending (possibly empty).
        """
        return self._fetch(
            f"""
            SELECT {_COLUMNS} FROM activity_logs
            WHERE user_id = ? AND timestamp >= ? AND timestamp <= ?
            ORDER BY timestamp DESC, id DESC
            """,
            (user_id, to_db_string(since), upper_bound(until)),
        )

    def query_recent_activity(
        self,
        user_id: str,
        limit: int,
        until: Optional[datetime] = None,
    ) -> List[ActivityRecord]:
        """Get a user's ``limit`` most recent activity records at or before ``until``, newest first."""
        return self._fetch(
            f"""
            SELECT {_COLUMNS} FROM activity_logs
            WHERE user_id = ? AND timestamp <= ?
            ORDER BY timestamp DESC, id DESC
            LIMIT ?
            """,
            (user_id, upper_bound(until), limit),
        )

    def latest_activity(self, user_id: str, until: Optional[datetime] = None) -> Optional[ActivityRecord]:
        """Get a user's most recent activity record at or before ``until``, or None."""
        records = self.query_recent_activity(user_id, limit=1, until=until)
        return records[0] if records else None

    def _fetch(self, query: str, params: tuple) -> List[ActivityRecord]:
        conn = self._db.get_connection()
        try:
            rows = conn.execute(query, params).fetchall()
        finally:
            conn.close()
        return [ActivityRecord.from_row(row) for row in rows]
