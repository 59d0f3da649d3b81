"""
Repository for medication log database operations.

Architecture:
    MedicationRepository is the data access layer for medication events.
    It should be injected via core.dependencies.get_medication_repository().

All SQL is encapsulated in this repository - no SQL in service or API layers.
"""
import logging
from datetime import datetime
from typing import List, Optional

from repositories.base import Database, upper_bound
from models.medication import MedicationEvent
from core.datetime_utils import to_db_string

logger = logging.getLogger(__name__)

_COLUMNS = "id, user_id, medicine_name, scheduled_time, taken_time, status, notes"


class MedicationRepository:
    """Repository for append-only medication event storage."""

    def __init__(self, db: Database):
        """
        Initialize the medication repository.

        Args:
            db: Database instance for data access.
                Injected via core.dependencies.get_medication_repository().
        """
        self._db = db

    def add(
        self,
        user_id: str,
        medicine_name: str,
        scheduled_time: datetime,
        status: str,
        taken_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> MedicationEvent:
        """Append a medication event and return it as stored."""
        conn = self._db.get_connection()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                INSERT INTO medication_logs
                (user_id, medicine_name, scheduled_time, taken_time, status, notes)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                medicine_name,
                to_db_string(scheduled_time),
                to_db_string(taken_time) if taken_time else None,
                status,
                notes,
            ))

            cursor.execute(
                f"SELECT {_COLUMNS} FROM medication_logs WHERE id = ?",
                (cursor.lastrowid,)
            )
            row = cursor.fetchone()

            conn.commit()
            return MedicationEvent.from_row(row)
        finally:
            conn.close()

    def query_medication_events(
        self,
        user_id: str,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> List[MedicationEvent]:
        """
        Get a user's medication events scheduled between ``since`` and ``until`` (inclusive).

        Returns:
            Events ordered by scheduled time descending (possibly empty).
        """
        conn = self._db.get_connection()
        try:
            rows = conn.execute(
                f"""
                SELECT {_COLUMNS} FROM medication_logs
                WHERE user_id = ? AND scheduled_time >= ? AND scheduled_time <= ?
                ORDER BY scheduled_time DESC, id DESC
                """,
                (user_id, to_db_string(since), upper_bound(until)),
            ).fetchall()
        finally:
            conn.close()
        return [MedicationEvent.from_row(row) for row in rows]
