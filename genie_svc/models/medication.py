"""
Domain model for medication intake events.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.datetime_utils import format_iso, from_db_string, parse_datetime


class MedicationStatus(str, Enum):
    """Outcome of a scheduled dose."""

    TAKEN = "taken"
    MISSED = "missed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class MedicationEvent:
    """A scheduled dose and what happened to it. Immutable once created."""

    user_id: str
    medicine_name: str
    scheduled_time: datetime
    status: str
    taken_time: Optional[datetime] = None
    notes: Optional[str] = None
    id: Optional[int] = None

    @property
    def minutes_off_schedule(self) -> Optional[float]:
        """Absolute minutes between scheduled and taken time, if taken_time is known."""
        if self.taken_time is None:
            return None
        return abs((self.taken_time - self.scheduled_time).total_seconds()) / 60

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "medicine_name": self.medicine_name,
            "scheduled_time": format_iso(self.scheduled_time),
            "taken_time": format_iso(self.taken_time) if self.taken_time else None,
            "status": self.status,
            "notes": self.notes,
        }

    @classmethod
    def from_row(cls, row: tuple) -> "MedicationEvent":
        """
        Create a MedicationEvent from a database row.

        Args:
            row: Tuple of (id, user_id, medicine_name, scheduled_time,
                taken_time, status, notes).
        """
        return cls(
            id=row[0],
            user_id=row[1],
            medicine_name=row[2],
            scheduled_time=parse_datetime(row[3]),
            taken_time=from_db_string(row[4]),
            status=row[5],
            notes=row[6],
        )
