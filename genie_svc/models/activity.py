"""
Domain model for user activity records.
"""
import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.datetime_utils import format_iso, parse_datetime


class ActivityType(str, Enum):
    """Tracked user actions. Each one feeds the health score."""

    AI_CONSULTATION = "ai_consultation"
    DRUG_INTERACTION = "drug_interaction"
    MEDICINE_SEARCH = "medicine_search"
    MEDICATION_LOG = "medication_log"
    BLOOD_REQUEST = "blood_request"
    SYMPTOM_CHECK = "symptom_check"
    HEALTH_SCORE = "health_score"
    REMINDER = "reminder"
    PROFILE_UPDATE = "profile_update"
    LOGIN = "login"
    REGISTER = "register"


@dataclass(frozen=True)
class ActivityRecord:
    """A single tracked user action. Immutable once created."""

    user_id: str
    activity_type: str
    timestamp: datetime
    action: str = ""
    details: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    user_name: Optional[str] = None
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "user_name": self.user_name,
            "activity_type": self.activity_type,
            "action": self.action,
            "details": self.details,
            "metadata": dict(self.metadata),
            "timestamp": format_iso(self.timestamp),
        }

    @classmethod
    def from_row(cls, row: tuple) -> "ActivityRecord":
        """
        Create an ActivityRecord from a database row.

        Args:
            row: Tuple of (id, user_id, user_name, activity_type, action,
                details, metadata_json, timestamp).
        """
        return cls(
            id=row[0],
            user_id=row[1],
            user_name=row[2],
            activity_type=row[3],
            action=row[4],
            details=row[5],
            metadata=json.loads(row[6]) if row[6] else {},
            timestamp=parse_datetime(row[7]),
        )
