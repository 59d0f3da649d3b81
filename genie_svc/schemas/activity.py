"""
Pydantic schemas for activity log API operations.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.activity import ActivityType


class ActivityCreate(BaseModel):
    """Schema for logging a user activity.

    The activity type must be one of the tracked features; the caller's
    identity comes from the X-User-ID header, not the body.
    """
    activity_type: ActivityType = Field(
        ...,
        description="Tracked feature the user interacted with",
        examples=["ai_consultation"]
    )
    action: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Short description of what the user did",
        examples=["Asked about ibuprofen dosage"]
    )
    details: Optional[str] = Field(None, max_length=2000, description="Free-form details")
    metadata: Optional[Dict[str, Any]] = Field(
        None,
        description="Feature-specific attributes (medicine name, blood group, ...)",
        examples=[{"medicineName": "Ibuprofen"}]
    )
    user_name: Optional[str] = Field(None, max_length=200, description="Display name of the user")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "activity_type": "drug_interaction",
                "action": "Checked interactions",
                "metadata": {"interactionCount": 2}
            }
        }
    )


class ActivityResponse(BaseModel):
    """Schema for a stored activity record."""
    id: int = Field(..., description="Record identifier", examples=[1])
    user_id: str = Field(..., description="Owner of the record", examples=["u-42"])
    user_name: Optional[str] = Field(None, description="Display name of the user")
    activity_type: str = Field(..., description="Tracked feature", examples=["login"])
    action: str = Field(..., description="What the user did", examples=["Signed in"])
    details: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(..., description="ISO 8601 UTC timestamp", examples=["2025-01-01T10:00:00Z"])


class ActivityCount(BaseModel):
    """Number of activities of one type."""
    activity_type: str
    count: int


class DailyActivityCount(BaseModel):
    """Number of activities on one UTC day."""
    date: str = Field(..., description="UTC calendar day (YYYY-MM-DD)", examples=["2025-01-01"])
    count: int


class ActivityStatsResponse(BaseModel):
    """Activity counts by type and daily trend for a trailing window."""
    days: int = Field(..., description="Window length in days", examples=[7])
    activity_counts: List[ActivityCount]
    daily_trend: List[DailyActivityCount]
    total_activities: int
