"""
Pydantic schemas for medication log API operations.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.medication import MedicationStatus


class MedicationLogCreate(BaseModel):
    """Schema for logging what happened to a scheduled dose."""
    medicine_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Name of the medicine",
        examples=["Metformin"]
    )
    scheduled_time: datetime = Field(
        ...,
        description="ISO format datetime the dose was scheduled for",
        examples=["2025-01-01T08:00:00Z"]
    )
    status: MedicationStatus = Field(..., description="taken, missed or skipped", examples=["taken"])
    taken_time: Optional[datetime] = Field(
        None,
        description="When the dose was actually taken (only for status 'taken')",
        examples=["2025-01-01T08:20:00Z"]
    )
    notes: Optional[str] = Field(None, max_length=2000)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "medicine_name": "Metformin",
                "scheduled_time": "2025-01-01T08:00:00Z",
                "status": "taken",
                "taken_time": "2025-01-01T08:20:00Z"
            }
        }
    )


class MedicationLogResponse(BaseModel):
    """Schema for a stored medication event."""
    id: int
    user_id: str
    medicine_name: str
    scheduled_time: str = Field(..., description="ISO 8601 UTC timestamp")
    taken_time: Optional[str] = Field(None, description="ISO 8601 UTC timestamp")
    status: str
    notes: Optional[str] = None


class MedicationSummaryResponse(BaseModel):
    """Adherence summary over a trailing window of medication events."""
    days: int = Field(..., description="Window length in days", examples=[30])
    total_medications: int = Field(..., description="Taken plus missed doses")
    taken_medications: int
    missed_medications: int
    skipped_medications: int
    medication_adherence: int = Field(..., ge=0, le=100, description="Taken / (taken + missed), percent")
    timeliness: int = Field(..., ge=0, le=100, description="Average on-time score of taken doses")
    adherence_streak: int = Field(..., ge=0, description="Consecutive adherent days ending today")
    adherence_streak_threshold: float = Field(..., description="Daily taken fraction a streak day needs")
    last_log_date: Optional[str] = Field(None, description="Scheduled time of the newest event in the window")
