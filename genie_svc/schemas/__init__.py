"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.activity import (
    ActivityCreate,
    ActivityResponse,
    ActivityCount,
    DailyActivityCount,
    ActivityStatsResponse,
)
from schemas.medication import (
    MedicationLogCreate,
    MedicationLogResponse,
    MedicationSummaryResponse,
)
from schemas.health_score import HealthScoreResponse

__all__ = [
    # Activity schemas
    "ActivityCreate",
    "ActivityResponse",
    "ActivityCount",
    "DailyActivityCount",
    "ActivityStatsResponse",
    # Medication schemas
    "MedicationLogCreate",
    "MedicationLogResponse",
    "MedicationSummaryResponse",
    # Health score schemas
    "HealthScoreResponse",
]
