"""
Domain models for the health score service.

Log records (activities, medication events) and the ephemeral score result.
"""
from models.activity import ActivityRecord, ActivityType
from models.medication import MedicationEvent, MedicationStatus
from models.health_score import (
    ActivityLevelScore,
    ConsistencyScore,
    FeatureDiversityScore,
    EngagementStreakScore,
    HealthScoreResult,
)

__all__ = [
    "ActivityRecord",
    "ActivityType",
    "MedicationEvent",
    "MedicationStatus",
    "ActivityLevelScore",
    "ConsistencyScore",
    "FeatureDiversityScore",
    "EngagementStreakScore",
    "HealthScoreResult",
]
