"""
Service layer for business logic.

This module contains all business logic and orchestration services.
The pure scoring functions live in the services.scoring package.
"""
from services.activity_service import ActivityService
from services.medication_service import MedicationService
from services.health_score_service import HealthScoreService

__all__ = [
    "ActivityService",
    "MedicationService",
    "HealthScoreService",
]
