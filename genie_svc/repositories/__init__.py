"""
Repository layer for the log store.

This module contains all database access operations, encapsulating SQL and data persistence logic.
"""
from repositories.base import Database
from repositories.activity_repository import ActivityRepository
from repositories.medication_repository import MedicationRepository

__all__ = [
    "Database",
    "ActivityRepository",
    "MedicationRepository",
]
