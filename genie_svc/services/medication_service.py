"""
Service layer for medication log operations.

Architecture:
    API Layer (routers) → MedicationService → MedicationRepository → Database

Dependency Injection:
    MedicationService receives its repository and scoring profile via
    constructor injection. Use core.dependencies.get_medication_service().
"""
import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from repositories import MedicationRepository
from schemas import MedicationLogResponse, MedicationSummaryResponse
from models.medication import MedicationStatus
from models.health_score import round_half_up
from services.scoring.adherence import (
    adherence_rate,
    adherence_streak,
    count_statuses,
    timeliness_score,
)
from core.scoring_profile import ScoringProfile
from core.exceptions import DatabaseError, InvalidRecordDataError
from core.datetime_utils import format_iso, to_utc, utc_day, utc_now, window_start

logger = logging.getLogger(__name__)


class MedicationService:
    """
    Service layer for medication intake logging and adherence summaries.
    """

    def __init__(self, medication_repository: MedicationRepository, profile: ScoringProfile):
        """
        Initialize the medication service.

        Args:
            medication_repository: MedicationRepository instance for data access.
            profile: Scoring tunables (adherence cutoff, timeliness bands).
        """
        self._repo = medication_repository
        self._profile = profile

    def log_medication(
        self,
        user_id: str,
        medicine_name: str,
        scheduled_time: datetime,
        status: str,
        taken_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> MedicationLogResponse:
        """
        Record what happened to a scheduled dose.

        Raises:
            InvalidRecordDataError: If a taken time is given for a dose that
                was not taken.
            DatabaseError: If the event cannot be stored.
        """
        if taken_time is not None and status != MedicationStatus.TAKEN.value:
            raise InvalidRecordDataError(
                detail=f"taken_time is only allowed for status 'taken', got '{status}'",
                status=status,
            )

        try:
            event = self._repo.add(
                user_id=user_id,
                medicine_name=medicine_name,
                scheduled_time=to_utc(scheduled_time),
                status=status,
                taken_time=to_utc(taken_time) if taken_time else None,
                notes=notes,
            )
        except sqlite3.Error as e:
            logger.error(f"Database error logging medication: {e}", exc_info=True)
            raise DatabaseError(operation="log_medication") from e

        logger.info(
            "Medication logged",
            extra={"user_id": user_id, "medicine_name": medicine_name, "status": status}
        )
        return MedicationLogResponse(**event.to_dict())

    def get_medication_logs(
        self,
        user_id: str,
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> List[MedicationLogResponse]:
        """Get the caller's medication events scheduled in the last ``days`` days, newest first."""
        now = to_utc(now) if now else utc_now()
        events = self._repo.query_medication_events(user_id, window_start(now, days), until=now)
        return [MedicationLogResponse(**event.to_dict()) for event in events]

    def get_medication_summary(
        self,
        user_id: str,
        days: int = 30,
        now: Optional[datetime] = None,
    ) -> MedicationSummaryResponse:
        """
        Summarize adherence over the last ``days`` days.

        Adherence is taken / (taken + missed); skipped doses are counted
        but do not affect adherence. The adherence streak only looks at
        days inside the window.
        """
        now = to_utc(now) if now else utc_now()
        events = self._repo.query_medication_events(user_id, window_start(now, days), until=now)

        counts = count_statuses(events)

        return MedicationSummaryResponse(
            days=days,
            total_medications=counts.decided,
            taken_medications=counts.taken,
            missed_medications=counts.missed,
            skipped_medications=counts.skipped,
            medication_adherence=round_half_up(adherence_rate(counts)),
            timeliness=round_half_up(timeliness_score(events, self._profile)),
            adherence_streak=adherence_streak(events, utc_day(now), self._profile),
            adherence_streak_threshold=self._profile.adherence_streak_threshold,
            last_log_date=format_iso(events[0].scheduled_time) if events else None,
        )
