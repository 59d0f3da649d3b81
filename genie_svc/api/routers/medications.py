"""
Medications router - medication intake log endpoints.

Records what happened to each scheduled dose and summarizes adherence.
All endpoints require API key authentication and act on the user named
in the X-User-ID header.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from schemas import MedicationLogCreate, MedicationLogResponse, MedicationSummaryResponse
from services import MedicationService
from core.auth import verify_api_key, get_current_user_id
from core.dependencies import get_medication_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/medications",
    tags=["Medications"],
    dependencies=[Depends(verify_api_key)],
)

DEFAULT_WINDOW_DAYS = 30
MAX_WINDOW_DAYS = 365


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "",
    response_model=MedicationLogResponse,
    status_code=201,
    summary="Log a medication event",
    description="Record whether a scheduled dose was taken, missed or skipped."
)
async def log_medication(
    event: MedicationLogCreate,
    user_id: str = Depends(get_current_user_id),
    medication_service: MedicationService = Depends(get_medication_service)
):
    """
    Log a medication event.

    - **medicine_name**: Name of the medicine
    - **scheduled_time**: When the dose was due
    - **status**: 'taken', 'missed' or 'skipped'
    - **taken_time**: When it was actually taken (status 'taken' only)

    Raises:
    - 400 Bad Request: If taken_time is given for a dose that was not taken (InvalidRecordDataError)
    - 401 Unauthorized: If the X-User-ID header is missing
    - 500 Internal Server Error: For database errors (DatabaseError)
    """
    return medication_service.log_medication(
        user_id=user_id,
        medicine_name=event.medicine_name,
        scheduled_time=event.scheduled_time,
        status=event.status.value,
        taken_time=event.taken_time,
        notes=event.notes,
    )


@router.get(
    "",
    response_model=List[MedicationLogResponse],
    summary="List medication events",
    description="Get the calling user's medication events scheduled within a trailing window, newest first."
)
async def list_medications(
    days: int = Query(DEFAULT_WINDOW_DAYS, ge=1, le=MAX_WINDOW_DAYS, description="Window length in days"),
    user_id: str = Depends(get_current_user_id),
    medication_service: MedicationService = Depends(get_medication_service)
):
    """List the calling user's medication events."""
    return medication_service.get_medication_logs(user_id, days=days)


@router.get(
    "/summary",
    response_model=MedicationSummaryResponse,
    summary="Medication adherence summary",
    description="Adherence rate, timeliness and adherence streak over a trailing window."
)
async def medication_summary(
    days: int = Query(DEFAULT_WINDOW_DAYS, ge=1, le=MAX_WINDOW_DAYS, description="Window length in days"),
    user_id: str = Depends(get_current_user_id),
    medication_service: MedicationService = Depends(get_medication_service)
):
    """
    Get the adherence summary for the calling user.

    Adherence counts taken against taken + missed doses; skipped doses
    are reported but do not lower the rate.
    """
    return medication_service.get_medication_summary(user_id, days=days)
