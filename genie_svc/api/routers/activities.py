"""
Activities router - activity log endpoints.

The frontend logs every feature interaction here; these records are the
input to the health score. All endpoints require API key authentication
and act on the user named in the X-User-ID header.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from schemas import ActivityCreate, ActivityResponse, ActivityStatsResponse
from services import ActivityService
from core.auth import verify_api_key, get_current_user_id
from core.dependencies import get_activity_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/activities",
    tags=["Activities"],
    dependencies=[Depends(verify_api_key)],
)

DEFAULT_QUERY_LIMIT = 20
MAX_QUERY_LIMIT = 100
DEFAULT_STATS_DAYS = 7
MAX_STATS_DAYS = 365


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "",
    response_model=ActivityResponse,
    status_code=201,
    summary="Log an activity",
    description="Record one interaction of the calling user with a tracked feature."
)
async def log_activity(
    activity: ActivityCreate,
    user_id: str = Depends(get_current_user_id),
    activity_service: ActivityService = Depends(get_activity_service)
):
    """
    Log a user activity.

    - **activity_type**: One of the tracked features (e.g. 'ai_consultation', 'login')
    - **action**: What the user did
    - **details**: Optional free-form details
    - **metadata**: Optional feature-specific attributes

    The timestamp is set by the server.

    Raises:
    - 401 Unauthorized: If the X-User-ID header is missing
    - 422 Unprocessable Entity: If the activity type is not tracked
    - 500 Internal Server Error: For database errors (DatabaseError)
    """
    return activity_service.log_activity(
        user_id=user_id,
        activity_type=activity.activity_type.value,
        action=activity.action,
        details=activity.details,
        metadata=activity.metadata,
        user_name=activity.user_name,
    )


@router.get(
    "",
    response_model=List[ActivityResponse],
    summary="List recent activities",
    description="Get the calling user's most recent activities, newest first."
)
async def list_activities(
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=1, le=MAX_QUERY_LIMIT, description="Maximum number of activities"),
    user_id: str = Depends(get_current_user_id),
    activity_service: ActivityService = Depends(get_activity_service)
):
    """List the calling user's recent activities."""
    return activity_service.get_user_activities(user_id, limit=limit)


@router.get(
    "/stats",
    response_model=ActivityStatsResponse,
    summary="Activity statistics",
    description="Counts by activity type and a daily trend over a trailing window."
)
async def activity_stats(
    days: int = Query(DEFAULT_STATS_DAYS, ge=1, le=MAX_STATS_DAYS, description="Window length in days"),
    user_id: str = Depends(get_current_user_id),
    activity_service: ActivityService = Depends(get_activity_service)
):
    """
    Get activity statistics for the calling user.

    Returns counts per activity type (most frequent first) and the number
    of activities per UTC day (oldest first).
    """
    return activity_service.get_activity_stats(user_id, days=days)
