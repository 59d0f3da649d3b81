"""
Health score router.

Computes the caller's activity-based health score on every request.
Requires API key authentication and the X-User-ID identity header.

Architecture:
    HTTP Request → Router (this file) → HealthScoreService → ActivityRepository → Database
"""
import logging

from fastapi import APIRouter, Depends

from schemas import HealthScoreResponse
from services import HealthScoreService
from core.auth import verify_api_key, get_current_user_id
from core.dependencies import get_health_score_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1",
    tags=["Health Score"],
    dependencies=[Depends(verify_api_key)],
)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.get(
    "/health-score",
    response_model=HealthScoreResponse,
    summary="Get health score",
    description="Compute the caller's health score (0-100) from their activity over the last 30 days, "
                "with the four sub-scores, insights and recommendations."
)
async def get_health_score(
    user_id: str = Depends(get_current_user_id),
    service: HealthScoreService = Depends(get_health_score_service)
):
    """
    Get the health score for the calling user.

    The overall score weighs activity level (40%), logging consistency
    (30%), feature diversity (20%) and engagement streak (10%). Users with
    no recent activity get a score of 0 with getting-started guidance.

    Raises:
    - 401 Unauthorized: If the X-User-ID header is missing (PreconditionError)
    - 503 Service Unavailable: If the activity log cannot be read (StoreUnavailableError)
    """
    result = service.compute_health_score(user_id)
    return HealthScoreResponse.from_result(result)
