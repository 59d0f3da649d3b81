"""
Pydantic schema for the health score API response.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.datetime_utils import format_iso
from models.health_score import HealthScoreResult, round_half_up


class HealthScoreResponse(BaseModel):
    """Schema for the computed health score.

    Sub-scores are rounded to whole points for display; the overall score
    is computed from the unrounded values.
    """
    overall_score: int = Field(..., ge=0, le=100, description="Weighted overall health score", examples=[52])
    activity_level: int = Field(..., ge=0, le=100, description="Activity level sub-score (40%)")
    logging_consistency: int = Field(..., ge=0, le=100, description="Logging consistency sub-score (30%)")
    feature_diversity: int = Field(..., ge=0, le=100, description="Feature diversity sub-score (20%)")
    engagement_streak: int = Field(..., ge=0, description="Consecutive active days ending today (10%)")
    total_activities: int = Field(..., ge=0, description="Activities in the scoring window")
    active_days: int = Field(..., ge=0, description="Distinct active UTC days in the window")
    features_used: List[str] = Field(..., description="Distinct features, most recent first")
    insights: List[str]
    recommendations: List[str]
    last_activity_date: Optional[str] = Field(None, description="ISO 8601 UTC timestamp of the newest activity")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "overall_score": 52,
                "activity_level": 60,
                "logging_consistency": 33,
                "feature_diversity": 70,
                "engagement_streak": 4,
                "total_activities": 20,
                "active_days": 10,
                "features_used": ["ai_consultation", "medicine_search", "login"],
                "insights": ["Good activity level, keep it up!", "You're on a 4-day streak!"],
                "recommendations": ["Build a daily habit by checking in regularly"],
                "last_activity_date": "2025-01-10T09:15:00Z"
            }
        }
    )

    @classmethod
    def from_result(cls, result: HealthScoreResult) -> "HealthScoreResponse":
        """Serialize a HealthScoreResult."""
        return cls(
            overall_score=result.overall_score,
            activity_level=round_half_up(result.activity_level.score),
            logging_consistency=round_half_up(result.consistency.score),
            feature_diversity=round_half_up(result.diversity.score),
            engagement_streak=result.streak.days,
            total_activities=result.activity_level.total,
            active_days=result.consistency.active_days,
            features_used=list(result.diversity.features),
            insights=list(result.insights),
            recommendations=list(result.recommendations),
            last_activity_date=format_iso(result.last_activity_date) if result.last_activity_date else None,
        )
