"""
Scoring package for the activity-based health score.

This package contains:
- extractors: the four sub-score metrics (activity, consistency, diversity, streak)
- aggregator: weighted combination into one overall score
- insights: threshold-driven insights and recommendations
- adherence: medication adherence metrics for the medication summary

Usage:
    from services.scoring import build_health_score

    result = build_health_score(window_records, streak_records, now, 30, profile)
"""

from services.scoring.aggregator import build_health_score, weighted_overall
from services.scoring.extractors import (
    activity_level,
    engagement_streak,
    feature_diversity,
    logging_consistency,
)
from services.scoring.insights import generate_insights

__all__ = [
    "build_health_score",
    "weighted_overall",
    "activity_level",
    "engagement_streak",
    "feature_diversity",
    "logging_consistency",
    "generate_insights",
]
