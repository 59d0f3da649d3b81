"""
Score aggregator for the activity-based health score.

Combines the four extractor sub-scores with the profile weights:

    overall = round(0.40 * activity + 0.30 * consistency
                    + 0.20 * diversity + 0.10 * streak)

clamped to [0, 100]. Rounding is half-up so a weighted sum of 52.5
becomes 53, not the banker's 52.

The aggregator is pure: the caller fetches records and passes them in
together with ``now``, so the same inputs always give the same result.
"""

import logging
from datetime import datetime
from typing import Optional, Sequence

from core.datetime_utils import utc_day
from core.scoring_profile import ScoringProfile
from models.activity import ActivityRecord
from models.health_score import HealthScoreResult, round_half_up
from services.scoring.extractors import (
    activity_level,
    engagement_streak,
    feature_diversity,
    logging_consistency,
)
from services.scoring.insights import (
    WELCOME_INSIGHTS,
    WELCOME_RECOMMENDATIONS,
    generate_insights,
)

logger = logging.getLogger(__name__)


def clamp_score(value: int) -> int:
    return max(0, min(100, value))


def weighted_overall(
    activity: float,
    consistency: float,
    diversity: float,
    streak: float,
    profile: ScoringProfile,
) -> int:
    """Weighted, rounded and clamped overall score."""
    weights = profile.weights
    total = (
        activity * weights["activity"]
        + consistency * weights["consistency"]
        + diversity * weights["diversity"]
        + streak * weights["streak"]
    )
    return clamp_score(round_half_up(total))


def build_health_score(
    window_records: Sequence[ActivityRecord],
    streak_records: Sequence[ActivityRecord],
    now: datetime,
    window_days: int,
    profile: ScoringProfile,
    last_activity_date: Optional[datetime] = None,
) -> HealthScoreResult:
    """
    Compute a HealthScoreResult from already-fetched records.

    Args:
        window_records: Activity within the trailing ``window_days`` window.
        streak_records: The most recent activity records (bounded lookback),
            independent of the window.
        now: Reference time; "today" is its UTC calendar day.
        window_days: Window length used for the consistency ratio.
        profile: Scoring tunables.
        last_activity_date: Timestamp of the user's newest activity, if any.

    Returns:
        HealthScoreResult. Users with no activity in the window get the
        fixed welcome insights and recommendations.
    """
    activity = activity_level(window_records, profile)
    consistency = logging_consistency(window_records, window_days)
    diversity = feature_diversity(window_records, profile)
    streak = engagement_streak(streak_records, utc_day(now), profile)

    overall = weighted_overall(
        activity.score,
        consistency.score,
        diversity.score,
        streak.score,
        profile,
    )

    if activity.total == 0:
        insights, recommendations = WELCOME_INSIGHTS, WELCOME_RECOMMENDATIONS
    else:
        insights, recommendations = generate_insights(activity, consistency, diversity, streak)

    logger.debug(
        "Health score aggregated",
        extra={
            "overall_score": overall,
            "activity": round(activity.score, 2),
            "consistency": round(consistency.score, 2),
            "diversity": diversity.score,
            "streak_days": streak.days,
        }
    )

    return HealthScoreResult(
        overall_score=overall,
        activity_level=activity,
        consistency=consistency,
        diversity=diversity,
        streak=streak,
        insights=insights,
        recommendations=recommendations,
        last_activity_date=last_activity_date,
    )
