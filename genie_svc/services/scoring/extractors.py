"""
Metric extractors for the activity-based health score.

Each extractor is a pure function over a sequence of activity records
(already fetched by the caller) and returns one sub-score in [0, 100]
together with the counts it was derived from. Extractors never touch the
store and never depend on each other's output.

Days are always UTC calendar days.
"""

import logging
from datetime import date
from typing import Iterable, Sequence, Tuple

from core.datetime_utils import days_between, utc_day
from core.scoring_profile import ScoringProfile
from models.activity import ActivityRecord
from models.health_score import (
    ActivityLevelScore,
    ConsistencyScore,
    EngagementStreakScore,
    FeatureDiversityScore,
)

logger = logging.getLogger(__name__)

MAX_SCORE = 100.0


def interpolate_breakpoints(count: float, breakpoints: Sequence[Tuple[float, float]]) -> float:
    """
    Piecewise-linear score for ``count`` through ``(count, score)`` anchors.

    Counts at or below the first anchor score the first anchor's value;
    counts beyond the last anchor score the last anchor's value.

    Example:
        >>> interpolate_breakpoints(20, [(0, 0), (5, 20), (15, 50), (30, 80)])
        60.0
    """
    first_count, first_score = breakpoints[0]
    if count <= first_count:
        return float(first_score)

    for (x0, y0), (x1, y1) in zip(breakpoints, breakpoints[1:]):
        if count <= x1:
            return y0 + (count - x0) / (x1 - x0) * (y1 - y0)

    return min(float(breakpoints[-1][1]), MAX_SCORE)


def distinct_days(records: Iterable[ActivityRecord]) -> set:
    return {utc_day(record.timestamp) for record in records}


# =============================================================================
# EXTRACTORS
# =============================================================================

def activity_level(records: Sequence[ActivityRecord], profile: ScoringProfile) -> ActivityLevelScore:
    """
    Score how much the user engaged within the window.

    Steep reward for the first few actions, diminishing returns after,
    following ``profile.activity_breakpoints``.
    """
    total = len(records)
    return ActivityLevelScore(
        score=interpolate_breakpoints(total, profile.activity_breakpoints),
        total=total,
    )


def logging_consistency(records: Sequence[ActivityRecord], window_days: int) -> ConsistencyScore:
    """
    Score how regularly the user was active within the window.

    score = active_days / window_days * 100, capped at 100.

    Raises:
        ValueError: If window_days is not positive.
    """
    if window_days <= 0:
        raise ValueError(f"window_days must be positive, got {window_days}")

    active_days = len(distinct_days(records))
    return ConsistencyScore(
        score=min(MAX_SCORE, active_days / window_days * 100),
        active_days=active_days,
    )


def feature_diversity(records: Sequence[ActivityRecord], profile: ScoringProfile) -> FeatureDiversityScore:
    """
    Score how many different features the user touched.

    Features keep the order in which they first appear in ``records``.
    The score is a table lookup by distinct count; counts past the end of
    the table take its last entry.
    """
    features = tuple(dict.fromkeys(record.activity_type for record in records))
    table = profile.diversity_scores
    return FeatureDiversityScore(
        score=table[min(len(features), len(table) - 1)],
        features=features,
    )


def engagement_streak(
    records: Sequence[ActivityRecord],
    today: date,
    profile: ScoringProfile,
) -> EngagementStreakScore:
    """
    Count consecutive active days ending today.

    Distinct days are walked newest first. A day extends the streak only
    if it lies exactly ``streak`` days before today, so the first missing
    day ends the walk. Days after ``today`` are ignored. No activity today
    means a streak of 0.

    ``records`` is the bounded lookback (most recent N records), not the
    scoring window.
    """
    streak = 0
    for day in sorted(distinct_days(records), reverse=True):
        gap = days_between(today, day)
        if gap == streak:
            streak += 1
        elif gap > streak:
            break

    return EngagementStreakScore(
        score=min(streak * profile.streak_points_per_day, MAX_SCORE),
        days=streak,
    )
