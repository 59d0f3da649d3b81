"""
Domain models for the computed health score.

Nothing here is persisted; every request builds a fresh HealthScoreResult.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (52.5 -> 53)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class ActivityLevelScore:
    """Activity level sub-score and the activity count it came from."""
    score: float
    total: int


@dataclass(frozen=True)
class ConsistencyScore:
    """Logging consistency sub-score and the number of active UTC days."""
    score: float
    active_days: int


@dataclass(frozen=True)
class FeatureDiversityScore:
    """Feature diversity sub-score and the distinct features, first-seen order."""
    score: float
    features: Tuple[str, ...]


@dataclass(frozen=True)
class EngagementStreakScore:
    """Engagement streak sub-score and the streak length in days."""
    score: float
    days: int


@dataclass(frozen=True)
class HealthScoreResult:
    """Overall health score with its four sub-scores and generated advice."""
    overall_score: int
    activity_level: ActivityLevelScore
    consistency: ConsistencyScore
    diversity: FeatureDiversityScore
    streak: EngagementStreakScore
    insights: Tuple[str, ...]
    recommendations: Tuple[str, ...]
    last_activity_date: Optional[datetime] = None

    @property
    def has_data(self) -> bool:
        return self.activity_level.total > 0
