"""
Insight and recommendation generation for the health score.

Each rule looks at one sub-score and fires independently; several may fire
at once. Rules are evaluated in a fixed order (activity, consistency,
streak, diversity), which is the order the messages appear in.
"""

from typing import List, Tuple

from models.activity import ActivityType
from models.health_score import (
    ActivityLevelScore,
    ConsistencyScore,
    EngagementStreakScore,
    FeatureDiversityScore,
)

# Insight thresholds (sub-score values unless noted)
ACTIVITY_EXCELLENT = 80
ACTIVITY_GOOD = 50
CONSISTENCY_GREAT = 70
CONSISTENCY_BUILDING = 40
STREAK_AMAZING_DAYS = 7
STREAK_GOOD_DAYS = 3
DIVERSITY_BROAD = 70

# Recommendation thresholds
ACTIVITY_LOW = 50
CONSISTENCY_LOW = 50
DIVERSITY_LOW = 50
MIN_FEATURES = 3

WELCOME_INSIGHTS: Tuple[str, ...] = (
    "Welcome to Drug GENIE! Start exploring features to build your health score.",
)
WELCOME_RECOMMENDATIONS: Tuple[str, ...] = (
    "Try the AI Assistant for health questions",
    "Check drug interactions for safety",
    "Search the medicine library for information",
)

GETTING_STARTED_INSIGHT = "Welcome! Start using features to build your health score."
DEFAULT_RECOMMENDATION = "Keep up the great work with your health tracking!"

# Core features suggested to users who have not tried them yet, in order
SUGGESTED_FEATURES = (
    (ActivityType.AI_CONSULTATION.value, "AI consultations"),
    (ActivityType.DRUG_INTERACTION.value, "drug interaction checks"),
    (ActivityType.MEDICINE_SEARCH.value, "medicine searches"),
)


def generate_insights(
    activity: ActivityLevelScore,
    consistency: ConsistencyScore,
    diversity: FeatureDiversityScore,
    streak: EngagementStreakScore,
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """
    Build insights and recommendations for a user with activity in the window.

    Both lists are always non-empty.

    Returns:
        Tuple of (insights, recommendations).
    """
    insights: List[str] = []
    recommendations: List[str] = []

    if activity.score >= ACTIVITY_EXCELLENT:
        insights.append("Excellent engagement with health tracking!")
    elif activity.score >= ACTIVITY_GOOD:
        insights.append("Good activity level, keep it up!")
    elif activity.score > 0:
        insights.append("You're getting started with health tracking.")

    if consistency.score >= CONSISTENCY_GREAT:
        insights.append(f"Great consistency! Active {consistency.active_days} days this month.")
    elif consistency.score >= CONSISTENCY_BUILDING:
        insights.append("Building a good tracking habit.")

    if streak.days >= STREAK_AMAZING_DAYS:
        insights.append(f"Amazing {streak.days}-day streak! Keep it going.")
    elif streak.days >= STREAK_GOOD_DAYS:
        insights.append(f"You're on a {streak.days}-day streak!")

    if diversity.score >= DIVERSITY_BROAD:
        insights.append(f"Using {len(diversity.features)} features - comprehensive health management!")

    if activity.score < ACTIVITY_LOW:
        recommendations.append("Try using the app daily to track your health better")

    if consistency.score < CONSISTENCY_LOW:
        recommendations.append("Build a daily habit by checking in regularly")

    if diversity.score < DIVERSITY_LOW:
        recommendations.append("Explore more features: AI Assistant, Drug Checker, Medicine Library")

    if streak.days == 0 and activity.total > 0:
        recommendations.append("Start a new streak by using the app daily")

    if len(diversity.features) < MIN_FEATURES:
        unused = [label for feature, label in SUGGESTED_FEATURES if feature not in diversity.features]
        if unused:
            recommendations.append(f"Try {unused[0]} for better health insights")

    if not insights:
        insights.append(GETTING_STARTED_INSIGHT)

    if not recommendations:
        recommendations.append(DEFAULT_RECOMMENDATION)

    return tuple(insights), tuple(recommendations)
