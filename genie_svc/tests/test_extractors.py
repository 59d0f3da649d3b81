"""
Unit tests for the health score extractors.

Tests cover:
- interpolate_breakpoints: Piecewise-linear activity curve
- activity_level: Activity count to score
- logging_consistency: Active days over the window
- feature_diversity: Distinct features and table lookup
- engagement_streak: Consecutive active days ending today

These tests use in-memory records only (no database).
"""
from datetime import timedelta

import pytest

from models.activity import ActivityRecord
from services.scoring.extractors import (
    activity_level,
    engagement_streak,
    feature_diversity,
    interpolate_breakpoints,
    logging_consistency,
)


BREAKPOINTS = ((0, 0), (5, 20), (15, 50), (30, 80), (50, 100))


# =============================================================================
# INTERPOLATION
# =============================================================================

class TestInterpolateBreakpoints:
    """Tests for the piecewise-linear activity curve."""

    def test_zero_scores_zero(self):
        assert interpolate_breakpoints(0, BREAKPOINTS) == 0

    def test_exact_anchor(self):
        assert interpolate_breakpoints(5, BREAKPOINTS) == 20
        assert interpolate_breakpoints(15, BREAKPOINTS) == 50
        assert interpolate_breakpoints(30, BREAKPOINTS) == 80

    def test_between_anchors(self):
        assert interpolate_breakpoints(2, BREAKPOINTS) == pytest.approx(8.0)
        assert interpolate_breakpoints(10, BREAKPOINTS) == pytest.approx(35.0)
        assert interpolate_breakpoints(20, BREAKPOINTS) == pytest.approx(60.0)
        assert interpolate_breakpoints(40, BREAKPOINTS) == pytest.approx(90.0)

    def test_saturates_past_last_anchor(self):
        assert interpolate_breakpoints(50, BREAKPOINTS) == 100
        assert interpolate_breakpoints(500, BREAKPOINTS) == 100

    def test_monotonic(self):
        scores = [interpolate_breakpoints(n, BREAKPOINTS) for n in range(0, 80)]
        assert scores == sorted(scores)


# =============================================================================
# ACTIVITY LEVEL
# =============================================================================

class TestActivityLevel:
    """Tests for the activity level extractor."""

    def test_no_records(self, profile):
        result = activity_level([], profile)
        assert result.score == 0
        assert result.total == 0

    def test_counts_all_records(self, profile, make_record):
        records = [make_record(days_ago=i % 3) for i in range(20)]
        result = activity_level(records, profile)
        assert result.total == 20
        assert result.score == pytest.approx(60.0)

    def test_more_activity_never_scores_lower(self, profile, make_record):
        previous = -1.0
        for count in range(0, 60, 3):
            score = activity_level([make_record() for _ in range(count)], profile).score
            assert score >= previous
            previous = score


# =============================================================================
# LOGGING CONSISTENCY
# =============================================================================

class TestLoggingConsistency:
    """Tests for the logging consistency extractor."""

    def test_no_records(self):
        result = logging_consistency([], 30)
        assert result.score == 0
        assert result.active_days == 0

    def test_counts_distinct_days(self, make_record):
        records = [make_record(days_ago=d, hour=h) for d in range(10) for h in (8, 20)]
        result = logging_consistency(records, 30)
        assert result.active_days == 10
        assert result.score == pytest.approx(33.333, abs=0.01)

    def test_every_day_active_is_full_score(self, make_record):
        records = [make_record(days_ago=d) for d in range(30)]
        assert logging_consistency(records, 30).score == pytest.approx(100.0)

    def test_capped_at_100(self, make_record):
        records = [make_record(days_ago=d) for d in range(10)]
        assert logging_consistency(records, 5).score == 100

    def test_days_are_utc_calendar_days(self, now):
        records = [
            ActivityRecord(user_id="u", activity_type="login", timestamp=now.replace(hour=23, minute=59)),
            ActivityRecord(user_id="u", activity_type="login", timestamp=now.replace(hour=0, minute=1)),
        ]
        assert logging_consistency(records, 30).active_days == 1

    def test_non_positive_window_rejected(self):
        with pytest.raises(ValueError):
            logging_consistency([], 0)


# =============================================================================
# FEATURE DIVERSITY
# =============================================================================

class TestFeatureDiversity:
    """Tests for the feature diversity extractor."""

    @pytest.mark.parametrize("distinct,expected", [
        (0, 0), (1, 30), (2, 50), (3, 70), (4, 85), (5, 100), (6, 100), (9, 100),
    ])
    def test_score_table(self, profile, make_record, distinct, expected):
        types = [
            "login", "ai_consultation", "drug_interaction", "medicine_search",
            "profile_update", "symptom_check", "blood_request",
            "reminder", "health_score",
        ][:distinct]
        records = [make_record(activity_type=t) for t in types]
        assert feature_diversity(records, profile).score == expected

    def test_duplicates_count_once(self, profile, make_record):
        records = [make_record("login"), make_record("login"), make_record("ai_consultation")]
        result = feature_diversity(records, profile)
        assert result.score == 50
        assert len(result.features) == 2

    def test_features_keep_first_seen_order(self, profile, make_record):
        records = [
            make_record("medicine_search", days_ago=0),
            make_record("login", days_ago=1),
            make_record("medicine_search", days_ago=2),
        ]
        assert feature_diversity(records, profile).features == ("medicine_search", "login")


# =============================================================================
# ENGAGEMENT STREAK
# =============================================================================

class TestEngagementStreak:
    """Tests for the engagement streak extractor."""

    def test_no_records(self, profile, now):
        result = engagement_streak([], now.date(), profile)
        assert result.days == 0
        assert result.score == 0

    def test_consecutive_days_ending_today(self, profile, make_record, now):
        records = [make_record(days_ago=d) for d in range(4)]
        result = engagement_streak(records, now.date(), profile)
        assert result.days == 4
        assert result.score == 40

    def test_gap_ends_streak(self, profile, make_record, now):
        # Active today, yesterday, 2 days ago, then 4 days ago
        records = [make_record(days_ago=d) for d in (0, 1, 2, 4)]
        assert engagement_streak(records, now.date(), profile).days == 3

    def test_no_activity_today_is_zero(self, profile, make_record, now):
        records = [make_record(days_ago=d) for d in (1, 2, 3)]
        assert engagement_streak(records, now.date(), profile).days == 0

    def test_multiple_records_per_day_count_once(self, profile, make_record, now):
        records = [make_record(days_ago=0, hour=h) for h in (8, 12, 18)]
        records.append(make_record(days_ago=1))
        assert engagement_streak(records, now.date(), profile).days == 2

    def test_future_days_ignored(self, profile, make_record, now):
        records = [make_record(days_ago=-1), make_record(days_ago=0), make_record(days_ago=1)]
        assert engagement_streak(records, now.date(), profile).days == 2

    def test_score_capped_at_100(self, profile, make_record, now):
        records = [make_record(days_ago=d) for d in range(15)]
        result = engagement_streak(records, now.date(), profile)
        assert result.days == 15
        assert result.score == 100

    def test_input_order_does_not_matter(self, profile, make_record, now):
        records = [make_record(days_ago=d) for d in (2, 0, 1)]
        assert engagement_streak(records, now.date(), profile).days == 3

    def test_lookback_beyond_window(self, profile, make_record, now):
        records = [make_record(days_ago=d) for d in range(45)]
        assert engagement_streak(records, now.date(), profile).days == 45

    def test_uses_utc_day_of_timestamp(self, profile, now):
        shifted = ActivityRecord(
            user_id="u",
            activity_type="login",
            timestamp=now.replace(hour=0, minute=30) - timedelta(hours=1),
        )
        # 23:30 UTC the previous day
        assert engagement_streak([shifted], now.date(), profile).days == 0
