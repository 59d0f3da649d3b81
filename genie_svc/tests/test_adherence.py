"""
Unit tests for medication adherence metrics.
"""
from datetime import timedelta

import pytest

from models.medication import MedicationEvent
from services.scoring.adherence import (
    StatusCounts,
    adherence_rate,
    adherence_streak,
    count_statuses,
    timeliness_score,
)


@pytest.fixture
def make_event(now):
    def _make(status="taken", days_ago=0, hour=8, minutes_late=None):
        scheduled = (now - timedelta(days=days_ago)).replace(hour=hour, minute=0, second=0)
        taken = scheduled + timedelta(minutes=minutes_late) if minutes_late is not None else None
        return MedicationEvent(
            user_id="user-123",
            medicine_name="Metformin",
            scheduled_time=scheduled,
            status=status,
            taken_time=taken,
        )
    return _make


class TestCounts:

    def test_count_statuses(self, make_event):
        events = [make_event("taken"), make_event("taken"), make_event("missed"), make_event("skipped")]
        counts = count_statuses(events)
        assert counts == StatusCounts(taken=2, missed=1, skipped=1)
        assert counts.decided == 3

    def test_empty(self):
        assert count_statuses([]) == StatusCounts()


class TestAdherenceRate:

    def test_skipped_doses_are_neutral(self):
        assert adherence_rate(StatusCounts(taken=3, missed=1, skipped=10)) == pytest.approx(75.0)

    def test_nothing_decided(self):
        assert adherence_rate(StatusCounts(skipped=2)) == 0.0

    def test_all_taken(self):
        assert adherence_rate(StatusCounts(taken=5)) == 100.0


class TestTimeliness:

    @pytest.mark.parametrize("minutes,expected", [
        (0, 100), (30, 100), (45, 75), (60, 75), (90, 50), (120, 50), (121, 25), (600, 25),
    ])
    def test_bands(self, make_event, profile, minutes, expected):
        assert timeliness_score([make_event(minutes_late=minutes)], profile) == expected

    def test_early_doses_use_absolute_distance(self, make_event, profile):
        assert timeliness_score([make_event(minutes_late=-45)], profile) == 75

    def test_average_of_taken_doses(self, make_event, profile):
        events = [
            make_event(minutes_late=10),
            make_event(minutes_late=90),
            make_event("missed"),
            make_event("taken"),  # no taken time recorded
        ]
        assert timeliness_score(events, profile) == pytest.approx(75.0)

    def test_no_taken_doses(self, make_event, profile):
        assert timeliness_score([make_event("missed")], profile) == 0.0


class TestAdherenceStreak:

    def test_consecutive_adherent_days(self, make_event, profile, now):
        events = [make_event("taken", days_ago=d) for d in range(5)]
        assert adherence_streak(events, now.date(), profile) == 5

    def test_day_below_threshold_ends_streak(self, make_event, profile, now):
        events = [make_event("taken", days_ago=d) for d in range(5)]
        # Day 2: 1 taken, 1 missed -> 50% < 80%
        events.append(make_event("missed", days_ago=2, hour=20))
        assert adherence_streak(events, now.date(), profile) == 2

    def test_threshold_met_exactly(self, make_event, profile, now):
        events = [make_event("taken", days_ago=0, hour=h) for h in (6, 8, 10, 12)]
        events.append(make_event("missed", days_ago=0, hour=20))
        assert adherence_streak(events, now.date(), profile) == 1

    def test_missing_day_ends_streak(self, make_event, profile, now):
        events = [make_event("taken", days_ago=d) for d in (0, 1, 3)]
        assert adherence_streak(events, now.date(), profile) == 2

    def test_skipped_only_day_ends_streak(self, make_event, profile, now):
        events = [make_event("taken", days_ago=0), make_event("skipped", days_ago=1), make_event("taken", days_ago=2)]
        assert adherence_streak(events, now.date(), profile) == 1

    def test_nothing_today_is_zero(self, make_event, profile, now):
        events = [make_event("taken", days_ago=d) for d in (1, 2)]
        assert adherence_streak(events, now.date(), profile) == 0

    def test_future_doses_ignored(self, make_event, profile, now):
        events = [make_event("missed", days_ago=-1), make_event("taken", days_ago=0)]
        assert adherence_streak(events, now.date(), profile) == 1
