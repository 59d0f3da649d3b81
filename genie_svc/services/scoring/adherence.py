"""
Medication adherence metrics.

Used by the medication summary, not by the health score: the health score
is activity-based and does not mix in adherence.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Sequence

from core.datetime_utils import days_between, utc_day
from core.scoring_profile import ScoringProfile
from models.medication import MedicationEvent, MedicationStatus


@dataclass(frozen=True)
class StatusCounts:
    taken: int = 0
    missed: int = 0
    skipped: int = 0

    @property
    def decided(self) -> int:
        """Doses that were either taken or missed; skipped doses are neutral."""
        return self.taken + self.missed


def count_statuses(events: Sequence[MedicationEvent]) -> StatusCounts:
    counts = {status.value: 0 for status in MedicationStatus}
    for event in events:
        if event.status in counts:
            counts[event.status] += 1
    return StatusCounts(**counts)


def adherence_rate(counts: StatusCounts) -> float:
    """Taken doses as a percentage of taken + missed (0 when nothing is decided)."""
    if counts.decided == 0:
        return 0.0
    return counts.taken / counts.decided * 100


def timeliness_score(events: Sequence[MedicationEvent], profile: ScoringProfile) -> float:
    """
    Average timeliness of taken doses with a recorded taken time.

    Each dose scores the first band whose minute limit covers its distance
    from the scheduled time, or ``profile.timeliness_fallback``.
    """
    scores = []
    for event in events:
        if event.status != MedicationStatus.TAKEN.value:
            continue
        minutes = event.minutes_off_schedule
        if minutes is None:
            continue
        score = profile.timeliness_fallback
        for limit, band_score in profile.timeliness_bands:
            if minutes <= limit:
                score = band_score
                break
        scores.append(score)

    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def adherence_streak(
    events: Sequence[MedicationEvent],
    today: date,
    profile: ScoringProfile,
) -> int:
    """
    Consecutive days ending today on which the user met the adherence cutoff.

    A day qualifies when taken / (taken + missed) reaches
    ``profile.adherence_streak_threshold``. Days with only skipped doses do
    not qualify. Days after ``today`` are ignored.
    """
    by_day: Dict[date, list] = defaultdict(list)
    for event in events:
        by_day[utc_day(event.scheduled_time)].append(event)

    streak = 0
    for day in sorted(by_day, reverse=True):
        gap = days_between(today, day)
        if gap < streak:
            continue
        if gap > streak:
            break
        counts = count_statuses(by_day[day])
        if counts.decided == 0 or counts.taken / counts.decided < profile.adherence_streak_threshold:
            break
        streak += 1

    return streak
