"""
Unit tests for scoring profile loading and validation.
"""
import copy

import pytest
import yaml

from core.scoring_profile import load_scoring_profile, parse_scoring_profile


@pytest.fixture
def raw_profile():
    return {
        "weights": {"activity": 0.4, "consistency": 0.3, "diversity": 0.2, "streak": 0.1},
        "activity_breakpoints": [[0, 0], [5, 20], [15, 50], [30, 80], [50, 100]],
        "diversity_scores": [0, 30, 50, 70, 85, 100],
        "streak_points_per_day": 10,
        "adherence_streak_threshold": 0.8,
        "timeliness_bands": [[30, 100], [60, 75], [120, 50]],
        "timeliness_fallback": 25,
    }


class TestBundledProfile:
    """The scoring.yaml shipped with the service."""

    def test_loads(self):
        profile = load_scoring_profile()
        assert profile.activity_breakpoints[0] == (0.0, 0.0)
        assert profile.diversity_scores == (0, 30, 50, 70, 85, 100)
        assert profile.streak_points_per_day == 10
        assert profile.adherence_streak_threshold == 0.8

    def test_cached(self):
        assert load_scoring_profile() is load_scoring_profile()


class TestParseScoringProfile:
    """Validation rules for profile values."""

    def test_valid(self, raw_profile):
        profile = parse_scoring_profile(raw_profile)
        assert profile.weights["activity"] == 0.4
        assert profile.timeliness_bands == ((30.0, 100.0), (60.0, 75.0), (120.0, 50.0))

    def test_missing_weight(self, raw_profile):
        del raw_profile["weights"]["streak"]
        with pytest.raises(ValueError, match="missing weights"):
            parse_scoring_profile(raw_profile)

    def test_weights_must_sum_to_one(self, raw_profile):
        raw_profile["weights"]["activity"] = 0.5
        with pytest.raises(ValueError, match="sum to 1.0"):
            parse_scoring_profile(raw_profile)

    def test_negative_weight(self, raw_profile):
        raw_profile["weights"] = {"activity": 1.2, "consistency": -0.2, "diversity": 0.0, "streak": 0.0}
        with pytest.raises(ValueError, match="non-negative"):
            parse_scoring_profile(raw_profile)

    def test_breakpoints_must_start_at_origin(self, raw_profile):
        raw_profile["activity_breakpoints"][0] = [1, 0]
        with pytest.raises(ValueError, match="start at"):
            parse_scoring_profile(raw_profile)

    def test_breakpoints_must_increase(self, raw_profile):
        raw_profile["activity_breakpoints"][2] = [5, 50]
        with pytest.raises(ValueError, match="strictly increasing"):
            parse_scoring_profile(raw_profile)

    def test_breakpoint_scores_non_decreasing(self, raw_profile):
        raw_profile["activity_breakpoints"][2] = [15, 10]
        with pytest.raises(ValueError, match="non-decreasing"):
            parse_scoring_profile(raw_profile)

    def test_breakpoint_score_range(self, raw_profile):
        raw_profile["activity_breakpoints"][-1] = [50, 120]
        with pytest.raises(ValueError, match=r"outside \[0, 100\]"):
            parse_scoring_profile(raw_profile)

    def test_diversity_starts_at_zero(self, raw_profile):
        raw_profile["diversity_scores"][0] = 10
        with pytest.raises(ValueError):
            parse_scoring_profile(raw_profile)

    def test_diversity_non_decreasing(self, raw_profile):
        raw_profile["diversity_scores"] = [0, 50, 30]
        with pytest.raises(ValueError, match="non-decreasing"):
            parse_scoring_profile(raw_profile)

    def test_adherence_threshold_range(self, raw_profile):
        for bad in (0, 1.5):
            data = copy.deepcopy(raw_profile)
            data["adherence_streak_threshold"] = bad
            with pytest.raises(ValueError):
                parse_scoring_profile(data)

    def test_timeliness_bands_increase(self, raw_profile):
        raw_profile["timeliness_bands"] = [[60, 100], [30, 75]]
        with pytest.raises(ValueError, match="strictly increasing"):
            parse_scoring_profile(raw_profile)


class TestLoadFromFile:
    """Loading custom profile files."""

    def test_custom_file(self, tmp_path, raw_profile):
        raw_profile["weights"] = {"activity": 0.25, "consistency": 0.25, "diversity": 0.25, "streak": 0.25}
        path = tmp_path / "profile.yaml"
        path.write_text(yaml.safe_dump(raw_profile), encoding="utf-8")

        profile = load_scoring_profile(str(path))
        assert profile.weights["streak"] == 0.25

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scoring_profile(str(tmp_path / "nope.yaml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("weights: [unclosed", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_scoring_profile(str(path))
