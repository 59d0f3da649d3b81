"""
Scoring profile - single source of truth for health score tunables.

This module provides:
- YAML-based loading and validation of scoring.yaml
- ScoringProfile dataclass holding weights, breakpoints and thresholds
- Cached access so the file is parsed once per process

The numbers in the profile are product decisions (how steeply early
engagement is rewarded, what counts as an adherent day). Nothing outside
this module reads scoring.yaml directly.

Usage:
    from core.scoring_profile import get_scoring_profile

    profile = get_scoring_profile()
    profile.weights["activity"]          # 0.40
    profile.activity_breakpoints         # ((0, 0), (5, 20), ...)
"""

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

WEIGHT_KEYS = ("activity", "consistency", "diversity", "streak")


# =============================================================================
# PROFILE DATACLASS
# =============================================================================

@dataclass(frozen=True)
class ScoringProfile:
    """
    Immutable set of health score tunables.

    Attributes:
        weights: Sub-score weights keyed by activity/consistency/diversity/streak
        activity_breakpoints: (count, score) anchors for the activity level curve
        diversity_scores: Score by distinct feature count (last entry saturates)
        streak_points_per_day: Streak sub-score points per consecutive day
        adherence_streak_threshold: Daily taken fraction that keeps an adherence streak
        timeliness_bands: (max minutes, score) bands for dose timeliness
        timeliness_fallback: Score for doses outside every band
    """
    weights: Dict[str, float]
    activity_breakpoints: Tuple[Tuple[float, float], ...]
    diversity_scores: Tuple[float, ...]
    streak_points_per_day: float
    adherence_streak_threshold: float
    timeliness_bands: Tuple[Tuple[float, float], ...]
    timeliness_fallback: float


# =============================================================================
# YAML LOADING & VALIDATION
# =============================================================================

def _default_profile_path() -> Path:
    return Path(__file__).parent / "scoring.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """
    Read and parse a profile file.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If YAML parsing fails
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.error("Scoring profile not found", extra={"path": str(path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse scoring profile", extra={"path": str(path), "error": str(e)})
        raise


def _parse_pairs(raw: Any, name: str) -> Tuple[Tuple[float, float], ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError(f"'{name}' must be a non-empty list of [x, y] pairs")
    pairs = []
    for entry in raw:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"'{name}' entry {entry!r} must be a [x, y] pair")
        try:
            pairs.append((float(entry[0]), float(entry[1])))
        except (TypeError, ValueError):
            raise ValueError(f"'{name}' entry {entry!r} has non-numeric values")
    return tuple(pairs)


def _validate_score(value: float, name: str) -> None:
    if not 0 <= value <= 100:
        raise ValueError(f"'{name}' score {value} is outside [0, 100]")


def parse_scoring_profile(raw: Dict[str, Any]) -> ScoringProfile:
    """
    Build a validated ScoringProfile from parsed YAML.

    Raises:
        ValueError: If any value is missing or violates the profile rules
            (weights not summing to 1.0, decreasing curves, scores out of range).
    """
    weights_raw = raw.get("weights") or {}
    missing = [key for key in WEIGHT_KEYS if key not in weights_raw]
    if missing:
        raise ValueError(f"Scoring profile is missing weights: {', '.join(missing)}")
    weights = {key: float(weights_raw[key]) for key in WEIGHT_KEYS}
    if any(w < 0 for w in weights.values()):
        raise ValueError("Scoring weights must be non-negative")
    if not math.isclose(sum(weights.values()), 1.0, abs_tol=1e-9):
        raise ValueError(f"Scoring weights must sum to 1.0, got {sum(weights.values())}")

    breakpoints = _parse_pairs(raw.get("activity_breakpoints"), "activity_breakpoints")
    if breakpoints[0] != (0.0, 0.0):
        raise ValueError("'activity_breakpoints' must start at [0, 0]")
    for (prev_count, prev_score), (count, score) in zip(breakpoints, breakpoints[1:]):
        if count <= prev_count:
            raise ValueError("'activity_breakpoints' counts must be strictly increasing")
        if score < prev_score:
            raise ValueError("'activity_breakpoints' scores must be non-decreasing")
    for _, score in breakpoints:
        _validate_score(score, "activity_breakpoints")

    diversity_raw = raw.get("diversity_scores")
    if not isinstance(diversity_raw, (list, tuple)) or len(diversity_raw) < 2:
        raise ValueError("'diversity_scores' must list at least two scores")
    diversity = tuple(float(s) for s in diversity_raw)
    if diversity[0] != 0:
        raise ValueError("'diversity_scores' must score zero features as 0")
    if any(b < a for a, b in zip(diversity, diversity[1:])):
        raise ValueError("'diversity_scores' must be non-decreasing")
    for score in diversity:
        _validate_score(score, "diversity_scores")

    threshold = float(raw.get("adherence_streak_threshold", 0.8))
    if not 0 < threshold <= 1:
        raise ValueError("'adherence_streak_threshold' must be in (0, 1]")

    bands = _parse_pairs(raw.get("timeliness_bands"), "timeliness_bands")
    if any(b[0] <= a[0] for a, b in zip(bands, bands[1:])):
        raise ValueError("'timeliness_bands' minutes must be strictly increasing")

    return ScoringProfile(
        weights=weights,
        activity_breakpoints=breakpoints,
        diversity_scores=diversity,
        streak_points_per_day=float(raw.get("streak_points_per_day", 10)),
        adherence_streak_threshold=threshold,
        timeliness_bands=bands,
        timeliness_fallback=float(raw.get("timeliness_fallback", 25)),
    )


@lru_cache(maxsize=4)
def load_scoring_profile(path: Optional[str] = None) -> ScoringProfile:
    """
    Load and cache a scoring profile.

    Args:
        path: Profile file to read. Defaults to the bundled scoring.yaml.
    """
    profile_path = Path(path) if path else _default_profile_path()
    profile = parse_scoring_profile(_load_yaml(profile_path))
    logger.info("Scoring profile loaded", extra={"path": str(profile_path), "weights": profile.weights})
    return profile


def get_scoring_profile() -> ScoringProfile:
    """Get the profile selected by GENIE_SVC_SCORING_PROFILE (or the default)."""
    from core.config import SCORING_PROFILE_PATH

    return load_scoring_profile(SCORING_PROFILE_PATH)
