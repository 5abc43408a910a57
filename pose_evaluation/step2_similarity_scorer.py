"""
Step 2: Similarity Scoring
Per-frame weighted comparison of observed joint angles against a target pose.

Each angle scores max(0, 1 - diff / tolerance): a linear falloff reaching 0
once the deviation equals the tolerance. The frame score is the
weight-normalized mean over the angles present on both sides.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import config


@dataclass
class SimilarityResult:
    """Similarity of one frame against a target."""
    score: float                                  # [0, 1]
    deviations: Dict[str, float] = field(default_factory=dict)  # |user - target| in degrees

    @property
    def percent(self) -> int:
        return compute_accuracy(self.score)


@dataclass(frozen=True)
class FrameScore:
    """Score of one evaluated frame during an active hold."""
    score: float
    timestamp: float
    angles: Dict[str, float]


def _positive_or(value: Optional[float], default: float) -> float:
    """value when it is a positive number, else default (keeps scores in [0, 1])."""
    if value is None or not value > 0:
        return default
    return value


def similarity_score(
    user_angles: Dict[str, float],
    target_angles: Dict[str, float],
    tolerances: Optional[Dict[str, float]] = None,
    weights: Optional[Dict[str, float]] = None
) -> SimilarityResult:
    """
    Compare user angles to target angles.

    The target drives which angles matter; an angle missing on either side
    is left out of the average instead of being penalized.

    Args:
        user_angles: Observed angles (degrees)
        target_angles: Target angles (degrees)
        tolerances: Per-angle tolerance, default 30 degrees
        weights: Per-angle weight, default 1 (non-positive values use the default)

    Returns:
        SimilarityResult with score in [0, 1] and absolute deviations
    """
    tolerances = tolerances or {}
    weights = weights or {}

    total_weight = 0.0
    weighted_sum = 0.0
    deviations = {}

    for angle_name, target in target_angles.items():
        user = user_angles.get(angle_name)
        if user is None or target is None:
            continue

        tolerance = _positive_or(tolerances.get(angle_name), config.DEFAULT_TOLERANCE)
        weight = _positive_or(weights.get(angle_name), config.DEFAULT_WEIGHT)

        diff = abs(user - target)
        deviations[angle_name] = diff

        angle_score = max(0.0, 1.0 - diff / tolerance)

        weighted_sum += angle_score * weight
        total_weight += weight

    score = weighted_sum / total_weight if total_weight > 0 else 0.0
    return SimilarityResult(score=score, deviations=deviations)


def score_against_pose(user_angles: Dict[str, float], pose) -> SimilarityResult:
    """similarity_score using a PoseDefinition's targets, tolerances and weights."""
    return similarity_score(
        user_angles,
        pose.target_angles,
        pose.tolerances,
        pose.weights
    )


def compute_accuracy(similarity: float) -> int:
    """Similarity (0-1) as an integer percentage."""
    return int(round(similarity * 100))
