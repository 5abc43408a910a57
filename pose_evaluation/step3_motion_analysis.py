"""
Step 3: Motion Analysis
Stability over a hold (per-angle variance) and left/right symmetry of a frame.
"""

import numpy as np
from typing import Dict, List, Mapping, Sequence, Tuple

import config


# Left/right angle pairs compared for symmetry
SYMMETRY_PAIRS: List[Tuple[str, str]] = [
    ('left_shoulder_angle', 'right_shoulder_angle'),
    ('left_elbow_angle', 'right_elbow_angle'),
    ('left_hip_angle', 'right_hip_angle'),
    ('left_knee_angle', 'right_knee_angle'),
]


def stability_score(angle_series: Sequence[float]) -> float:
    """
    Stability of one angle's time series (0-1).

    Lower variance = higher stability. Under two samples the series is
    treated as perfectly stable.

    Args:
        angle_series: Ordered angle values (degrees)

    Returns:
        max(0, 1 - std / 15)
    """
    if len(angle_series) < 2:
        return 1.0

    # Population std (ddof=0)
    std = float(np.std(np.asarray(angle_series, dtype=np.float64)))
    return max(0.0, 1.0 - std / config.STABILITY_MAX_STD)


def average_stability(angle_history: Mapping[str, Sequence[float]]) -> float:
    """
    Mean of the per-angle stabilities (0-1).

    Each angle is scored on its own series; the series are never pooled.
    Returns 0 when there is no history at all.
    """
    if not angle_history:
        return 0.0

    stabilities = [stability_score(series) for series in angle_history.values()]
    return float(np.mean(stabilities))


def symmetry_score(angles: Dict[str, float]) -> int:
    """
    Left/right symmetry of one frame as an integer percentage.

    Pairs with a missing side are ignored; with no complete pair the
    result is 0.
    """
    total = 0.0
    count = 0

    for left, right in SYMMETRY_PAIRS:
        if left not in angles or right not in angles:
            continue
        diff = abs(angles[left] - angles[right])
        total += max(0.0, 1.0 - diff / config.SYMMETRY_MAX_DIFF)
        count += 1

    if count == 0:
        return 0
    return int(round(total / count * 100))
