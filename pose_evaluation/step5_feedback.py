"""
Step 5: Feedback
Turns the largest angle deviations into directional correction hints.
"""

from typing import Dict, List

import config


def humanize_angle_name(angle_name: str) -> str:
    """'left_elbow_angle' -> 'left elbow'."""
    return angle_name.replace('_', ' ').replace('angle', '').strip()


def generate_feedback(
    deviations: Dict[str, float],
    target_angles: Dict[str, float],
    user_angles: Dict[str, float],
    max_hints: int = config.FEEDBACK_MAX_HINTS
) -> List[str]:
    """
    Generate feedback hints based on the largest deviations.

    Only the top `max_hints` deviations are considered; those under the
    noticeability threshold are dropped, not replaced, so the result may be
    shorter than `max_hints`.

    Args:
        deviations: Angle name -> absolute deviation (degrees)
        target_angles: Target angles of the pose
        user_angles: Observed angles
        max_hints: Maximum number of hints

    Returns:
        Hints such as "Close left elbow by ≈80°"
    """
    # sorted() is stable: equal deviations keep insertion order
    ranked = sorted(deviations.items(), key=lambda item: item[1], reverse=True)

    hints = []
    for angle_name, deviation in ranked[:max_hints]:
        if deviation < config.FEEDBACK_MIN_DEVIATION:
            continue

        target = target_angles.get(angle_name)
        current = user_angles.get(angle_name)
        if target is None or current is None:
            continue

        diff = int(round(target - current))
        joint_label = humanize_angle_name(angle_name)

        if diff > 0:
            hints.append(f"Open {joint_label} by ≈{abs(diff)}°")
        else:
            hints.append(f"Close {joint_label} by ≈{abs(diff)}°")

    return hints
