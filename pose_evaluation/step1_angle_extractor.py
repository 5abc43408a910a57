"""
Step 1: Angle Extraction
Maps a 33-point landmark set to the eight tracked joint angles.
"""

import numpy as np
from typing import Dict, List, Sequence, Tuple

from utils.angle_calculator import angle_between


class PoseLandmark:
    """
    MediaPipe Pose landmark indices.
    33 landmarks in total.
    """
    # Face
    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10

    # Upper body
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22

    # Lower body
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32

    COUNT = 33


# Angle definitions: (point_a, vertex, point_b)
ANGLE_DEFINITIONS: Dict[str, Tuple[int, int, int]] = {
    'left_shoulder_angle': (PoseLandmark.LEFT_WRIST, PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_HIP),
    'right_shoulder_angle': (PoseLandmark.RIGHT_WRIST, PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_HIP),
    'left_elbow_angle': (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_ELBOW, PoseLandmark.LEFT_WRIST),
    'right_elbow_angle': (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_ELBOW, PoseLandmark.RIGHT_WRIST),
    'left_hip_angle': (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_HIP, PoseLandmark.LEFT_KNEE),
    'right_hip_angle': (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_HIP, PoseLandmark.RIGHT_KNEE),
    'left_knee_angle': (PoseLandmark.LEFT_HIP, PoseLandmark.LEFT_KNEE, PoseLandmark.LEFT_ANKLE),
    'right_knee_angle': (PoseLandmark.RIGHT_HIP, PoseLandmark.RIGHT_KNEE, PoseLandmark.RIGHT_ANKLE),
}

# Order of angles in vector representation
ANGLE_ORDER: List[str] = list(ANGLE_DEFINITIONS.keys())


def extract_angles(landmarks: Sequence) -> Dict[str, float]:
    """
    Calculate all tracked joint angles from one frame of landmarks.

    Args:
        landmarks: 33 points in MediaPipe Pose order, each exposing x, y, z.

    Returns:
        Mapping angle name -> degrees [0, 180]
    """
    angles = {}
    for angle_name, (idx_a, idx_vertex, idx_b) in ANGLE_DEFINITIONS.items():
        angles[angle_name] = angle_between(
            landmarks[idx_a],
            landmarks[idx_vertex],
            landmarks[idx_b]
        )
    return angles


class AngleExtractor:
    """
    Extract joint angles from pose landmarks.

    Uses 8 key angles for pose matching:
    - left/right shoulder (wrist-shoulder-hip)
    - left/right elbow (shoulder-elbow-wrist)
    - left/right hip (shoulder-hip-knee)
    - left/right knee (hip-knee-ankle)
    """

    ANGLE_DEFINITIONS = ANGLE_DEFINITIONS
    ANGLE_ORDER = ANGLE_ORDER

    @staticmethod
    def extract(landmarks: Sequence) -> Dict[str, float]:
        return extract_angles(landmarks)

    @classmethod
    def to_vector(cls, angles: Dict[str, float], fill: float = np.nan) -> np.ndarray:
        """
        Dense representation of an angle mapping in ANGLE_ORDER.

        Angles absent from the mapping are set to `fill`.
        """
        return np.array(
            [angles.get(name, fill) for name in cls.ANGLE_ORDER],
            dtype=np.float64
        )

    @classmethod
    def from_vector(cls, vector: Sequence[float]) -> Dict[str, float]:
        """Inverse of to_vector; NaN entries are dropped."""
        return {
            name: float(value)
            for name, value in zip(cls.ANGLE_ORDER, vector)
            if not np.isnan(value)
        }
