"""
Pose Hold Evaluation Engine

5-Step Evaluation:
1. Angle Extraction - Landmarks to eight joint angles
2. Similarity Scoring - Weighted comparison against a target pose
3. Motion Analysis - Stability over the hold, left/right symmetry
4. Session Aggregation - Session score, grade and summary
5. Feedback - Directional correction hints
"""

from .step1_angle_extractor import (
    ANGLE_DEFINITIONS, ANGLE_ORDER, AngleExtractor, PoseLandmark, extract_angles
)
from .step2_similarity_scorer import (
    FrameScore, SimilarityResult, compute_accuracy, score_against_pose, similarity_score
)
from .step3_motion_analysis import (
    SYMMETRY_PAIRS, average_stability, stability_score, symmetry_score
)
from .step4_session import (
    Grade, SessionAccumulator, SessionResult, score_to_grade, session_score
)
from .step5_feedback import generate_feedback, humanize_angle_name

__all__ = [
    'ANGLE_DEFINITIONS',
    'ANGLE_ORDER',
    'AngleExtractor',
    'PoseLandmark',
    'extract_angles',
    'FrameScore',
    'SimilarityResult',
    'compute_accuracy',
    'score_against_pose',
    'similarity_score',
    'SYMMETRY_PAIRS',
    'average_stability',
    'stability_score',
    'symmetry_score',
    'Grade',
    'SessionAccumulator',
    'SessionResult',
    'score_to_grade',
    'session_score',
    'generate_feedback',
    'humanize_angle_name',
]
