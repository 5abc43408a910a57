"""
Step 4: Session Aggregation
Combines the frame scores of one hold into a session score, a grade and
the completion summary.

Session score = mean frame similarity × stability factor × 100, so a hold
that reaches the pose but cannot keep it still is pulled down.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

import config
from .step2_similarity_scorer import (
    FrameScore, SimilarityResult, compute_accuracy, score_against_pose
)
from .step3_motion_analysis import average_stability, symmetry_score
from .step5_feedback import generate_feedback

logger = logging.getLogger(__name__)


class Grade(Enum):
    """Performance tiers, highest first."""
    ADVANCED = "Advanced"
    INTERMEDIATE = "Intermediate"
    BEGINNER = "Beginner"


def session_score(
    frame_scores: Sequence[FrameScore],
    stability_factor: float = config.STABILITY_PENALTY
) -> float:
    """
    Compute session score (0-100) from frame scores with stability penalty.

    Args:
        frame_scores: Frame scores of the hold, in order
        stability_factor: Multiplier in [0, 1]

    Returns:
        0 for an empty hold, else mean(score) * stability_factor * 100
    """
    if not frame_scores:
        return 0.0

    avg_score = float(np.mean([f.score for f in frame_scores]))
    return avg_score * stability_factor * 100


def score_to_grade(score: float) -> Grade:
    """Convert 0-100 score to grade (inclusive lower bounds)."""
    if score >= config.GRADE_ADVANCED_THRESHOLD:
        return Grade.ADVANCED
    if score >= config.GRADE_INTERMEDIATE_THRESHOLD:
        return Grade.INTERMEDIATE
    return Grade.BEGINNER


@dataclass(frozen=True)
class SessionResult:
    """Summary of a completed hold."""
    accuracy: int                # 0-100, last frame similarity
    stability: int               # 0-100
    symmetry: int                # 0-100, last frame
    grade: Grade
    feedback: Tuple[str, ...] = ()
    score: float = 0.0           # session score behind the grade
    frame_count: int = 0

    def to_dict(self) -> dict:
        return {
            "accuracy": self.accuracy,
            "stability": self.stability,
            "symmetry": self.symmetry,
            "grade": self.grade.value,
            "feedback": list(self.feedback),
            "score": round(self.score, 1),
            "frame_count": self.frame_count,
        }


class SessionAccumulator:
    """
    Frame data of one hold attempt.

    Created when a hold begins, fed once per detected frame while holding,
    and discarded when the hold ends. Frames must arrive one at a time in
    order.

    Example:
        >>> acc = SessionAccumulator(pose, start_time=0.0)
        >>> acc.add_frame(angles, timestamp=0.5)
        >>> if acc.is_complete(now):
        ...     result = acc.finalize()
    """

    def __init__(self, pose, start_time: Optional[float] = None):
        """
        Args:
            pose: PoseDefinition to hold
            start_time: Hold start (seconds); defaults to the first frame
        """
        self.pose = pose
        self.start_time = start_time
        self._frame_scores: List[FrameScore] = []
        self._angle_history: Dict[str, List[float]] = {}
        self._last_result: Optional[SimilarityResult] = None

    @property
    def frame_scores(self) -> Sequence[FrameScore]:
        return tuple(self._frame_scores)

    @property
    def angle_history(self) -> Mapping[str, Sequence[float]]:
        return {name: tuple(series) for name, series in self._angle_history.items()}

    @property
    def live_similarity(self) -> int:
        """Similarity of the latest frame as a percentage."""
        if self._last_result is None:
            return 0
        return self._last_result.percent

    def add_frame(
        self,
        angles: Dict[str, float],
        timestamp: Optional[float] = None
    ) -> SimilarityResult:
        """
        Score one frame and record it.

        Args:
            angles: Angles extracted from the frame
            timestamp: Frame time in seconds (now if None)

        Returns:
            SimilarityResult of the frame
        """
        if timestamp is None:
            timestamp = time.time()
        if self.start_time is None:
            self.start_time = timestamp

        result = score_against_pose(angles, self.pose)
        self._last_result = result

        self._frame_scores.append(FrameScore(
            score=result.score,
            timestamp=timestamp,
            angles=dict(angles)
        ))

        for angle_name, value in angles.items():
            self._angle_history.setdefault(angle_name, []).append(value)

        logger.debug(
            "Frame %d: similarity=%.3f", len(self._frame_scores), result.score
        )
        return result

    def hold_progress(self, now: Optional[float] = None) -> float:
        """Elapsed share of the pose's hold duration, 0-100."""
        if self.start_time is None:
            return 0.0
        if now is None:
            now = time.time()

        elapsed = max(0.0, now - self.start_time)
        hold_seconds = self.pose.hold_seconds or config.DEFAULT_HOLD_SECONDS
        return min(100.0, elapsed / hold_seconds * 100)

    def is_complete(self, now: Optional[float] = None) -> bool:
        return self.hold_progress(now) >= 100

    def reset(self) -> None:
        """Discard everything collected (hold cancelled or skipped)."""
        self.start_time = None
        self._frame_scores = []
        self._angle_history = {}
        self._last_result = None

    def finalize(self) -> SessionResult:
        """
        Compute the completion summary from the accumulated frames.

        Accuracy, symmetry and feedback come from the last frame; stability
        and the grade cover the whole hold.
        """
        last_frame = self._frame_scores[-1] if self._frame_scores else None

        accuracy = compute_accuracy(last_frame.score) if last_frame else 0
        symmetry = symmetry_score(last_frame.angles) if last_frame else 0
        stability = int(round(average_stability(self._angle_history) * 100))

        score = session_score(self._frame_scores, stability / 100)
        grade = score_to_grade(score)

        feedback: Tuple[str, ...] = ()
        if last_frame:
            deviations = score_against_pose(last_frame.angles, self.pose).deviations
            feedback = tuple(generate_feedback(
                deviations,
                self.pose.target_angles,
                last_frame.angles
            ))

        logger.info(
            "Hold '%s' finished: %d frames, score=%.1f, grade=%s",
            self.pose.slug, len(self._frame_scores), score, grade.value
        )

        return SessionResult(
            accuracy=accuracy,
            stability=stability,
            symmetry=symmetry,
            grade=grade,
            feedback=feedback,
            score=score,
            frame_count=len(self._frame_scores),
        )
