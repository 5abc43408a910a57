"""
Pose Hold Evaluation - Recorded Session Replay
==============================================

Replays recorded landmark frames through the evaluation engine:
1. Angle Extraction - Landmarks to joint angles
2. Similarity Scoring - Live similarity against the target pose
3. Motion Analysis - Stability and symmetry
4. Session Aggregation - Grade once the hold duration is reached
5. Feedback - Correction hints for the final frame

Usage:
    python main.py --list                              # List poses
    python main.py --challenge                         # List challenge levels
    python main.py --pose warrior-ii --frames hold.json
    python main.py --pose warrior-ii --frames hold.json --json

Frames file:
    {"frames": [{"timestamp": 0.0, "landmarks": [[x, y, z], ...]}, ...]}
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence, Tuple

import config
from pose_evaluation import SessionAccumulator, SessionResult, extract_angles
from utils.angle_calculator import Point3D
from utils.pose_library import PoseLibrary, PoseNotFoundError

logger = logging.getLogger(__name__)


class HoldEvaluationPipeline:
    """
    Evaluates one timed hold of a pose from a stream of landmark frames.

    The caller owns the lifecycle: begin() when the hold starts,
    process_landmarks() for every detected frame, finish() once the result
    reports the hold complete, reset() to cancel.
    """

    def __init__(self, library: PoseLibrary, pose_slug: str):
        """
        Args:
            library: Loaded pose library
            pose_slug: Pose to evaluate against
        """
        self.library = library
        self.pose = library.require(pose_slug)
        self.accumulator: Optional[SessionAccumulator] = None

    @property
    def is_holding(self) -> bool:
        return self.accumulator is not None

    def begin(self, start_time: Optional[float] = None) -> None:
        """Start a fresh hold attempt."""
        self.accumulator = SessionAccumulator(self.pose, start_time=start_time)
        logger.info("Hold started: %s (%.0fs)", self.pose.name, self.pose.hold_seconds)

    def process_landmarks(
        self,
        landmarks: Sequence,
        timestamp: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Process a single frame of landmarks.

        Returns:
            dict with: similarity (percent), deviations, progress, complete
        """
        result = {
            'similarity': 0,
            'deviations': {},
            'progress': 0.0,
            'complete': False,
        }

        # Frames outside a hold are ignored
        if self.accumulator is None:
            return result

        angles = extract_angles(landmarks)
        similarity = self.accumulator.add_frame(angles, timestamp)

        progress = self.accumulator.hold_progress(timestamp)
        result['similarity'] = similarity.percent
        result['deviations'] = similarity.deviations
        result['progress'] = progress
        result['complete'] = progress >= 100
        return result

    def finish(self) -> SessionResult:
        """Summarize the current hold and discard its data."""
        if self.accumulator is None:
            raise RuntimeError("No hold in progress")

        session_result = self.accumulator.finalize()
        self.accumulator = None
        return session_result

    def reset(self) -> None:
        """Cancel the current hold."""
        if self.accumulator is not None:
            self.accumulator.reset()
        self.accumulator = None
        logger.info("Hold reset: %s", self.pose.name)


def load_frames(path: str, fps: float = 30.0) -> List[Tuple[float, List[Point3D]]]:
    """
    Load recorded frames from JSON.

    Frames without a timestamp are spaced 1/fps seconds apart.

    Raises:
        ValueError: If the document or a frame is malformed
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    raw_frames = data.get('frames', []) if isinstance(data, dict) else data
    if not isinstance(raw_frames, list):
        raise ValueError(f"{path}: expected a list of frames")

    frames = []
    for i, raw in enumerate(raw_frames):
        if not isinstance(raw, dict) or not isinstance(raw.get('landmarks'), list):
            raise ValueError(f"{path}: frame {i} has no landmarks list")

        timestamp = raw.get('timestamp')
        if timestamp is None:
            timestamp = i / fps
        try:
            timestamp = float(timestamp)
            landmarks = [Point3D.from_sequence(lm) for lm in raw['landmarks']]
        except (TypeError, ValueError, IndexError) as e:
            raise ValueError(f"{path}: frame {i} is malformed ({e})") from e

        if len(landmarks) != config.NUM_LANDMARKS:
            logger.warning(
                "Frame %d has %d landmarks, expected %d",
                i, len(landmarks), config.NUM_LANDMARKS
            )
        frames.append((timestamp, landmarks))

    return frames


def replay(
    pipeline: HoldEvaluationPipeline,
    frames: List[Tuple[float, List[Point3D]]]
) -> SessionResult:
    """Run recorded frames through a hold, stopping once it completes."""
    start_time = frames[0][0] if frames else None
    pipeline.begin(start_time)

    complete = False
    for timestamp, landmarks in frames:
        result = pipeline.process_landmarks(landmarks, timestamp)
        logger.debug(
            "t=%.2fs similarity=%d%% progress=%.0f%%",
            timestamp, result['similarity'], result['progress']
        )
        if result['complete']:
            complete = True
            break

    if not complete:
        logger.warning("Recording ended before the hold duration was reached")

    return pipeline.finish()


def format_summary(pose_name: str, session_result: SessionResult) -> str:
    lines = [
        f"Pose:      {pose_name}",
        f"Grade:     {session_result.grade.value}",
        f"Accuracy:  {session_result.accuracy}%",
        f"Stability: {session_result.stability}%",
        f"Symmetry:  {session_result.symmetry}%",
    ]
    if session_result.feedback:
        lines.append("Feedback:")
        lines.extend(f"  - {hint}" for hint in session_result.feedback)
    return "\n".join(lines)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Pose Hold Evaluation - replay recorded landmarks',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--library', type=str, default=config.POSE_LIBRARY_PATH,
                        help='Path to pose library YAML')

    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument('--list', action='store_true',
                            help='List poses in the library')
    mode_group.add_argument('--challenge', action='store_true',
                            help='List challenge levels')
    mode_group.add_argument('--pose', type=str, help='Pose slug to evaluate')

    parser.add_argument('--frames', type=str,
                        help='Recorded landmark frames (JSON), required with --pose')
    parser.add_argument('--fps', type=float, default=30.0,
                        help='Frame rate for frames without timestamps')
    parser.add_argument('--json', action='store_true',
                        help='Print the summary as JSON')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args(argv)
    if args.pose and not args.frames:
        parser.error('--frames is required with --pose')
    return args


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT
    )

    try:
        library = PoseLibrary.load(args.library)

        if args.list:
            for pose in library:
                print(f"{pose.slug:<24} {pose.name:<28} {pose.difficulty:<13} {pose.hold_seconds:.0f}s")
            return 0

        if args.challenge:
            for level in library.challenge_levels():
                print(f"Level {level.level}: {level.name} ({level.difficulty})")
            return 0

        pipeline = HoldEvaluationPipeline(library, args.pose)
        frames = load_frames(args.frames, fps=args.fps)
        session_result = replay(pipeline, frames)

    except PoseNotFoundError as e:
        logger.error("Unknown pose: %s", e.args[0])
        return 1
    # PoseLibraryError and json.JSONDecodeError are ValueErrors
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if args.json:
        print(json.dumps(session_result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_summary(pipeline.pose.name, session_result))
    return 0


if __name__ == '__main__':
    sys.exit(main())
