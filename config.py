"""
Pose Hold Evaluation Configuration
==================================

Central configuration file for all engine parameters.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# =============================================================================
# Pose Library Settings
# =============================================================================
POSE_LIBRARY_PATH = os.getenv(
    "POSE_LIBRARY_PATH",
    str(BASE_DIR / "data" / "pose_library.yaml")
)
NUM_LANDMARKS = 33            # MediaPipe Pose landmark count
DEFAULT_HOLD_SECONDS = 30     # Used when a pose has no hold_seconds

# =============================================================================
# Similarity Settings
# =============================================================================
DEFAULT_TOLERANCE = 30.0      # Degrees at which an angle scores 0
DEFAULT_WEIGHT = 1.0

# =============================================================================
# Stability / Symmetry Settings
# =============================================================================
STABILITY_MAX_STD = 15.0      # Std dev (degrees) where stability reaches 0
SYMMETRY_MAX_DIFF = 180.0     # Left/right difference where symmetry reaches 0
STABILITY_PENALTY = 0.9       # Default stability factor for session score

# =============================================================================
# Grading Settings
# =============================================================================
GRADE_ADVANCED_THRESHOLD = 80
GRADE_INTERMEDIATE_THRESHOLD = 60

# =============================================================================
# Feedback Settings
# =============================================================================
FEEDBACK_MIN_DEVIATION = 10.0  # Deviations below this are not worth a hint
FEEDBACK_MAX_HINTS = 3

# =============================================================================
# Logging Settings
# =============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
