"""
Pose Library
Loads target pose definitions and challenge levels from a YAML file.

The engine only reads target angles, tolerances, weights and the hold
duration; the remaining fields are presentation metadata passed through
for the host.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

import yaml

import config

logger = logging.getLogger(__name__)


class PoseLibraryError(ValueError):
    """Raised when a pose library document is malformed."""


class PoseNotFoundError(KeyError):
    """Raised when a requested pose slug is not in the library."""


@dataclass(frozen=True)
class PoseDefinition:
    """Reference pose from the library."""
    slug: str
    name: str
    target_angles: Dict[str, float]
    tolerances: Dict[str, float] = field(default_factory=dict)
    weights: Dict[str, float] = field(default_factory=dict)
    difficulty: str = "beginner"
    short: str = ""
    thumbnail: str = ""
    steps: Tuple[str, ...] = ()
    tips: Tuple[str, ...] = ()
    hold_seconds: float = config.DEFAULT_HOLD_SECONDS


@dataclass(frozen=True)
class ChallengeLevel:
    """One step of the ordered challenge."""
    level: int
    slug: str
    name: str
    difficulty: str


def _float_mapping(
    raw,
    pose_slug: str,
    key: str,
    positive: bool = False
) -> Dict[str, float]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise PoseLibraryError(f"Pose '{pose_slug}': '{key}' must be a mapping")

    values = {}
    for name, value in raw.items():
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise PoseLibraryError(
                f"Pose '{pose_slug}': {key}.{name} is not a number: {value!r}"
            ) from None
        if positive and not number > 0:
            raise PoseLibraryError(
                f"Pose '{pose_slug}': {key}.{name} must be positive, got {value!r}"
            )
        values[str(name)] = number
    return values


def parse_pose(pose_data: Dict) -> PoseDefinition:
    """Build a PoseDefinition from one library entry."""
    if not isinstance(pose_data, dict):
        raise PoseLibraryError(f"Pose entry must be a mapping, got {pose_data!r}")

    slug = pose_data.get("slug")
    if not slug:
        raise PoseLibraryError("Pose entry without a slug")

    # Accept both the camelCase keys of the web catalog and snake_case
    raw_targets = pose_data.get("targetAngles", pose_data.get("target_angles"))
    if not raw_targets:
        raise PoseLibraryError(f"Pose '{slug}' has no target angles")

    try:
        hold_seconds = float(pose_data.get("hold_seconds") or config.DEFAULT_HOLD_SECONDS)
    except (TypeError, ValueError):
        raise PoseLibraryError(
            f"Pose '{slug}': hold_seconds is not a number: {pose_data['hold_seconds']!r}"
        ) from None

    return PoseDefinition(
        slug=slug,
        name=pose_data.get("name", slug),
        target_angles=_float_mapping(raw_targets, slug, "targetAngles"),
        # Tolerances divide the deviation, weights normalize the mean
        tolerances=_float_mapping(
            pose_data.get("tolerances"), slug, "tolerances", positive=True
        ),
        weights=_float_mapping(pose_data.get("weights"), slug, "weights", positive=True),
        difficulty=pose_data.get("difficulty", "beginner"),
        short=pose_data.get("short", ""),
        thumbnail=pose_data.get("thumbnail", ""),
        steps=tuple(pose_data.get("steps") or ()),
        tips=tuple(pose_data.get("tips") or ()),
        hold_seconds=hold_seconds,
    )


def parse_challenge_level(entry: Dict) -> ChallengeLevel:
    """Build a ChallengeLevel from one challenge entry."""
    if not isinstance(entry, dict) or "level" not in entry or not entry.get("slug"):
        raise PoseLibraryError(f"Challenge entry needs a level and a slug: {entry!r}")

    try:
        level = int(entry["level"])
    except (TypeError, ValueError):
        raise PoseLibraryError(
            f"Challenge level must be an integer: {entry['level']!r}"
        ) from None

    return ChallengeLevel(
        level=level,
        slug=entry["slug"],
        name=entry.get("name", entry["slug"]),
        difficulty=entry.get("difficulty", "beginner"),
    )


class PoseLibrary:
    """
    Read-only collection of pose definitions.

    Example:
        >>> library = PoseLibrary.load("data/pose_library.yaml")
        >>> pose = library.require("warrior-ii")
        >>> pose.target_angles["left_elbow_angle"]
        180.0
    """

    def __init__(
        self,
        poses: List[PoseDefinition],
        challenge: Optional[List[ChallengeLevel]] = None
    ):
        self._poses: Dict[str, PoseDefinition] = {}
        for pose in poses:
            if pose.slug in self._poses:
                logger.warning("Duplicate pose slug '%s', keeping the last one", pose.slug)
            self._poses[pose.slug] = pose
        self._challenge = list(challenge or [])

    @classmethod
    def from_dict(cls, data: Dict) -> "PoseLibrary":
        """Build a library from an already parsed document."""
        if not isinstance(data, dict) or not isinstance(data.get("library"), list):
            raise PoseLibraryError("Pose library must contain a 'library' list")

        poses = [parse_pose(entry) for entry in data["library"]]

        challenge = [parse_challenge_level(entry) for entry in data.get("challenge") or []]
        challenge.sort(key=lambda lvl: lvl.level)

        return cls(poses, challenge)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "PoseLibrary":
        """Load pose library from YAML file (default from config)."""
        path = Path(path or config.POSE_LIBRARY_PATH)
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise PoseLibraryError(f"Invalid YAML in {path}: {e}") from e

        library = cls.from_dict(data)
        logger.info("Loaded %d poses from %s", len(library), path)
        return library

    # Alias
    from_yaml = load

    def get(self, slug: str) -> Optional[PoseDefinition]:
        """Get a pose by slug, None if absent."""
        return self._poses.get(slug)

    def require(self, slug: str) -> PoseDefinition:
        pose = self._poses.get(slug)
        if pose is None:
            raise PoseNotFoundError(slug)
        return pose

    def slugs(self) -> List[str]:
        return list(self._poses.keys())

    def challenge_levels(self) -> List[ChallengeLevel]:
        return list(self._challenge)

    def __len__(self) -> int:
        return len(self._poses)

    def __contains__(self, slug: str) -> bool:
        return slug in self._poses

    def __iter__(self) -> Iterator[PoseDefinition]:
        return iter(self._poses.values())
