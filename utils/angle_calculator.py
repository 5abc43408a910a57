"""
Angle Calculator Utility
Geometry primitives for joint angles: 3D points, vector arithmetic and
the three-point angle at a vertex.
"""

import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class Point3D:
    """A landmark position in the detector's normalized 3D space."""
    x: float
    y: float
    z: float

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_sequence(cls, values) -> "Point3D":
        """Build from [x, y, z] (a missing z is taken as 0)."""
        z = values[2] if len(values) > 2 else 0.0
        return cls(float(values[0]), float(values[1]), float(z))


def as_vector(point) -> np.ndarray:
    """Coordinates of any object exposing .x/.y/.z as a float array."""
    return np.array([point.x, point.y, point.z], dtype=np.float64)


def subtract(a, b) -> np.ndarray:
    """Component-wise a - b."""
    return as_vector(a) - as_vector(b)


def dot(u: np.ndarray, v: np.ndarray) -> float:
    return float(np.dot(u, v))


def magnitude(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def angle_between(joint_a, joint_b, joint_c) -> float:
    """
    Calculate the angle at joint_b formed by joint_a-joint_b-joint_c.

    Args:
        joint_a: First point (x, y, z)
        joint_b: Vertex point where the angle is measured
        joint_c: Second point (x, y, z)

    Returns:
        Angle in degrees [0, 180]. 0 when joint_a or joint_c coincides
        with the vertex.
    """
    # Vectors from vertex to each point
    ba = subtract(joint_a, joint_b)
    bc = subtract(joint_c, joint_b)

    norm_ba = magnitude(ba)
    norm_bc = magnitude(bc)
    if norm_ba == 0 or norm_bc == 0:
        return 0.0

    cos_angle = dot(ba, bc) / (norm_ba * norm_bc)

    # Clamp to valid range for arccos
    cos_angle = np.clip(cos_angle, -1.0, 1.0)

    return float(np.degrees(np.arccos(cos_angle)))
