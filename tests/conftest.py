import math

import pytest
import yaml

from pose_evaluation import PoseLandmark
from utils.angle_calculator import Point3D
from utils.pose_library import PoseDefinition, PoseLibrary


def _rotate_towards(vertex, reference, angle_deg, length=0.5):
    """Point at `length` from vertex whose ray makes angle_deg with vertex->reference (xy plane)."""
    vx, vy = reference.x - vertex.x, reference.y - vertex.y
    norm = math.hypot(vx, vy)
    vx, vy = vx / norm, vy / norm
    theta = math.radians(angle_deg)
    rx = vx * math.cos(theta) - vy * math.sin(theta)
    ry = vx * math.sin(theta) + vy * math.cos(theta)
    return Point3D(vertex.x + rx * length, vertex.y + ry * length, vertex.z)


def build_landmarks(left_elbow=180.0, right_elbow=180.0):
    """
    T-pose skeleton (y grows downwards): arms horizontal, legs straight.

    Shoulders 90, hips 180, knees 180; elbows as requested.
    """
    points = [Point3D(0.0, -0.5, 0.0) for _ in range(PoseLandmark.COUNT)]

    points[PoseLandmark.LEFT_SHOULDER] = Point3D(-0.2, 0.0, 0.0)
    points[PoseLandmark.RIGHT_SHOULDER] = Point3D(0.2, 0.0, 0.0)
    points[PoseLandmark.LEFT_ELBOW] = Point3D(-0.7, 0.0, 0.0)
    points[PoseLandmark.RIGHT_ELBOW] = Point3D(0.7, 0.0, 0.0)
    points[PoseLandmark.LEFT_HIP] = Point3D(-0.2, 1.0, 0.0)
    points[PoseLandmark.RIGHT_HIP] = Point3D(0.2, 1.0, 0.0)
    points[PoseLandmark.LEFT_KNEE] = Point3D(-0.2, 2.0, 0.0)
    points[PoseLandmark.RIGHT_KNEE] = Point3D(0.2, 2.0, 0.0)
    points[PoseLandmark.LEFT_ANKLE] = Point3D(-0.2, 3.0, 0.0)
    points[PoseLandmark.RIGHT_ANKLE] = Point3D(0.2, 3.0, 0.0)

    points[PoseLandmark.LEFT_WRIST] = _rotate_towards(
        points[PoseLandmark.LEFT_ELBOW], points[PoseLandmark.LEFT_SHOULDER], left_elbow
    )
    points[PoseLandmark.RIGHT_WRIST] = _rotate_towards(
        points[PoseLandmark.RIGHT_ELBOW], points[PoseLandmark.RIGHT_SHOULDER], right_elbow
    )
    return points


T_POSE_ANGLES = {
    'left_shoulder_angle': 90.0,
    'right_shoulder_angle': 90.0,
    'left_elbow_angle': 180.0,
    'right_elbow_angle': 180.0,
    'left_hip_angle': 180.0,
    'right_hip_angle': 180.0,
    'left_knee_angle': 180.0,
    'right_knee_angle': 180.0,
}


@pytest.fixture
def make_landmarks():
    return build_landmarks


@pytest.fixture
def t_pose_landmarks():
    return build_landmarks()


@pytest.fixture
def elbow_pose():
    return PoseDefinition(
        slug='elbows',
        name='Elbows',
        target_angles={'left_elbow_angle': 90.0, 'right_elbow_angle': 90.0},
        hold_seconds=30,
    )


@pytest.fixture
def library_data():
    return {
        'library': [
            {
                'slug': 't-pose',
                'name': 'T Pose',
                'difficulty': 'beginner',
                'targetAngles': dict(T_POSE_ANGLES),
                'hold_seconds': 2,
            },
            {
                'slug': 'elbow-bend',
                'name': 'Elbow Bend',
                'difficulty': 'intermediate',
                'targetAngles': {'left_elbow_angle': 90, 'right_elbow_angle': 90},
                'tolerances': {'left_elbow_angle': 20},
                'weights': {'right_elbow_angle': 2},
            },
        ],
        'challenge': [
            {'level': 2, 'slug': 'elbow-bend', 'name': 'Elbow Bend', 'difficulty': 'intermediate'},
            {'level': 1, 'slug': 't-pose', 'name': 'T Pose', 'difficulty': 'beginner'},
        ],
    }


@pytest.fixture
def library(library_data):
    return PoseLibrary.from_dict(library_data)


@pytest.fixture
def library_file(tmp_path, library_data):
    path = tmp_path / 'poses.yaml'
    path.write_text(yaml.safe_dump(library_data), encoding='utf-8')
    return path


@pytest.fixture
def t_pose_angles():
    return dict(T_POSE_ANGLES)
