"""Shared fixtures: a controllable clock and a synthetic Face Mesh frame builder."""

import pytest

from fatigue_engine.engine import FatigueEngine
from fatigue_engine.landmarks import FACE_MESH_LANDMARK_COUNT

EYE_WIDTH = 0.1
MOUTH_WIDTH = 0.1
EYE_Y = 0.4

# Nose positions for each head position (face width 0.5, face height 0.6)
NOSE_POSITIONS = {
    "center": (0.50, 0.46),
    "left": (0.40, 0.46),
    "right": (0.60, 0.46),
    "down": (0.50, 0.66),
}


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now

    def set(self, value):
        self.now = value
        return self.now


def _place_eye(points, outer, inner, top_center, bottom_center, top_outer, bottom_outer,
               x_start, ear):
    half_gap = ear * EYE_WIDTH / 2.0
    points[outer] = (x_start, EYE_Y, 0.0)
    points[inner] = (x_start + EYE_WIDTH, EYE_Y, 0.0)
    points[top_center] = (x_start + EYE_WIDTH / 2.0, EYE_Y - half_gap, 0.0)
    points[bottom_center] = (x_start + EYE_WIDTH / 2.0, EYE_Y + half_gap, 0.0)
    points[top_outer] = (x_start + EYE_WIDTH / 4.0, EYE_Y - half_gap, 0.0)
    points[bottom_outer] = (x_start + EYE_WIDTH / 4.0, EYE_Y + half_gap, 0.0)


def make_frame(ear=0.30, mar=0.0, head="center", missing=()):
    """
    Build a 468-point landmark frame with the requested geometry.

    Args:
        ear: EAR of both eyes
        mar: Mouth aspect ratio
        head: One of NOSE_POSITIONS
        missing: Landmark indices to blank out (set to None)
    """
    points = [(0.5, 0.5, 0.0)] * FACE_MESH_LANDMARK_COUNT

    _place_eye(points, 33, 133, 159, 145, 158, 153, x_start=0.35, ear=ear)
    _place_eye(points, 362, 263, 386, 374, 387, 373, x_start=0.55, ear=ear)

    half_open = mar * MOUTH_WIDTH / 2.0
    points[13] = (0.5, 0.7 - half_open, 0.0)
    points[14] = (0.5, 0.7 + half_open, 0.0)
    points[78] = (0.45, 0.7, 0.0)
    points[308] = (0.55, 0.7, 0.0)

    points[234] = (0.25, 0.5, 0.0)
    points[454] = (0.75, 0.5, 0.0)
    points[9] = (0.5, 0.2, 0.0)
    points[18] = (0.5, 0.8, 0.0)
    nose_x, nose_y = NOSE_POSITIONS[head]
    points[1] = (nose_x, nose_y, 0.0)

    for idx in missing:
        points[idx] = None
    return points


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    eng = FatigueEngine(clock=clock, session_id="test-session")
    eng.initialize()
    return eng


@pytest.fixture
def frame_factory():
    return make_frame
