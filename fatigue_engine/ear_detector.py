"""
EAR (Eye Aspect Ratio) Detection Module
Calculates EAR for single eye, average EAR for both eyes, and eye state
"""

import numpy as np

from fatigue_engine.config import (
    EAR_CLOSED_THRESHOLD,
    EAR_DROWSY_THRESHOLD,
    EAR_DEFAULT_OPEN,
)
from fatigue_engine.data_structures import EyeState
from fatigue_engine.landmarks import get_points

# MediaPipe Face Mesh indices, ordered for calculate_ear:
# outer corner, top outer, top center, inner corner, bottom center, bottom outer
LEFT_EYE_INDICES = [33, 158, 159, 133, 145, 153]
RIGHT_EYE_INDICES = [362, 387, 386, 263, 374, 373]


def calculate_ear(eye_landmarks):
    """
    Calculate EAR for a single eye given 6 (x, y) points.

    Args:
        eye_landmarks: List of 6 (x, y) points ordered as LEFT_EYE_INDICES

    Returns:
        EAR value (float) or None if invalid
    """
    if eye_landmarks is None or len(eye_landmarks) != 6:
        return None

    pts = np.array(eye_landmarks, dtype=np.float64)
    # vertical distances
    v1 = np.linalg.norm(pts[1] - pts[5])
    v2 = np.linalg.norm(pts[2] - pts[4])
    # horizontal distance
    h = np.linalg.norm(pts[0] - pts[3])

    if h == 0:
        return None

    return float((v1 + v2) / (2.0 * h))


def eye_ear(frame, indices):
    """
    EAR of one eye read straight from a landmark frame.

    Missing landmarks fall back to EAR_DEFAULT_OPEN (treated as open).
    """
    ear = calculate_ear(get_points(frame, indices))
    if ear is None:
        return EAR_DEFAULT_OPEN
    return ear


def calculate_average_ear(frame):
    """
    Calculate average EAR from both eyes.

    Args:
        frame: Landmark frame (468 Face Mesh points)

    Returns:
        Average EAR value (float), never None
    """
    le = eye_ear(frame, LEFT_EYE_INDICES)
    re = eye_ear(frame, RIGHT_EYE_INDICES)
    return (le + re) / 2.0


def classify_eye_state(ear):
    """
    Map a raw average EAR to a discrete eye state.

    Buckets are half-open: [0, 0.15) closed, [0.15, 0.20) drowsy, else open.
    """
    if ear < EAR_CLOSED_THRESHOLD:
        return EyeState.CLOSED
    if ear < EAR_DROWSY_THRESHOLD:
        return EyeState.DROWSY
    return EyeState.OPEN
