"""
Landmark Frame Access Module
Safe lookup of named landmarks in a 468-point Face Mesh frame
"""

import math

import numpy as np

FACE_MESH_LANDMARK_COUNT = 468


def has_landmarks(frame):
    """
    Check whether a frame carries any landmarks at all.

    Args:
        frame: Sequence of landmark points, or None

    Returns:
        True if at least one landmark is present
    """
    if frame is None:
        return False
    try:
        return len(frame) > 0
    except TypeError:
        return False


def get_point(frame, index):
    """
    Get the 2D (x, y) coordinates of one landmark.

    Points may be (x, y[, z]) sequences, numpy rows, or objects exposing
    ``x`` and ``y`` attributes (MediaPipe NormalizedLandmark). An index
    outside the frame, a None entry or a non-finite coordinate is treated
    as missing.

    Args:
        frame: Sequence of landmark points
        index: Face Mesh landmark index

    Returns:
        numpy array [x, y] or None if the landmark is missing
    """
    if not has_landmarks(frame) or index < 0 or index >= len(frame):
        return None

    lm = frame[index]
    if lm is None:
        return None

    if hasattr(lm, "x") and hasattr(lm, "y"):
        x, y = lm.x, lm.y
    else:
        try:
            x, y = lm[0], lm[1]
        except (IndexError, TypeError, KeyError):
            return None

    try:
        x, y = float(x), float(y)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None

    return np.array([x, y], dtype=np.float64)


def get_points(frame, indices):
    """
    Look up several landmarks at once.

    Returns:
        List of numpy points, or None if any of them is missing
    """
    points = [get_point(frame, i) for i in indices]
    if any(p is None for p in points):
        return None
    return points


def distance(p1, p2):
    """Euclidean distance between two 2D points."""
    return float(np.linalg.norm(p1 - p2))
