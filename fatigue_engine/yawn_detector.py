"""
Yawn Detection Module
Detects yawning using MAR (Mouth Aspect Ratio) with smoothing
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Deque

import numpy as np

from fatigue_engine.config import MAR_YAWN_THRESHOLD, MAR_SMOOTHING_WINDOW
from fatigue_engine.landmarks import get_points

# MediaPipe Face Mesh mouth landmarks, order: top, bottom, left, right
MOUTH_INDICES = [13, 14, 78, 308]


def calculate_mar(mouth_landmarks):
    """
    Calculate MAR (Mouth Aspect Ratio) for yawn detection.

    MAR = (vertical distance between lips) / (horizontal distance between corners)

    Args:
        mouth_landmarks: List of 4 (x, y) points [top, bottom, left, right]

    Returns:
        MAR value (float) or None if invalid
    """
    if mouth_landmarks is None or len(mouth_landmarks) != 4:
        return None

    top, bottom, left, right = (np.asarray(p, dtype=np.float64) for p in mouth_landmarks)

    vertical_dist = np.linalg.norm(top - bottom)
    horizontal_dist = np.linalg.norm(left - right)

    if horizontal_dist == 0:
        return None

    return float(vertical_dist / horizontal_dist)


def frame_mar(frame):
    """MAR read from a landmark frame; 0.0 (mouth closed) when landmarks are missing."""
    mar = calculate_mar(get_points(frame, MOUTH_INDICES))
    return 0.0 if mar is None else mar


@dataclass
class YawnState:
    mar_history: Deque[float] = field(
        default_factory=lambda: deque(maxlen=MAR_SMOOTHING_WINDOW)
    )


class YawnDetector:
    """
    Reports a yawn while the mouth has been open on average across the
    last MAR_SMOOTHING_WINDOW frames. Single-frame spikes are absorbed by
    the moving average.
    """

    def __init__(self):
        """Initialize yawn detector."""
        self.state = YawnState()

    def reset(self):
        self.state = YawnState()

    def update(self, mar):
        """
        Add a raw MAR sample and return the yawn flag.

        Args:
            mar: Raw Mouth Aspect Ratio of the current frame

        Returns:
            True if the smoothed MAR is above MAR_YAWN_THRESHOLD
        """
        self.state.mar_history.append(mar)
        return self.get_smoothed_mar() > MAR_YAWN_THRESHOLD

    def get_smoothed_mar(self):
        """
        Get the moving average of recent MAR samples.

        Returns:
            Smoothed MAR (float), 0.0 with no history
        """
        if not self.state.mar_history:
            return 0.0
        return float(np.mean(self.state.mar_history))
