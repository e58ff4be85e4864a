"""
Alert-Level Classifier Module
Maps the smoothed score, eye state and yawn flag to safe / warning / critical
"""

from fatigue_engine.config import (
    ALERT_CRITICAL_SCORE,
    ALERT_CRITICAL_CLOSED_SCORE,
    ALERT_WARNING_SCORE,
)
from fatigue_engine.data_structures import AlertLevel, EyeState


def classify_alert_level(score, eye_state, yawn_detected):
    """
    Determine the alert level. First matching branch wins.

    Stability comes from the score's own temporal smoothing; there is no
    separate hysteresis state here.

    Args:
        score: Smoothed drowsiness score (0-100)
        eye_state: EyeState of the current frame
        yawn_detected: Current yawn flag

    Returns:
        AlertLevel
    """
    if score >= ALERT_CRITICAL_SCORE or (
        eye_state == EyeState.CLOSED and score >= ALERT_CRITICAL_CLOSED_SCORE
    ):
        return AlertLevel.CRITICAL
    if score >= ALERT_WARNING_SCORE or eye_state == EyeState.DROWSY or yawn_detected:
        return AlertLevel.WARNING
    return AlertLevel.SAFE
