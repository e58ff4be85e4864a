"""
Drowsiness Score Calculator Module
Calculates a smoothed drowsiness score (0-100) from the per-frame metrics

Score Weightage:
- Eye closure (smoothed EAR): up to 40 points
- Blink rate abnormality: up to 25 points
- Yawning: 20 points
- Fatigue duration: up to 15 points
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque

import numpy as np

from fatigue_engine.config import (
    EAR_SMOOTHING_WINDOW,
    SCORE_SMOOTHING_WINDOW,
    SCORE_WEIGHT_BASE,
    SCORE_MIN,
    SCORE_MAX,
    EYE_CLOSURE_POINTS,
    BLINK_RATE_HIGH,
    BLINK_RATE_LOW,
    BLINK_RATE_ELEVATED,
    BLINK_RATE_REDUCED,
    BLINK_RATE_HIGH_POINTS,
    BLINK_RATE_LOW_POINTS,
    BLINK_RATE_MODERATE_POINTS,
    YAWN_POINTS,
    FATIGUE_DURATION_POINTS,
)


class FatigueDurationSource(str, Enum):
    """What the fatigue-duration term measures."""
    TIME_SINCE_LAST_BLINK = "time_since_last_blink"
    SESSION_ELAPSED = "session_elapsed"


def eye_closure_points(smoothed_ear):
    for upper_bound, points in EYE_CLOSURE_POINTS:
        if smoothed_ear < upper_bound:
            return points
    return 0


def blink_rate_points(blink_rate):
    """Too many or too few blinks both indicate fatigue."""
    if blink_rate > BLINK_RATE_HIGH:
        return BLINK_RATE_HIGH_POINTS
    if blink_rate < BLINK_RATE_LOW:
        return BLINK_RATE_LOW_POINTS
    if blink_rate > BLINK_RATE_ELEVATED or blink_rate < BLINK_RATE_REDUCED:
        return BLINK_RATE_MODERATE_POINTS
    return 0


def fatigue_duration_points(minutes):
    for lower_bound, points in FATIGUE_DURATION_POINTS:
        if minutes > lower_bound:
            return points
    return 0


def weighted_score(scores):
    """
    Exponentially weighted mean, most recent sample weighted highest.

    Args:
        scores: Sequence of raw scores, oldest first

    Returns:
        Weighted mean rounded to one decimal, 0.0 for an empty sequence
    """
    if len(scores) == 0:
        return 0.0
    weights = np.power(SCORE_WEIGHT_BASE, np.arange(len(scores)))
    mean = float(np.average(np.asarray(scores, dtype=np.float64), weights=weights))
    return round(min(max(mean, SCORE_MIN), SCORE_MAX), 1)


@dataclass
class ScoreState:
    ear_history: Deque[float] = field(
        default_factory=lambda: deque(maxlen=EAR_SMOOTHING_WINDOW)
    )
    score_history: Deque[float] = field(
        default_factory=lambda: deque(maxlen=SCORE_SMOOTHING_WINDOW)
    )


class ScoreCalculator:
    """
    Calculates the drowsiness score with two layers of smoothing: the eye
    closure term uses the mean of the last EAR_SMOOTHING_WINDOW EARs, and
    the final score is a weighted mean of the last SCORE_SMOOTHING_WINDOW
    raw scores so one noisy frame cannot flip the alert level.
    """

    def __init__(self):
        """Initialize score calculator."""
        self.state = ScoreState()
        self.current_score = 0.0

    def reset(self):
        self.state = ScoreState()
        self.current_score = 0.0

    def get_smoothed_ear(self):
        if not self.state.ear_history:
            return None
        return float(np.mean(self.state.ear_history))

    def calculate_raw_score(self, smoothed_ear, blink_rate, yawn_detected, fatigue_minutes):
        """
        Additive score for one frame, clamped to [0, 100].

        Args:
            smoothed_ear: Mean of recent EARs
            blink_rate: Blinks in the trailing minute
            yawn_detected: Current yawn flag
            fatigue_minutes: Fatigue duration in minutes

        Returns:
            Raw score (float)
        """
        score = 0.0
        score += eye_closure_points(smoothed_ear)
        score += blink_rate_points(blink_rate)
        if yawn_detected:
            score += YAWN_POINTS
        score += fatigue_duration_points(fatigue_minutes)
        return float(min(max(score, SCORE_MIN), SCORE_MAX))

    def calculate_score(self, ear, blink_rate, yawn_detected, fatigue_minutes=0.0):
        """
        Calculate the smoothed drowsiness score from the frame metrics.

        Args:
            ear: Raw average EAR of the current frame
            blink_rate: Blinks in the trailing minute
            yawn_detected: Current yawn flag
            fatigue_minutes: Fatigue duration in minutes

        Returns:
            Drowsiness score (0.0 to 100.0, one decimal)
        """
        self.state.ear_history.append(ear)
        smoothed_ear = self.get_smoothed_ear()

        raw = self.calculate_raw_score(smoothed_ear, blink_rate, yawn_detected, fatigue_minutes)
        self.state.score_history.append(raw)

        self.current_score = weighted_score(self.state.score_history)
        return self.current_score
