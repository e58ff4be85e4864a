"""
Fatigue Engine Module
Per-session façade that turns landmark frames into fatigue judgments

Each call to process() runs, in this fixed order:
- EAR + eye state + blink rate (ear_detector, blink_analyzer)
- MAR + yawn flag (yawn_detector)
- Head position (head_pose_estimator)
- Drowsiness score (score_calculator)
- Alert level (alert_classifier)
"""

import logging
import time

from fatigue_engine.alert_classifier import classify_alert_level
from fatigue_engine.blink_analyzer import BlinkAnalyzer
from fatigue_engine.data_structures import DetectionResult, EngineStatus, WindowSnapshot
from fatigue_engine.ear_detector import calculate_average_ear, classify_eye_state
from fatigue_engine.errors import EngineNotStartedError, EngineStoppedError
from fatigue_engine.head_pose_estimator import HeadPoseEstimator
from fatigue_engine.landmarks import has_landmarks
from fatigue_engine.score_calculator import FatigueDurationSource, ScoreCalculator
from fatigue_engine.yawn_detector import YawnDetector, frame_mar

logger = logging.getLogger(__name__)


class FatigueEngine:
    """
    Owns every rolling window of one detection session.

    Lifecycle: UNINITIALIZED -> initialize() -> ACTIVE -> stop() -> STOPPED.
    reset() clears all windows while ACTIVE. Calls must be serialized by the
    caller; the engine does no locking and runs no background work.
    """

    def __init__(
        self,
        clock=time.monotonic,
        fatigue_source=FatigueDurationSource.TIME_SINCE_LAST_BLINK,
        frame_source=None,
        session_id=None,
    ):
        """
        Create an engine for one session.

        Args:
            clock: Monotonic clock returning seconds
            fatigue_source: What the fatigue-duration score term measures
            frame_source: Optional handle (e.g. cv2.VideoCapture) released on stop()
            session_id: Optional identifier used in log messages
        """
        self.clock = clock
        self.fatigue_source = FatigueDurationSource(fatigue_source)
        self.frame_source = frame_source
        self.session_id = session_id

        self.status = EngineStatus.UNINITIALIZED
        self.session_start = None
        self.frame_count = 0

        self.blink_analyzer = BlinkAnalyzer()
        self.yawn_detector = YawnDetector()
        self.head_pose = HeadPoseEstimator()
        self.score_calculator = ScoreCalculator()

    def __repr__(self):
        return f"FatigueEngine(session_id={self.session_id!r}, status={self.status.value})"

    def initialize(self):
        """Start the session with empty histories."""
        if self.status == EngineStatus.STOPPED:
            raise EngineStoppedError("Engine has been stopped and cannot be re-initialized")
        if self.status == EngineStatus.ACTIVE:
            logger.debug("Engine %s already active", self.session_id)
            return

        self._clear()
        self.status = EngineStatus.ACTIVE
        logger.info("Fatigue engine started (session=%s, fatigue_source=%s)",
                    self.session_id, self.fatigue_source.value)

    def reset(self):
        """Clear all histories and counters, keeping the session identity."""
        self._ensure_active()
        self._clear()
        logger.info("Fatigue engine reset (session=%s)", self.session_id)

    def stop(self):
        """
        Stop the session for good and release the frame source, if any.

        Calling stop() more than once is harmless.
        """
        if self.status == EngineStatus.STOPPED:
            return
        self.status = EngineStatus.STOPPED
        logger.info("Fatigue engine stopped (session=%s, frames=%d)",
                    self.session_id, self.frame_count)

        source, self.frame_source = self.frame_source, None
        if source is not None:
            release = getattr(source, "release", None) or getattr(source, "close", None)
            if release is not None:
                release()

    def is_ready(self):
        return self.status == EngineStatus.ACTIVE

    def process(self, frame):
        """
        Process one landmark frame.

        Args:
            frame: Sequence of 468 Face Mesh points, or None when no face
                   was detected

        Returns:
            DetectionResult

        Raises:
            EngineNotStartedError: if initialize() was never called
            EngineStoppedError: if stop() was called
        """
        self._ensure_active()
        now = self.clock()

        # No face: neutral result, windows untouched
        if not has_landmarks(frame):
            return DetectionResult.no_face(timestamp=now)

        self.frame_count += 1

        ear = calculate_average_ear(frame)
        eye_state = classify_eye_state(ear)
        blink_rate = self.blink_analyzer.update(eye_state, now)

        mar = frame_mar(frame)
        yawn_detected = self.yawn_detector.update(mar)

        head_position = self.head_pose.estimate(frame)

        score = self.score_calculator.calculate_score(
            ear,
            blink_rate,
            yawn_detected,
            fatigue_minutes=self.fatigue_minutes(now),
        )

        alert_level = classify_alert_level(score, eye_state, yawn_detected)

        return DetectionResult(
            face_detected=True,
            eye_state=eye_state,
            blink_rate=blink_rate,
            yawn_detected=yawn_detected,
            head_position=head_position,
            drowsiness_score=score,
            alert_level=alert_level,
            ear=ear,
            mar=mar,
            timestamp=now,
        )

    def fatigue_minutes(self, now):
        """Input of the fatigue-duration score term, in minutes."""
        if self.fatigue_source == FatigueDurationSource.SESSION_ELAPSED:
            if self.session_start is None:
                return 0.0
            return max(0.0, now - self.session_start) / 60.0
        return self.blink_analyzer.time_since_last_blink(now) / 60.0

    @property
    def windows(self):
        """Copy of the current rolling windows."""
        return WindowSnapshot(
            ear_history=tuple(self.score_calculator.state.ear_history),
            blink_timestamps=tuple(self.blink_analyzer.state.blink_timestamps),
            mar_history=tuple(self.yawn_detector.state.mar_history),
            score_history=tuple(self.score_calculator.state.score_history),
            last_blink_ts=self.blink_analyzer.state.last_blink_ts,
        )

    def _clear(self):
        self.blink_analyzer.reset()
        self.yawn_detector.reset()
        self.score_calculator.reset()
        self.frame_count = 0
        self.session_start = self.clock()

    def _ensure_active(self):
        if self.status == EngineStatus.UNINITIALIZED:
            raise EngineNotStartedError("Engine must be initialized before use")
        if self.status == EngineStatus.STOPPED:
            raise EngineStoppedError("Engine has been stopped")
