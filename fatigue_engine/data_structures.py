"""
Data structures that flow out of the fatigue engine.

DetectionResult is produced once per processed frame and is not retained by
the engine. Enum members are str subclasses so they compare equal to the
plain strings used by the transport and persistence layers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EyeState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    DROWSY = "drowsy"


class HeadPosition(str, Enum):
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"


class AlertLevel(str, Enum):
    SAFE = "safe"
    WARNING = "warning"
    CRITICAL = "critical"


class EngineStatus(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    STOPPED = "stopped"


@dataclass(frozen=True)
class DetectionResult:
    """Fatigue judgment for a single landmark frame."""
    face_detected: bool = False
    eye_state: EyeState = EyeState.OPEN
    blink_rate: int = 0
    yawn_detected: bool = False
    head_position: HeadPosition = HeadPosition.CENTER
    drowsiness_score: float = 0.0
    alert_level: AlertLevel = AlertLevel.SAFE
    # Diagnostics (raw per-frame values, None when no face was seen)
    ear: Optional[float] = None
    mar: Optional[float] = None
    timestamp: Optional[float] = None

    @classmethod
    def no_face(cls, timestamp=None):
        """Neutral result emitted when the frame carries no landmarks."""
        return cls(timestamp=timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize with the camelCase keys used by downstream collaborators.

        Returns:
            Dict with plain str/int/float/bool values
        """
        return {
            "faceDetected": self.face_detected,
            "eyeState": self.eye_state.value,
            "blinkRate": self.blink_rate,
            "yawnDetected": self.yawn_detected,
            "headPosition": self.head_position.value,
            "drowsinessScore": self.drowsiness_score,
            "alertLevel": self.alert_level.value,
        }


@dataclass(frozen=True)
class WindowSnapshot:
    """Copy of an engine's rolling windows, for inspection and tests."""
    ear_history: tuple = ()
    blink_timestamps: tuple = ()
    mar_history: tuple = ()
    score_history: tuple = ()
    last_blink_ts: Optional[float] = None
