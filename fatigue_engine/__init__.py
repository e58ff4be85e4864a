"""
Driver Fatigue Engine

Turns per-frame facial landmarks into a fatigue judgment:
- EAR detection and eye state
- Blink analysis
- Yawn detection
- Head pose estimation
- Score calculation
- Alert-level classification

Collaborator modules (camera, MediaPipe face detector, Supabase logger,
audio alerts, visualizer) are imported on demand and are not loaded here.
"""

from fatigue_engine.data_structures import (
    AlertLevel,
    DetectionResult,
    EngineStatus,
    EyeState,
    HeadPosition,
)
from fatigue_engine.engine import FatigueEngine
from fatigue_engine.errors import (
    EngineLifecycleError,
    EngineNotStartedError,
    EngineStoppedError,
    FatigueEngineError,
    SessionExistsError,
    SessionNotFoundError,
)
from fatigue_engine.score_calculator import FatigueDurationSource
from fatigue_engine.sessions import SessionRegistry

__version__ = "1.0.0"

__all__ = [
    "AlertLevel",
    "DetectionResult",
    "EngineLifecycleError",
    "EngineNotStartedError",
    "EngineStatus",
    "EngineStoppedError",
    "EyeState",
    "FatigueDurationSource",
    "FatigueEngine",
    "FatigueEngineError",
    "HeadPosition",
    "SessionExistsError",
    "SessionNotFoundError",
    "SessionRegistry",
]
