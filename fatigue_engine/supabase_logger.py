"""
Supabase Cloud Integration Module
Logs detection results and derived alert events to Supabase

Tables:
- detection_logs: One row per logged detection result
- alert_events: Derived when alert level is critical or score > 70
- driver_sessions: Session start/end with summary stats
"""

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

try:
    from supabase import create_client, Client
    SUPABASE_AVAILABLE = True
except ImportError:
    SUPABASE_AVAILABLE = False

from fatigue_engine.config import (
    ALERT_EVENT_SCORE_THRESHOLD,
    SUPABASE_ENABLED,
    SUPABASE_KEY,
    SUPABASE_SNAPSHOT_INTERVAL_SECONDS,
    SUPABASE_URL,
)
from fatigue_engine.data_structures import AlertLevel

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc).isoformat()


def derive_alert_event(result, driver_id=None) -> Optional[Dict[str, Any]]:
    """
    Derive an alert event from a detection result.

    Critical results produce a critical_drowsiness/critical event; any other
    result scoring above ALERT_EVENT_SCORE_THRESHOLD a drowsiness/high event.

    Args:
        result: DetectionResult
        driver_id: Driver the event belongs to

    Returns:
        Alert event row (dict) or None
    """
    critical = result.alert_level == AlertLevel.CRITICAL
    if not critical and result.drowsiness_score <= ALERT_EVENT_SCORE_THRESHOLD:
        return None

    return {
        "driver_id": driver_id,
        "alert_type": "critical_drowsiness" if critical else "drowsiness",
        "severity": "critical" if critical else "high",
        "message": f"Drowsiness detected: {result.drowsiness_score}% drowsiness level",
        "resolved": False,
    }


class SupabaseLogger:
    """
    Logs driver detection data to Supabase.

    Logging strategy:
    - Detection results (every frame, or every N seconds when throttled)
    - Alert events (immediately, never throttled)
    - Session summaries (on session end)
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        supabase_key: Optional[str] = None,
        client=None,
        enabled: bool = SUPABASE_ENABLED,
        snapshot_interval: float = SUPABASE_SNAPSHOT_INTERVAL_SECONDS,
    ):
        """
        Initialize Supabase logger.

        Args:
            supabase_url: Supabase project URL (or from SUPABASE_URL env var)
            supabase_key: Supabase anon key (or from SUPABASE_KEY env var)
            client: Pre-built client object, used instead of create_client
            enabled: Set to False to disable cloud logging
            snapshot_interval: Minimum seconds between logged detections
        """
        self.initialized = False
        self.client: Optional["Client"] = None
        self.snapshot_interval = snapshot_interval

        self.current_session_id: Optional[str] = None
        self.driver_id: Optional[str] = None
        self.session_start_time: Optional[float] = None
        self.last_snapshot_ts: Optional[float] = None
        self.total_alerts = 0
        self.max_score = 0.0

        if not enabled:
            logger.info("Supabase logging disabled by configuration")
            return

        if client is not None:
            self.client = client
            self.initialized = True
            return

        url = supabase_url or SUPABASE_URL
        key = supabase_key or SUPABASE_KEY

        if not url or not key:
            logger.warning("Supabase credentials not provided. Logging disabled. "
                           "Set SUPABASE_URL and SUPABASE_KEY in .env file or environment variables.")
            return

        if not SUPABASE_AVAILABLE:
            logger.warning("supabase package not installed. Logging disabled.")
            return

        try:
            self.client = create_client(url, key)
            self.initialized = True
            logger.info("Supabase logger initialized successfully")
        except Exception as e:
            logger.error("Failed to initialize Supabase logger: %s", e)

    def is_initialized(self) -> bool:
        """Check if logger is initialized and ready."""
        return self.initialized

    def start_session(self, driver_id: str) -> Optional[str]:
        """
        Start a new driving session.

        Returns:
            Session ID (str) or None if not initialized
        """
        if not self.initialized:
            return None

        self.current_session_id = str(uuid.uuid4())
        self.driver_id = driver_id
        self.session_start_time = time.time()
        self.last_snapshot_ts = None
        self.total_alerts = 0
        self.max_score = 0.0

        try:
            self.client.table("driver_sessions").insert({
                "id": self.current_session_id,
                "driver_id": driver_id,
                "start_time": _utcnow(),
                "total_alerts": 0,
                "max_drowsiness_score": 0.0,
            }).execute()
            logger.info("Started driving session %s for driver %s", self.current_session_id, driver_id)
        except Exception as e:
            logger.error("Error starting session: %s", e)
        return self.current_session_id

    def log_detection(self, result) -> Optional[Dict[str, Any]]:
        """
        Log a detection result and any alert event it implies.

        Args:
            result: DetectionResult

        Returns:
            The derived alert event (dict) or None
        """
        if not self.initialized:
            return None

        self.max_score = max(self.max_score, result.drowsiness_score)

        ts = result.timestamp
        throttled = (
            self.snapshot_interval
            and ts is not None
            and self.last_snapshot_ts is not None
            and ts - self.last_snapshot_ts < self.snapshot_interval
        )
        if not throttled:
            self.last_snapshot_ts = ts
            row = {
                "session_id": self.current_session_id,
                "driver_id": self.driver_id,
                "timestamp": _utcnow(),
                "yawn_detected": result.yawn_detected,
                "eye_state": result.eye_state.value,
                "blink_rate": result.blink_rate,
                "head_position": result.head_position.value,
                "drowsiness_score": result.drowsiness_score,
                "alert_level": result.alert_level.value,
            }
            try:
                self.client.table("detection_logs").insert(row).execute()
            except Exception as e:
                logger.error("Error logging detection: %s", e)

        event = derive_alert_event(result, self.driver_id)
        if event is not None:
            self.log_alert(event)
        return event

    def log_alert(self, event: Dict[str, Any]):
        """Insert an alert event row."""
        if not self.initialized:
            return

        self.total_alerts += 1
        try:
            self.client.table("alert_events").insert(
                dict(event, session_id=self.current_session_id, timestamp=_utcnow())
            ).execute()
            logger.info("Alert logged to Supabase: %s (%s)", event["alert_type"], event["severity"])
        except Exception as e:
            logger.error("Error logging alert: %s", e)

    def end_session(self):
        """End current session and log summary."""
        if not self.initialized or not self.current_session_id:
            return

        duration = time.time() - self.session_start_time if self.session_start_time else 0
        summary = {
            "end_time": _utcnow(),
            "total_drive_time": int(duration // 60),  # minutes
            "total_alerts": self.total_alerts,
            "max_drowsiness_score": round(self.max_score, 1),
        }
        try:
            self.client.table("driver_sessions").update(summary).eq(
                "id", self.current_session_id
            ).execute()
            logger.info("Session ended: %s (Duration: %.1fs)", self.current_session_id, duration)
        except Exception as e:
            logger.error("Error ending session: %s", e)
        finally:
            self.current_session_id = None
            self.session_start_time = None
