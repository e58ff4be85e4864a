"""
Audio Alert Module
Selects an audio cue for each detection result and plays it

Cue selection (first match wins, shared re-trigger clock):
- critical alert level: CRITICAL cue, at most every 2s
- warning alert level:  WARNING cue, at most every 4s
- yawn detected:        NOTIFICATION cue, at most every 3s
- eyes closed:          WARNING cue, at most every 1.5s
"""

import logging
import sys
import threading
import time
from array import array
from enum import Enum

try:
    import pygame
    pygame_available = True
except ImportError:
    pygame_available = False

from fatigue_engine.config import (
    CUE_CRITICAL_INTERVAL_SECONDS,
    CUE_WARNING_INTERVAL_SECONDS,
    CUE_YAWN_INTERVAL_SECONDS,
    CUE_EYES_CLOSED_INTERVAL_SECONDS,
)
from fatigue_engine.data_structures import AlertLevel, EyeState

logger = logging.getLogger(__name__)


class AlertCue(str, Enum):
    NOTIFICATION = "notification"
    WARNING = "warning"
    CRITICAL = "critical"


# (frequency Hz, duration s, pause after s) per beep
CUE_PATTERNS = {
    AlertCue.NOTIFICATION: [(800, 0.2, 0.0)],
    AlertCue.WARNING: [(600, 0.3, 0.1), (600, 0.3, 0.0)],
    AlertCue.CRITICAL: [(400, 0.5, 0.2)] * 3,
}


def _beep(frequency_hz: int, duration_s: float):
    """
    Cross-platform beep:
    - Windows: winsound.Beep (reliable)
    - Else: pygame mixer tone
    """
    if sys.platform.startswith("win"):
        import winsound
        winsound.Beep(int(frequency_hz), int(duration_s * 1000))
        return

    if not pygame_available:
        return

    sample_rate = 22050
    n_samples = int(duration_s * sample_rate)
    # simple square-ish wave
    buf = array("h")
    period = max(1, int(sample_rate / max(1, frequency_hz)))
    amp = 12000
    for i in range(n_samples):
        buf.append(amp if (i % period) < (period // 2) else -amp)
    sound = pygame.mixer.Sound(buffer=buf.tobytes())
    sound.play()
    time.sleep(duration_s)


class AlertCueSelector:
    """
    Decides which cue (if any) a detection result should sound.

    All cues share one last-played timestamp; each branch has its own
    minimum interval since that timestamp.
    """

    def __init__(self):
        self.last_cue_ts = None

    def reset(self):
        self.last_cue_ts = None

    @staticmethod
    def candidate(result):
        """
        Cue a result calls for, ignoring re-trigger intervals.

        Returns:
            Tuple of (AlertCue, min_interval_seconds) or None
        """
        if result.alert_level == AlertLevel.CRITICAL:
            return AlertCue.CRITICAL, CUE_CRITICAL_INTERVAL_SECONDS
        if result.alert_level == AlertLevel.WARNING:
            return AlertCue.WARNING, CUE_WARNING_INTERVAL_SECONDS
        if result.yawn_detected:
            return AlertCue.NOTIFICATION, CUE_YAWN_INTERVAL_SECONDS
        if result.eye_state == EyeState.CLOSED:
            return AlertCue.WARNING, CUE_EYES_CLOSED_INTERVAL_SECONDS
        return None

    def select(self, result, now):
        """
        Pick the cue to play for this result.

        Args:
            result: DetectionResult
            now: Current timestamp (seconds)

        Returns:
            AlertCue to play, or None
        """
        candidate = self.candidate(result)
        if candidate is None:
            return None
        cue, interval = candidate

        if self.last_cue_ts is not None and now - self.last_cue_ts <= interval:
            return None

        self.last_cue_ts = now
        return cue


class AlertPlayer:
    """Plays alert cues on a background thread with pygame."""

    def __init__(self, enabled=True):
        """Initialize audio output."""
        self.audio_enabled = False
        self.mixer_ready = False
        self.alert_thread = None

        if not enabled:
            return
        if not pygame_available:
            logger.warning("pygame not available, audio alerts disabled")
            return
        try:
            pygame.mixer.init()
            self.mixer_ready = True
            self.audio_enabled = True
        except pygame.error as e:
            logger.warning("Audio alerts disabled (pygame mixer not available): %s", e)

    def enable(self):
        self.audio_enabled = self.mixer_ready or sys.platform.startswith("win")

    def disable(self):
        self.audio_enabled = False

    def play(self, cue):
        """
        Play a cue unless audio is off or another cue is still sounding.

        Returns:
            True if playback started
        """
        if not self.audio_enabled or cue is None:
            return False
        if self.alert_thread and self.alert_thread.is_alive():
            return False

        self.alert_thread = threading.Thread(
            target=self._play_pattern, args=(AlertCue(cue),), daemon=True
        )
        self.alert_thread.start()
        return True

    def _play_pattern(self, cue):
        try:
            for frequency, duration, pause in CUE_PATTERNS[cue]:
                _beep(frequency, duration)
                if pause:
                    time.sleep(pause)
        except Exception as e:
            logger.warning("Audio alert error (%s): %s", cue.value, e)
