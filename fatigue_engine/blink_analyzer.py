"""
Blink Analysis Module
Debounced blink registration and rolling blink rate
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from fatigue_engine.config import BLINK_DEBOUNCE_SECONDS, BLINK_RATE_WINDOW
from fatigue_engine.data_structures import EyeState

logger = logging.getLogger(__name__)

DEBOUNCE_MS = round(BLINK_DEBOUNCE_SECONDS * 1000)
WINDOW_MS = round(BLINK_RATE_WINDOW * 1000)

# Debounce bounds how many blinks can fit in one window
MAX_BLINKS_IN_WINDOW = int(math.ceil(BLINK_RATE_WINDOW / BLINK_DEBOUNCE_SECONDS)) + 1


@dataclass
class BlinkState:
    blink_timestamps: Deque[float] = field(
        default_factory=lambda: deque(maxlen=MAX_BLINKS_IN_WINDOW)
    )
    last_blink_ts: Optional[float] = None


def _elapsed_ms(earlier, later):
    # whole milliseconds, so boundaries do not depend on float rounding
    return round(later * 1000) - round(earlier * 1000)


class BlinkAnalyzer:
    """
    Counts blinks from per-frame eye states.

    A blink is registered on any closed-eye frame that comes at least
    BLINK_DEBOUNCE_SECONDS after the previously registered blink. The blink
    rate is the number of blinks in the trailing BLINK_RATE_WINDOW seconds.
    """

    def __init__(self):
        """Initialize blink analyzer."""
        self.state = BlinkState()

    def reset(self):
        self.state = BlinkState()

    def update(self, eye_state, timestamp):
        """
        Update blink tracking with the eye state of a new frame.

        Args:
            eye_state: EyeState of the current frame
            timestamp: Current monotonic timestamp (seconds)

        Returns:
            Current blink rate (blinks in the trailing window)
        """
        st = self.state

        if eye_state == EyeState.CLOSED and (
            st.last_blink_ts is None
            or _elapsed_ms(st.last_blink_ts, timestamp) >= DEBOUNCE_MS
        ):
            st.last_blink_ts = timestamp
            st.blink_timestamps.append(timestamp)
            logger.debug("Blink registered at %.3f", timestamp)

        self._prune(timestamp)
        return len(st.blink_timestamps)

    def _prune(self, timestamp):
        """Drop blinks that are no longer strictly inside the window."""
        blinks = self.state.blink_timestamps
        while blinks and _elapsed_ms(blinks[0], timestamp) >= WINDOW_MS:
            blinks.popleft()

    def calculate_blink_rate(self):
        """Blink count as of the last update."""
        return len(self.state.blink_timestamps)

    def time_since_last_blink(self, current_time):
        """
        Seconds elapsed since the last registered blink.

        Returns:
            Elapsed seconds, or 0.0 before the first blink
        """
        if self.state.last_blink_ts is None:
            return 0.0
        return max(0.0, current_time - self.state.last_blink_ts)
