"""
Camera Utilities Module
Opens a working camera and serves frames with glitch retry and re-open
"""

import logging
import time

import cv2

from fatigue_engine.config import (
    CAMERA_INDEX,
    CAMERA_BACKEND,
    CAMERA_PROBE_COUNT,
    CAMERA_WARMUP_FRAMES,
    CAMERA_SILENT_RETRIES,
    CAMERA_REOPEN_AFTER,
    CAMERA_WARNING_INTERVAL,
    FRAME_WIDTH,
    FRAME_HEIGHT,
    TARGET_FPS,
)
from fatigue_engine.errors import CameraUnavailableError

logger = logging.getLogger(__name__)

_NAMED_BACKENDS = {"DSHOW": "CAP_DSHOW", "MSMF": "CAP_MSMF"}


def backend_candidates(name=CAMERA_BACKEND):
    """
    Backends to probe, in order. None stands for OpenCV's default backend.

    A named backend ("DSHOW", "MSMF") is used alone when this OpenCV build
    has it; "AUTO" tries the Windows backends first, then the default.
    """
    attr = _NAMED_BACKENDS.get(str(name).upper())
    if attr and hasattr(cv2, attr):
        return [getattr(cv2, attr)]
    return [getattr(cv2, a) for a in _NAMED_BACKENDS.values() if hasattr(cv2, a)] + [None]


def probe_order(index=CAMERA_INDEX, backend=CAMERA_BACKEND):
    """(backend, index) pairs to try: the configured index first on every backend."""
    indices = [index] + [i for i in range(CAMERA_PROBE_COUNT) if i != index]
    return [(b, i) for b in backend_candidates(backend) for i in indices]


def _video_capture(index, backend):
    return cv2.VideoCapture(index) if backend is None else cv2.VideoCapture(index, backend)


def _delivers_frames(cap, sleep):
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, FRAME_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, FRAME_HEIGHT)
    cap.set(cv2.CAP_PROP_FPS, TARGET_FPS)
    for _ in range(CAMERA_WARMUP_FRAMES):
        ret, _frame = cap.read()
        if ret:
            return True
        sleep(0.05)
    return False


def open_camera(index=CAMERA_INDEX, backend=CAMERA_BACKEND,
                capture_factory=_video_capture, sleep=time.sleep):
    """
    Open the first camera that actually delivers frames.

    Args:
        index: Preferred camera index
        backend: "AUTO", "DSHOW" or "MSMF"
        capture_factory: Callable (index, backend) -> capture object

    Returns:
        An opened capture object

    Raises:
        CameraUnavailableError: If no index/backend pair yields a frame
    """
    attempts = probe_order(index, backend)
    for be, idx in attempts:
        try:
            cap = capture_factory(idx, be)
            if cap.isOpened() and _delivers_frames(cap, sleep):
                logger.info("Camera opened: index=%d, backend=%s", idx,
                            "DEFAULT" if be is None else be)
                return cap
            cap.release()
        except cv2.error as e:
            logger.debug("Camera probe failed (index=%d, backend=%s): %s", idx, be, e)

    raise CameraUnavailableError(
        "No camera delivered frames (tried backend/index pairs %s). "
        "Close other apps using the camera, or set CAMERA_INDEX / "
        "CAMERA_BACKEND in the environment or .env file." % attempts
    )


class CameraStream:
    """
    Camera frame source for the monitor loop.

    A few failed reads are retried quietly, a longer run of failures is
    warned about, and a camera that stays stuck is re-opened. Hand the
    stream to FatigueEngine as its frame_source so engine.stop() releases
    the device.
    """

    def __init__(self, opener=open_camera, sleep=time.sleep, clock=time.monotonic):
        self._opener = opener
        self._sleep = sleep
        self._clock = clock
        self.capture = opener()
        self.failures = 0
        self.reopen_count = 0
        self._last_warning = None

    def read(self):
        """
        Next valid BGR frame.

        Returns:
            Frame array, or None once the camera is lost and cannot be re-opened
        """
        while self.capture is not None:
            ret, frame = self.capture.read()
            if ret and frame is not None and frame.size > 0:
                self.failures = 0
                return frame

            self.failures += 1
            if self.failures <= CAMERA_SILENT_RETRIES:
                self._sleep(0.01)
            elif self.failures <= CAMERA_REOPEN_AFTER:
                self._warn()
                self._sleep(0.05)
            else:
                self.reopen()
        return None

    def _warn(self):
        now = self._clock()
        if self._last_warning is None or now - self._last_warning > CAMERA_WARNING_INTERVAL:
            logger.warning("Camera glitch detected (%d failures), retrying...", self.failures)
            self._last_warning = now

    def reopen(self):
        """
        Release the device and open a camera again.

        Returns:
            True if a camera is available afterwards
        """
        logger.error("Camera appears stuck, attempting to re-open...")
        self.release()
        self._sleep(0.5)
        try:
            self.capture = self._opener()
        except CameraUnavailableError as e:
            logger.error("Failed to re-open camera: %s", e)
            return False

        self.failures = 0
        self._last_warning = None
        self.reopen_count += 1
        logger.info("Camera re-opened, resuming")
        return True

    def release(self):
        if self.capture is not None:
            self.capture.release()
            self.capture = None
