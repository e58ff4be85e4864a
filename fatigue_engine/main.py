"""
Main Entry Point for the Driver Fatigue Monitor

Pipeline per camera frame:
- face_detector.py: MediaPipe landmarks
- engine.py: fatigue judgment (eye state, yawn, head pose, score, alert level)
- visualizer.py: overlay drawing
- alerter.py: audio cues
- supabase_logger.py: cloud logging of results and alert events

Run with: fatigue-monitor  (or python -m fatigue_engine.main)
Keys: q = quit, r = reset the session's histories, m = mute/unmute audio
"""

import logging
import time

import cv2

from fatigue_engine.alerter import AlertCueSelector, AlertPlayer
from fatigue_engine.camera_utils import CameraStream
from fatigue_engine.config import (
    DRAW_KEY_POINTS,
    DRIVER_ID,
    STATUS_PRINT_EVERY_FRAMES,
    WINDOW_TITLE,
)
from fatigue_engine.engine import FatigueEngine
from fatigue_engine.face_detector import FaceDetector
from fatigue_engine.logging_config import setup_logging
from fatigue_engine.supabase_logger import SupabaseLogger
from fatigue_engine.visualizer import draw_overlay

logger = logging.getLogger(__name__)


def main():
    """Main detection loop."""
    setup_logging()
    logger.info("Starting Driver Fatigue Monitor for driver %s", DRIVER_ID)

    camera = CameraStream()

    face_detector = FaceDetector()
    cue_selector = AlertCueSelector()
    player = AlertPlayer()
    cloud = SupabaseLogger()

    engine = FatigueEngine(frame_source=camera, session_id=cloud.start_session(DRIVER_ID) or DRIVER_ID)
    engine.initialize()

    frame_count = 0
    start_time = time.time()

    try:
        while True:
            frame = camera.read()
            if frame is None:
                logger.error("Camera lost, stopping")
                break

            landmarks = face_detector.detect(frame)
            result = engine.process(landmarks)

            if landmarks and DRAW_KEY_POINTS:
                face_detector.draw_key_points(frame, landmarks)
            draw_overlay(frame, result)
            cv2.imshow(WINDOW_TITLE, frame)

            player.play(cue_selector.select(result, result.timestamp))
            if result.face_detected:
                cloud.log_detection(result)

            frame_count += 1
            if frame_count % STATUS_PRINT_EVERY_FRAMES == 0:
                elapsed = time.time() - start_time
                fps = frame_count / elapsed if elapsed > 0 else 0
                if result.face_detected:
                    logger.info(
                        "FPS: %.1f | Alert: %s | Score: %.1f | EAR: %.3f | Eyes: %s | "
                        "Blinks: %d/min | Yawn: %s | Head: %s",
                        fps, result.alert_level.value, result.drowsiness_score, result.ear,
                        result.eye_state.value, result.blink_rate, result.yawn_detected,
                        result.head_position.value,
                    )
                else:
                    logger.info("FPS: %.1f | No face detected", fps)

            # Handle keyboard input
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('r'):
                engine.reset()
                cue_selector.reset()
                logger.info("Session histories manually reset")
            elif key == ord('m'):
                if player.audio_enabled:
                    player.disable()
                else:
                    player.enable()
                logger.info("Audio alerts %s", "on" if player.audio_enabled else "off")

    finally:
        engine.stop()
        face_detector.close()
        cloud.end_session()
        cv2.destroyAllWindows()
        logger.info("Shutdown complete.")


if __name__ == "__main__":
    main()
