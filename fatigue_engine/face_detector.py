"""
Face Detection Module
MediaPipe Face Mesh landmark source for the fatigue engine
"""

import cv2
import mediapipe as mp

from fatigue_engine.config import (
    MAX_NUM_FACES,
    MIN_DETECTION_CONFIDENCE,
    MIN_TRACKING_CONFIDENCE,
)
from fatigue_engine.ear_detector import LEFT_EYE_INDICES, RIGHT_EYE_INDICES
from fatigue_engine.head_pose_estimator import HeadPoseEstimator
from fatigue_engine.yawn_detector import MOUTH_INDICES

mp_face_mesh = mp.solutions.face_mesh

# Landmarks the engine reads, drawn as key points
KEY_POINT_INDICES = sorted(
    set(LEFT_EYE_INDICES)
    | set(RIGHT_EYE_INDICES)
    | set(MOUTH_INDICES)
    | set(HeadPoseEstimator.REQUIRED_INDICES)
)


class FaceDetector:
    """
    MediaPipe Face Mesh detector producing landmark frames.

    A landmark frame is a list of 468 (x, y, z) tuples in normalized image
    coordinates, or None when no face is found.
    """

    def __init__(self):
        """Initialize face detector."""
        self.face_mesh = mp_face_mesh.FaceMesh(
            static_image_mode=False,
            max_num_faces=MAX_NUM_FACES,
            refine_landmarks=True,
            min_detection_confidence=MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=MIN_TRACKING_CONFIDENCE,
        )

    def detect(self, frame):
        """
        Detect face landmarks from frame.

        Args:
            frame: BGR image frame

        Returns:
            List of (x, y, z) tuples or None if no face detected
        """
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        results = self.face_mesh.process(rgb)

        if not results.multi_face_landmarks:
            return None

        face_landmarks = results.multi_face_landmarks[0]
        return [(lm.x, lm.y, lm.z) for lm in face_landmarks.landmark]

    def close(self):
        self.face_mesh.close()

    def draw_key_points(self, frame, landmarks, color=(109, 230, 255), radius=3):
        """
        Draw the landmarks used by the engine on frame.

        Args:
            frame: BGR image frame
            landmarks: Landmark frame returned by detect()
            color: BGR color tuple
            radius: Point radius in pixels
        """
        if not landmarks:
            return frame

        h, w = frame.shape[:2]
        for idx in KEY_POINT_INDICES:
            if idx < len(landmarks):
                x, y = landmarks[idx][0], landmarks[idx][1]
                cv2.circle(frame, (int(x * w), int(y * h)), radius, color, -1)
        return frame
