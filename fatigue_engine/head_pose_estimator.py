"""
Head Pose Estimation Module
Classifies head orientation (center, left, right, down) from face geometry
"""

from fatigue_engine.config import (
    HEAD_HORIZONTAL_THRESHOLD,
    HEAD_VERTICAL_THRESHOLD,
    HEAD_NOSE_DROP_RATIO,
)
from fatigue_engine.data_structures import HeadPosition
from fatigue_engine.landmarks import distance, get_points


class HeadPoseEstimator:
    """
    Estimates head position from the nose tip relative to the face frame.

    Stateless: the nose offset from the eye midpoint is normalized by face
    width (left/right turn) and face height (looking down).
    """

    # MediaPipe Face Mesh landmark indices
    NOSE_TIP = 1
    CHIN_CENTER = 18
    FOREHEAD_CENTER = 9
    LEFT_FACE = 234
    RIGHT_FACE = 454
    LEFT_EYE_CENTER = 159
    RIGHT_EYE_CENTER = 386

    REQUIRED_INDICES = [
        NOSE_TIP,
        CHIN_CENTER,
        FOREHEAD_CENTER,
        LEFT_FACE,
        RIGHT_FACE,
        LEFT_EYE_CENTER,
        RIGHT_EYE_CENTER,
    ]

    def measure(self, frame):
        """
        Compute the normalized nose offsets.

        Args:
            frame: Landmark frame (468 Face Mesh points)

        Returns:
            Tuple of (horizontal_offset, horizontal_ratio, vertical_ratio),
            or None if a landmark is missing or the face is degenerate
        """
        points = get_points(frame, self.REQUIRED_INDICES)
        if points is None:
            return None
        nose, chin, forehead, left_face, right_face, left_eye, right_eye = points

        face_center = (left_eye + right_eye) / 2.0
        face_width = distance(left_face, right_face)
        face_height = distance(forehead, chin)
        if face_width == 0 or face_height == 0:
            return None

        horizontal_offset = float(nose[0] - face_center[0])
        horizontal_ratio = abs(horizontal_offset) / face_width

        expected_nose_y = face_center[1] + face_height * HEAD_NOSE_DROP_RATIO
        vertical_ratio = float(nose[1] - expected_nose_y) / face_height

        return horizontal_offset, horizontal_ratio, vertical_ratio

    def estimate(self, frame):
        """
        Classify head position. Priority: down > left/right > center.

        Args:
            frame: Landmark frame (468 Face Mesh points)

        Returns:
            HeadPosition (CENTER when landmarks are missing)
        """
        measured = self.measure(frame)
        if measured is None:
            return HeadPosition.CENTER
        horizontal_offset, horizontal_ratio, vertical_ratio = measured

        if vertical_ratio > HEAD_VERTICAL_THRESHOLD:
            return HeadPosition.DOWN
        if horizontal_ratio > HEAD_HORIZONTAL_THRESHOLD:
            # Nose moved to the person's right (viewer's left) => positive offset
            return HeadPosition.RIGHT if horizontal_offset > 0 else HeadPosition.LEFT
        return HeadPosition.CENTER
