"""
Visualization Module
Draws the detection result on the video frame
"""

import cv2

from fatigue_engine.data_structures import AlertLevel

# Alert level color mapping (BGR)
ALERT_COLORS = {
    AlertLevel.SAFE: (0, 255, 0),        # Green
    AlertLevel.WARNING: (0, 165, 255),   # Orange
    AlertLevel.CRITICAL: (0, 0, 255),    # Red
}


def draw_overlay(frame, result):
    """
    Draw all metrics of a detection result on the frame.

    Args:
        frame: BGR image frame
        result: DetectionResult
    """
    if not result.face_detected:
        cv2.putText(frame, "No face detected", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        return frame

    color = ALERT_COLORS.get(result.alert_level, (255, 255, 255))

    # Draw alert level and score
    cv2.putText(frame, f"Alert: {result.alert_level.value.upper()}", (10, 30),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)
    cv2.putText(frame, f"Score: {result.drowsiness_score:.1f}/100", (10, 60),
                cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, 2)

    # Draw numeric metrics in black for better visibility on light backgrounds
    if result.ear is not None:
        cv2.putText(frame, f"EAR: {result.ear:.3f}  Eyes: {result.eye_state.value}", (10, 90),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1)
    if result.mar is not None:
        cv2.putText(frame, f"MAR: {result.mar:.3f}", (10, 110),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1)
    cv2.putText(frame, f"Blink Rate: {result.blink_rate}/min", (10, 130),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1)
    cv2.putText(frame, f"Head: {result.head_position.value}", (10, 150),
                cv2.FONT_HERSHEY_SIMPLEX, 0.5, (0, 0, 0), 1)

    if result.yawn_detected:
        cv2.putText(frame, "YAWNING DETECTED", (10, 190),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 0, 255), 3)

    # Draw alert banner
    if result.alert_level != AlertLevel.SAFE:
        alert_y = frame.shape[0] - 30
        alert_text = f"{result.alert_level.value.upper()} - DROWSINESS {result.drowsiness_score:.0f}%"
        thickness = 3 if result.alert_level == AlertLevel.CRITICAL else 2

        # Draw background rectangle for better visibility
        text_size = cv2.getTextSize(alert_text, cv2.FONT_HERSHEY_SIMPLEX, 0.7, thickness)[0]
        cv2.rectangle(
            frame,
            (10, alert_y - text_size[1] - 5),
            (10 + text_size[0] + 10, alert_y + 5),
            (0, 0, 0),
            -1
        )
        cv2.putText(frame, alert_text, (15, alert_y),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, color, thickness)

    return frame
