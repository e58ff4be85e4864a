import pytest

from fatigue_engine.data_structures import HeadPosition
from fatigue_engine.head_pose_estimator import HeadPoseEstimator


@pytest.fixture
def estimator():
    return HeadPoseEstimator()


@pytest.mark.parametrize(
    "head, expected",
    [
        ("center", HeadPosition.CENTER),
        ("left", HeadPosition.LEFT),
        ("right", HeadPosition.RIGHT),
        ("down", HeadPosition.DOWN),
    ],
)
def test_head_positions(estimator, frame_factory, head, expected):
    assert estimator.estimate(frame_factory(head=head)) == expected


def test_down_wins_over_turn(estimator, frame_factory):
    frame = frame_factory(head="down")
    x, y, z = frame[1]
    frame[1] = (x + 0.1, y, z)
    assert estimator.estimate(frame) == HeadPosition.DOWN


def test_measure_ratios(estimator, frame_factory):
    offset, horizontal, vertical = estimator.measure(frame_factory(head="right", ear=0.0))
    assert offset == pytest.approx(0.1)
    # face width 0.5
    assert horizontal == pytest.approx(0.2)
    # face height 0.6, nose exactly at the expected drop
    assert vertical == pytest.approx(0.0)


@pytest.mark.parametrize("idx", HeadPoseEstimator.REQUIRED_INDICES)
def test_missing_landmark_is_center(estimator, frame_factory, idx):
    assert estimator.estimate(frame_factory(head="down", missing=[idx])) == HeadPosition.CENTER


def test_degenerate_face_is_center(estimator, frame_factory):
    frame = frame_factory(head="left")
    frame[454] = frame[234]
    assert estimator.estimate(frame) == HeadPosition.CENTER
