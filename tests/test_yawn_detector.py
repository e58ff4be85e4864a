import pytest

from fatigue_engine.yawn_detector import YawnDetector, calculate_mar, frame_mar


def test_calculate_mar():
    # top, bottom, left, right
    assert calculate_mar([(0, 1), (0, -1), (-2, 0), (2, 0)]) == pytest.approx(0.5)
    assert calculate_mar([(0, 1), (0, -1), (0, 0), (0, 0)]) is None
    assert calculate_mar([(0, 1)]) is None


def test_frame_mar(frame_factory):
    assert frame_mar(frame_factory(mar=0.4)) == pytest.approx(0.4)


@pytest.mark.parametrize("idx", [13, 14, 78, 308])
def test_missing_mouth_landmark_means_closed(frame_factory, idx):
    assert frame_mar(frame_factory(mar=0.4, missing=[idx])) == 0.0


def test_single_spike_is_not_a_yawn():
    detector = YawnDetector()
    for _ in range(9):
        assert detector.update(0.0) is False
    # mean of 10 samples = 0.05
    assert detector.update(0.5) is False


def test_sustained_opening_is_a_yawn():
    detector = YawnDetector()
    results = [detector.update(0.1) for _ in range(10)]
    assert all(results)
    assert detector.get_smoothed_mar() == pytest.approx(0.1)


@pytest.mark.parametrize("mar, expected", [(0.065, False), (0.075, True)])
def test_threshold(mar, expected):
    detector = YawnDetector()
    for _ in range(9):
        detector.update(mar)
    assert detector.update(mar) is expected


def test_history_is_bounded_and_yawn_ends():
    detector = YawnDetector()
    for _ in range(10):
        detector.update(0.3)
    for _ in range(10):
        last = detector.update(0.0)
    assert last is False
    assert len(detector.state.mar_history) == 10


def test_reset():
    detector = YawnDetector()
    detector.update(0.3)
    detector.reset()
    assert detector.get_smoothed_mar() == 0.0
