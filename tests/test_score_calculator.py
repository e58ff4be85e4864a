import pytest

from fatigue_engine.score_calculator import (
    ScoreCalculator,
    blink_rate_points,
    eye_closure_points,
    fatigue_duration_points,
    weighted_score,
)


@pytest.mark.parametrize(
    "ear, points",
    [(0.10, 40), (0.1499, 40), (0.15, 25), (0.1999, 25), (0.20, 10), (0.2199, 10), (0.22, 0), (0.3, 0)],
)
def test_eye_closure_points(ear, points):
    assert eye_closure_points(ear) == points


@pytest.mark.parametrize(
    "rate, points",
    [(0, 15), (4, 15), (5, 10), (7, 10), (8, 0), (20, 0), (30, 0), (31, 10), (35, 10), (36, 25), (80, 25)],
)
def test_blink_rate_points(rate, points):
    assert blink_rate_points(rate) == points


@pytest.mark.parametrize(
    "minutes, points",
    [(0, 0), (30, 0), (30.5, 5), (60, 5), (61, 10), (120, 10), (121, 15)],
)
def test_fatigue_duration_points(minutes, points):
    assert fatigue_duration_points(minutes) == points


def test_raw_score_all_terms_maxed():
    calc = ScoreCalculator()
    assert calc.calculate_raw_score(0.05, 40, True, 180) == 100.0


def test_raw_score_minimum():
    calc = ScoreCalculator()
    assert calc.calculate_raw_score(0.3, 15, False, 0) == 0.0


def test_weighted_score_favors_recent_samples():
    assert weighted_score([]) == 0.0
    assert weighted_score([0, 100]) == 54.5
    assert weighted_score([100, 0]) == 45.5


def test_single_noisy_frame_does_not_reach_warning():
    assert weighted_score([15] * 14 + [100]) < 35


@pytest.mark.parametrize("value", [0, 15, 42.5, 100])
def test_weighted_score_of_constant_is_constant(value):
    assert weighted_score([value] * 15) == value


def test_score_is_bounded_and_one_decimal_under_extremes():
    calc = ScoreCalculator()
    inputs = [
        (0.0, 200, True, 10_000),
        (1.0, 0, False, 0),
        (0.16, 33, True, 45),
        (0.05, 6, False, 90),
    ]
    for _ in range(10):
        for args in inputs:
            score = calc.calculate_score(*args)
            assert 0.0 <= score <= 100.0
            assert score == round(score, 1)


def test_all_terms_maxed_scores_100():
    calc = ScoreCalculator()
    for _ in range(20):
        score = calc.calculate_score(0.05, 40, True, 121)
    assert score == 100.0


def test_converges_to_constant_after_input_change():
    calc = ScoreCalculator()
    for _ in range(15):
        calc.calculate_score(0.05, 40, True, 121)
    # EAR window (20) must flush before raw scores settle, then score window (15)
    for _ in range(35):
        score = calc.calculate_score(0.3, 15, False, 0)
    assert score == 0.0


def test_windows_are_bounded():
    calc = ScoreCalculator()
    for _ in range(100):
        calc.calculate_score(0.3, 15, False, 0)
    assert len(calc.state.ear_history) == 20
    assert len(calc.state.score_history) == 15


def test_smoothed_ear_is_mean_of_history():
    calc = ScoreCalculator()
    assert calc.get_smoothed_ear() is None
    calc.calculate_score(0.1, 15, False, 0)
    calc.calculate_score(0.3, 15, False, 0)
    assert calc.get_smoothed_ear() == pytest.approx(0.2)


def test_reset():
    calc = ScoreCalculator()
    calc.calculate_score(0.05, 40, True, 121)
    calc.reset()
    assert calc.current_score == 0.0
    assert not calc.state.ear_history
    assert not calc.state.score_history
