import math

import pytest

from glucoview.services.math.curves import CarbCurves, ConfidenceCurve, InsulinCurves


def test_carb_contribution_one_half_life():
    assert CarbCurves.glucose_contribution(40, 0.75, 0.2) == pytest.approx(4.0)


def test_carb_contribution_zero_at_or_before_intake():
    assert CarbCurves.glucose_contribution(40, 0.0, 0.2) == 0.0
    assert CarbCurves.glucose_contribution(40, -1.0, 0.2) == 0.0


def test_carb_contribution_below_noise_floor():
    # 1g halves below 0.1g after ~3.3 half-lives
    assert CarbCurves.glucose_contribution(1.0, 0.75 * 4, 0.2) == 0.0
    assert CarbCurves.glucose_contribution(1.0, 0.75 * 3, 0.2) > 0.0


def test_carb_hours_to_zero():
    assert CarbCurves.hours_to_zero(0.05) == 0.0
    assert CarbCurves.hours_to_zero(20.0) == pytest.approx(0.75 * math.log2(200))


def test_insulin_bilinear_shape():
    assert InsulinCurves.bilinear_activity(0.0, 1.0, 5.0) == 0.0
    assert InsulinCurves.bilinear_activity(0.5, 1.0, 5.0) == pytest.approx(0.5)
    assert InsulinCurves.bilinear_activity(1.0, 1.0, 5.0) == pytest.approx(1.0)
    assert InsulinCurves.bilinear_activity(3.0, 1.0, 5.0) == pytest.approx(0.5)
    assert InsulinCurves.bilinear_activity(5.0, 1.0, 5.0) == 0.0
    assert InsulinCurves.bilinear_activity(5.01, 1.0, 5.0) == 0.0


def test_insulin_contribution_is_never_positive():
    for t in [0.1 * i for i in range(0, 60)]:
        assert InsulinCurves.glucose_contribution(4.0, t, 1.0, 1.0, 5.0) <= 0.0
    assert InsulinCurves.glucose_contribution(0.0, 1.0, 1.0, 1.0, 5.0) == 0.0


def test_insulin_peak_after_duration_stays_in_rising_phase():
    # Peak beyond the action window must not divide by a negative tail
    assert InsulinCurves.bilinear_activity(2.0, 4.0, 3.0) == pytest.approx(0.5)


def test_rise_decay_on_board():
    assert InsulinCurves.rise_decay_on_board(-1, 60, 300, 0.8) == 0.0
    assert InsulinCurves.rise_decay_on_board(30, 60, 300, 0.8) == pytest.approx(0.5)
    assert InsulinCurves.rise_decay_on_board(60, 60, 300, 0.8) == pytest.approx(1.0)
    assert InsulinCurves.rise_decay_on_board(180, 60, 300, 0.8) == pytest.approx(math.exp(-0.4))
    assert InsulinCurves.rise_decay_on_board(301, 60, 300, 0.8) == 0.0


def test_confidence_decay_and_floor():
    assert ConfidenceCurve.at(0) == pytest.approx(0.9)
    assert ConfidenceCurve.at(2) == pytest.approx(0.9 * math.exp(-0.6))
    assert ConfidenceCurve.at(24) == pytest.approx(0.1)
    values = [ConfidenceCurve.at(h / 4) for h in range(0, 60)]
    assert values == sorted(values, reverse=True)
