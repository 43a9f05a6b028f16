import math

import pytest

from meteofusion.pipeline.slr import roebber_slr, snow_depth_cm


def test_slr_cold_scenario_matches_expected_ratio():
    slr = roebber_slr(-8.0, 75.0, 0.0)
    assert slr == pytest.approx(14 + (271.16 - 265.15), abs=1e-6)
    assert snow_depth_cm(5.0, slr) == pytest.approx(10.0, abs=0.01)


def test_slr_defaults_and_missing_temperature():
    assert roebber_slr(None) == 14.0
    assert roebber_slr(-1.99) == pytest.approx(14.0, abs=1e-6)


def test_slr_warm_side_drops_faster():
    # 0 °C sits 1.99 K above the threshold, doubled on the warm side
    assert roebber_slr(0.0) == pytest.approx(14 - 3.98, abs=1e-6)


def test_slr_humidity_and_wind_terms():
    base = roebber_slr(-5.0)
    assert roebber_slr(-5.0, 90.0) == pytest.approx(base - 1.0)
    assert roebber_slr(-5.0, 75.0, 3.0) == pytest.approx(base)
    assert roebber_slr(-5.0, 75.0, 8.0) == pytest.approx(base - 1.5)


@pytest.mark.parametrize(
    "temp,humidity,wind",
    [(-60.0, 0.0, 0.0), (30.0, 100.0, 40.0), (-10.0, None, None), (0.0, 200.0, 1000.0)],
)
def test_slr_is_clamped(temp, humidity, wind):
    slr = roebber_slr(temp, humidity, wind)
    assert math.isfinite(slr)
    assert 5.0 <= slr <= 25.0
