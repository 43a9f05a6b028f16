import pytest

from meteofusion.pipeline.derive import dewpoint_c, is_daytime_hour


def test_dewpoint_follows_magnus_formula():
    assert dewpoint_c(20.0, 50.0) == pytest.approx(9.3, abs=0.05)
    assert dewpoint_c(0.0, 100.0) == pytest.approx(0.0, abs=0.05)
    assert dewpoint_c(5.0, 80.0) > dewpoint_c(5.0, 30.0)


def test_dewpoint_requires_inputs():
    assert dewpoint_c(None, 50.0) is None
    assert dewpoint_c(10.0, None) is None
    assert dewpoint_c(10.0, 0.0) is None


def test_daytime_hour_heuristic():
    assert is_daytime_hour("2024-01-10T07:00") is True
    assert is_daytime_hour("2024-01-10T16:00") is True
    assert is_daytime_hour("2024-01-10T17:00") is False
    assert is_daytime_hour("2024-01-10T06:00") is False
    assert is_daytime_hour("garbage") is False
