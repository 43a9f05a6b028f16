from meteofusion.pipeline.freezing import correct_freezing_level, is_suspect


def test_unknown_elevation_passes_primary_through():
    result = correct_freezing_level(2345.6, 1000.0, -12.0, None)
    assert result.value == 2346
    assert result.corrected is False
    missing = correct_freezing_level(None, None, None, None)
    assert missing.value is None


def test_consistent_primary_is_kept():
    below = correct_freezing_level(900.0, None, -2.0, 1500.0)
    assert (below.value, below.corrected, below.source) == (900, False, "best_match")
    warm = correct_freezing_level(2500.0, None, 3.0, 1500.0)
    assert warm.value == 2500
    no_temp = correct_freezing_level(2500.0, None, None, 1500.0)
    assert no_temp.value == 2500


def test_suspect_primary_without_fallback_corrects_to_elevation():
    assert is_suspect(1700.0, -10.0, 1800.0)
    result = correct_freezing_level(1700.0, None, -10.0, 1800.0)
    assert result.corrected is True
    assert result.value == 1800
    assert result.source == "elevation"


def test_fallback_used_when_primary_inconsistent():
    result = correct_freezing_level(2600.0, 1200.0, -1.0, 1800.0)
    assert (result.value, result.corrected, result.source) == (1200, False, "meteoswiss")


def test_both_inconsistent_flags_correction():
    result = correct_freezing_level(2600.0, 2400.0, -1.0, 1800.0)
    assert result.corrected is True
    assert result.value == 1800


def test_corrected_always_reports_elevation():
    cases = [
        (2600.0, 2400.0, -1.0, 1812.4),
        (None, None, -0.5, 950.0),
        (1700.0, 1750.0, -10.0, 1800.0),
    ]
    for primary, fallback, temp, elevation in cases:
        result = correct_freezing_level(primary, fallback, temp, elevation)
        if result.corrected:
            assert result.value == round(elevation)
