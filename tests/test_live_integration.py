import os

import pytest

from meteofusion.config import DEFAULT_LAT, DEFAULT_LON
from meteofusion.runner import FusionRunner
from meteofusion.storage import CoordinateCache


def _integration_enabled() -> bool:
    return os.environ.get("METEOFUSION_RUN_INTEGRATION", "").lower() in {"1", "true", "yes"}


def _require_integration():
    if not _integration_enabled():
        pytest.skip("Integration tests disabled; set METEOFUSION_RUN_INTEGRATION=1 to enable")


@pytest.mark.integration
def test_live_fusion_document(tmp_path):
    _require_integration()
    runner = FusionRunner(lat=DEFAULT_LAT, lon=DEFAULT_LON, cache=CoordinateCache(tmp_path))
    document = runner.run(refresh=True)

    aggregated = document["openmeteo_aggregated"]
    assert aggregated is not None
    hourly = aggregated["hourly"]
    assert len(hourly["time"]) >= 24
    assert all(len(column) == len(hourly["time"]) for column in hourly.values())
    assert all(5 <= slr <= 25 for slr in hourly["roebber_slr"])
    assert aggregated["six_hourly"]["time"]
    assert document["metno"]["properties"]["timeseries"]
    assert runner.cache.path_for(DEFAULT_LAT, DEFAULT_LON).exists()
