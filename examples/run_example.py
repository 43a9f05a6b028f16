"""Example runner that fuses both providers for a single point."""

from __future__ import annotations

from pathlib import Path

from meteofusion.runner import FusionRunner
from meteofusion.storage import CoordinateCache
from meteofusion.ui.frontend import summarize_point_data


def run_example() -> None:
    """
    Fetch the default station point and print the fused summary.
    """

    runner = FusionRunner(
        lat=44.2902,
        lon=6.5689,
        cache=CoordinateCache(Path("cache/example")),
    )
    document = runner.run(refresh=True)
    print(summarize_point_data(document))
    six_hourly = document["openmeteo_aggregated"]["six_hourly"]
    for start, symbol in zip(six_hourly["time"][:8], six_hourly["symbol_code"][:8]):
        print(start, symbol)


if __name__ == "__main__":
    run_example()
