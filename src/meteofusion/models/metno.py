"""MET.no Locationforecast provider (secondary source)."""

from __future__ import annotations

from meteofusion.models.base import BasePointProvider


class MetNo(BasePointProvider):
    """Adapter for the MET.no Locationforecast 2.0 complete endpoint."""

    provider_key = "metno"
    base_url = "https://api.met.no/weatherapi/locationforecast/2.0/"
