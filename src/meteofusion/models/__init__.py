"""Point-forecast provider adapters."""

from __future__ import annotations

from .metno import MetNo
from .openmeteo import OpenMeteo

__all__ = ["MetNo", "OpenMeteo"]
