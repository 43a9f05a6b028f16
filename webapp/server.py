import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from meteofusion.backends.base import BackendError
from meteofusion.runner import FusionRunner, MissingCoordinates, parse_coordinates
from meteofusion.storage import CoordinateCache

LOGGER = logging.getLogger("meteofusion.webapp")

app = FastAPI()


def get_cache() -> CoordinateCache:
    return CoordinateCache()


def build_runner(lat: float, lon: float) -> FusionRunner:
    return FusionRunner(lat=lat, lon=lon, cache=get_cache())


@app.get("/")
def forecast(
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None),
    refresh: Optional[str] = Query(default=None),
):
    """Fused forecast for one point; ``refresh=1`` bypasses the cache."""

    try:
        lat_value, lon_value = parse_coordinates(lat, lon)
    except MissingCoordinates as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})

    runner = build_runner(lat_value, lon_value)
    try:
        document = runner.run(refresh=refresh == "1")
    except BackendError as exc:
        LOGGER.warning("Upstream failure for %s,%s: %s", lat_value, lon_value, exc)
        return JSONResponse(status_code=502, content={"error": str(exc)})
    return JSONResponse(content=document)


@app.get("/api/health")
def health():
    cache = get_cache()
    if cache.cache_dir.is_dir():
        documents = len(list(cache.cache_dir.glob("meteo_*.json")))
        return {"status": "ok", "cache_dir": str(cache.cache_dir), "documents": documents}
    return {"status": "degraded", "detail": f"{cache.cache_dir} does not exist yet"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
