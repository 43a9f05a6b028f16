import pytest
import requests

from meteofusion.backends.base import UpstreamFetchError, UpstreamParseError
from meteofusion.backends.http_backend import HttpBackend


class DummyResponse:
    status_code = 200

    def __init__(self, payload=None, *, error: Exception | None = None, status_error: bool = False):
        self.payload = payload
        self.error = error
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error:
            raise requests.HTTPError("503 Server Error")
        return None

    def json(self):
        if self.error is not None:
            raise self.error
        return self.payload


def test_http_backend_fetches_json(monkeypatch):
    calls: list[dict] = []

    def fake_get(url, params, headers, timeout):
        calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        return DummyResponse({"hourly": {"time": []}})

    monkeypatch.setattr("meteofusion.backends.http_backend.requests.get", fake_get)

    backend = HttpBackend(timeout=5, headers={"User-Agent": "test-agent"})
    payload = backend.fetch_json("https://api.test/forecast", params={"lat": 1.0})

    assert payload == {"hourly": {"time": []}}
    assert calls == [
        {
            "url": "https://api.test/forecast",
            "params": {"lat": 1.0},
            "headers": {"User-Agent": "test-agent"},
            "timeout": 5,
        }
    ]


def test_http_backend_wraps_network_errors(monkeypatch):
    def fake_get(url, params, headers, timeout):
        raise requests.Timeout("timed out")

    monkeypatch.setattr("meteofusion.backends.http_backend.requests.get", fake_get)
    with pytest.raises(UpstreamFetchError):
        HttpBackend(timeout=1).fetch_json("https://api.test/forecast")


def test_http_backend_wraps_error_status(monkeypatch):
    monkeypatch.setattr(
        "meteofusion.backends.http_backend.requests.get",
        lambda url, params, headers, timeout: DummyResponse(status_error=True),
    )
    with pytest.raises(UpstreamFetchError):
        HttpBackend(timeout=1).fetch_json("https://api.test/forecast")


def test_http_backend_rejects_non_json(monkeypatch):
    monkeypatch.setattr(
        "meteofusion.backends.http_backend.requests.get",
        lambda url, params, headers, timeout: DummyResponse(error=ValueError("Expecting value")),
    )
    with pytest.raises(UpstreamParseError):
        HttpBackend(timeout=1).fetch_json("https://api.test/forecast")

    monkeypatch.setattr(
        "meteofusion.backends.http_backend.requests.get",
        lambda url, params, headers, timeout: DummyResponse([1, 2, 3]),
    )
    with pytest.raises(UpstreamParseError):
        HttpBackend(timeout=1).fetch_json("https://api.test/forecast")


def test_http_backend_headers_from_environment(monkeypatch):
    monkeypatch.setenv("METEOFUSION_USER_AGENT", "Fusion/2.0")
    monkeypatch.setenv("METEOFUSION_CONTACT", "ops@example.org")
    monkeypatch.setenv("METEOFUSION_TIMEOUT", "12")
    backend = HttpBackend()
    assert backend.headers == {"User-Agent": "Fusion/2.0", "Contact": "ops@example.org"}
    assert backend.timeout == 12.0
