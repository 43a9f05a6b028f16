import pytest

from payloads import StubBackend, metno_payload, openmeteo_payload


@pytest.fixture
def stub_backend():
    return StubBackend(
        metno_payload(["2024-01-10T09:00:00Z", "2024-01-10T10:00:00Z"]),
        openmeteo_payload(),
    )
