# tests/conftest.py
import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app import create_app
from config import Settings
from services.weather import OpenWeatherClient

VENDOR_URL = "https://vendor.test/data/2.5/weather"


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def vendor_payload():
    return {
        "coord": {"lon": 2.35, "lat": 48.85},
        "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
        "main": {
            "temp": 21.4,
            "feels_like": 20.9,
            "temp_min": 19.8,
            "temp_max": 23.0,
            "pressure": 1016,
            "humidity": 52,
        },
        "wind": {"speed": 3.6, "deg": 240},
        "sys": {"country": "FR", "sunrise": 1700000000, "sunset": 1700036000},
        "timezone": 3600,
        "name": "Paris",
    }


class VendorStub:
    """Records calls and answers like OpenWeatherMap."""

    def __init__(self, payload: dict):
        self.payload = payload
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: str | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200 or self.body is not None:
            return httpx.Response(self.status_code, text=self.body or "")
        return httpx.Response(200, json=self.payload)


@pytest.fixture
def vendor(vendor_payload):
    return VendorStub(vendor_payload)


@pytest.fixture
def weather_client(vendor):
    return OpenWeatherClient(
        api_key="test-key",
        base_url=VENDOR_URL,
        transport=httpx.MockTransport(vendor),
    )


@pytest.fixture
def test_settings(tmp_path):
    s = Settings()
    s.cache_max_entries = 2
    s.cache_ttl_seconds = 60
    s.openweathermap_api_key = "test-key"
    s.static_dir = str(tmp_path / "no-static")
    return s


@pytest.fixture
def app(test_settings, weather_client):
    return create_app(test_settings, weather_client=weather_client)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
