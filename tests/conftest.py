import base64
import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("OPENWEATHER_API_KEY", "test-key")

from weather_app.core.config import Settings  # noqa: E402
from weather_app.main import create_app  # noqa: E402

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"

NAIROBI_PAYLOAD = {
    "coord": {"lon": 36.8167, "lat": -1.2833},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "main": {"temp": 22.4, "feels_like": 22.1, "humidity": 56},
    "dt": 1760868000,
    "name": "Nairobi",
    "cod": 200,
}


def encode_coords(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


@pytest.fixture
def settings():
    return Settings(openweather_api_key="test-key", _env_file=None)


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
