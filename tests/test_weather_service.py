import pytest
import requests

from weather_app.models.weather_model import LocationQuery, RequestContext
from weather_app.services.weather_service import (
    UpstreamHttpError,
    UpstreamPayloadError,
    UpstreamTransportError,
    WeatherFetcher,
    load_weather,
)

from conftest import NAIROBI_PAYLOAD, WEATHER_URL


@pytest.fixture
def fetcher(settings):
    return WeatherFetcher(settings)


def test_build_params_with_coordinates(fetcher):
    params = fetcher.build_params(LocationQuery(lat="12.5", lon="45.2", source="cookie"))

    assert params == {"appid": "test-key", "units": "metric", "lat": "12.5", "lon": "45.2"}


def test_build_params_default_location(fetcher):
    params = fetcher.build_params(LocationQuery())

    assert params == {"appid": "test-key", "units": "metric", "q": "Nairobi"}


def test_fetch_returns_snapshot(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, json=NAIROBI_PAYLOAD)

    weather = fetcher.fetch(LocationQuery())

    assert weather.dt == 1760868000
    assert weather.name == "Nairobi"
    assert weather.main.temp == 22.4
    assert [c.main for c in weather.weather] == ["Clouds"]
    assert "q=Nairobi" in requests_mock.last_request.url
    assert "lat=" not in requests_mock.last_request.url


def test_fetch_passes_extra_fields_through(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, json=NAIROBI_PAYLOAD)

    dumped = fetcher.fetch(LocationQuery()).model_dump()

    assert dumped == NAIROBI_PAYLOAD


def test_query_values_reach_provider_verbatim(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, json=NAIROBI_PAYLOAD)

    load_weather(RequestContext(lat="not-a-number", lon="5"), fetcher)

    assert "lat=not-a-number&lon=5" in requests_mock.last_request.url
    assert "q=" not in requests_mock.last_request.url


def test_fetch_http_error_carries_status(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, status_code=503, text="unavailable")

    with pytest.raises(UpstreamHttpError) as exc_info:
        fetcher.fetch(LocationQuery())

    assert exc_info.value.status_code == 503
    assert requests_mock.call_count == 1


def test_fetch_transport_error(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(UpstreamTransportError) as exc_info:
        fetcher.fetch(LocationQuery())

    assert isinstance(exc_info.value.__cause__, requests.exceptions.ConnectionError)


def test_fetch_non_json_body(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, text="<html>oops</html>")

    with pytest.raises(UpstreamPayloadError):
        fetcher.fetch(LocationQuery())


def test_fetch_body_missing_fields(fetcher, requests_mock):
    requests_mock.get(WEATHER_URL, json={"name": "Nairobi"})

    with pytest.raises(UpstreamPayloadError):
        fetcher.fetch(LocationQuery())


def test_fetch_uses_configured_timeout(settings, requests_mock):
    requests_mock.get(WEATHER_URL, json=NAIROBI_PAYLOAD)
    settings.weather_timeout = 2.5

    WeatherFetcher(settings).fetch(LocationQuery())

    assert requests_mock.last_request.timeout == 2.5
