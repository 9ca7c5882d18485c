import logging
from typing import Optional

import requests as requests # type: ignore
from fastapi import Request # type: ignore
from pydantic import ValidationError # type: ignore

from weather_app.core.config import Settings
from weather_app.models.weather_model import LocationQuery, RequestContext, WeatherSnapshot
from weather_app.services.location_service import resolve_location

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """The weather provider could not give us a snapshot."""


class UpstreamHttpError(UpstreamError):
    def __init__(self, status_code: int):
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code


class UpstreamTransportError(UpstreamError):
    """Network-level failure reaching the provider."""


class UpstreamPayloadError(UpstreamError):
    """Provider answered 2xx but the body is not a weather snapshot."""


class WeatherFetcher:
    """Fetch current weather from the OpenWeather API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.api_key = settings.openweather_api_key
        self.base_url = settings.weather_url
        self.default_location = settings.default_location
        self.timeout = settings.weather_timeout
        self.session = session or requests.Session()

    def build_params(self, location: LocationQuery) -> dict:
        params = {
            "appid": self.api_key,
            "units": "metric"
        }

        if location.has_coordinates:
            params["lat"] = location.lat
            params["lon"] = location.lon
        else:
            params["q"] = self.default_location

        return params

    def fetch(self, location: LocationQuery) -> WeatherSnapshot:
        """One GET, no retries. Raises an UpstreamError subclass on failure."""
        params = self.build_params(location)

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamTransportError(f"Request to weather provider failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise UpstreamHttpError(response.status_code)

        try:
            return WeatherSnapshot.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamPayloadError(f"Unexpected weather payload: {e}") from e


def get_weather_fetcher(request: Request) -> WeatherFetcher:
    """FastAPI dependency: the fetcher built once in create_app."""
    return request.app.state.weather_fetcher


def load_weather(context: RequestContext, fetcher: WeatherFetcher) -> WeatherSnapshot:
    location = resolve_location(context)
    return fetcher.fetch(location)
