import logging

from fastapi import APIRouter, Depends, Request # type: ignore
from fastapi.responses import JSONResponse # type: ignore

from weather_app.models.weather_model import RequestContext
from weather_app.services.location_service import request_context
from weather_app.services.weather_service import (
    UpstreamError,
    WeatherFetcher,
    get_weather_fetcher,
    load_weather,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("")
def get_weather(
    request: Request,
    context: RequestContext = Depends(request_context),
    fetcher: WeatherFetcher = Depends(get_weather_fetcher)
):
    try:
        weather = load_weather(context, fetcher)
    except UpstreamError as e:
        logger.error("Error fetching weather: %s", e)
        return JSONResponse({"error": "Failed to fetch weather data"}, status_code=500)

    max_age = request.app.state.settings.api_cache_max_age
    return JSONResponse(
        {"weather": weather.model_dump()},
        headers={"Cache-Control": f"public, max-age={max_age}"}
    )
