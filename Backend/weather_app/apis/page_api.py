import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Request # type: ignore
from fastapi.responses import HTMLResponse # type: ignore
from fastapi.templating import Jinja2Templates # type: ignore

from weather_app.models.weather_model import RequestContext
from weather_app.services.location_service import request_context
from weather_app.services.weather_service import WeatherFetcher, get_weather_fetcher, load_weather

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Page"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
def weather_page(
    request: Request,
    context: RequestContext = Depends(request_context),
    fetcher: WeatherFetcher = Depends(get_weather_fetcher)
):
    # Upstream failures are left to the app-level error page handler
    weather = load_weather(context, fetcher)

    max_age = request.app.state.settings.page_cache_max_age
    return templates.TemplateResponse(
        request,
        "weather.html",
        {"weather": weather},
        headers={"cache-control": f"public, max-age={max_age}"}
    )


def upstream_error_page(request: Request, exc: Exception):
    """Exception handler rendering the error state for page requests."""
    logger.error("Error fetching weather for page: %s", exc)
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": "Failed to fetch weather data"},
        status_code=500
    )
