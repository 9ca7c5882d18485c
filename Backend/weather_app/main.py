import logging
from typing import Optional

from fastapi import FastAPI # type: ignore
from fastapi.middleware.cors import CORSMiddleware

from weather_app.apis import page_api, weather_api
from weather_app.core.config import Settings
from weather_app.services.weather_service import UpstreamError, WeatherFetcher


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    # Missing OPENWEATHER_API_KEY fails here, at startup
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = FastAPI(
        title="Current Weather API",
        description="Current weather by query coordinates, cookie coordinates or a default city",
        version="1.0.0"
    )
    app.state.settings = settings
    app.state.weather_fetcher = WeatherFetcher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(page_api.router)
    app.include_router(weather_api.router, prefix="/api")
    app.add_exception_handler(UpstreamError, page_api.upstream_error_page)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "current-weather-api"}

    return app


app = create_app()
