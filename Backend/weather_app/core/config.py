from typing import List, Optional

from pydantic_settings import BaseSettings # type: ignore


class Settings(BaseSettings):
    openweather_api_key: str
    weather_url: str = "https://api.openweathermap.org/data/2.5/weather"
    default_location: str = "Nairobi"
    coords_cookie: str = "encrypted_coords"
    weather_timeout: Optional[float] = None

    # The two entry points advertise different cache lifetimes
    page_cache_max_age: int = 3600
    api_cache_max_age: int = 7200

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
