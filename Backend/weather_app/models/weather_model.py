from pydantic import BaseModel # type: ignore
from typing import List, Literal, Optional


class Coordinates(BaseModel):
    """Decoded latitude/longitude pair. Both values are finite floats."""
    latitude: float
    longitude: float


class RequestContext(BaseModel):
    """What one incoming request tells us about its location."""
    lat: Optional[str] = None
    lon: Optional[str] = None
    encrypted_coords: Optional[str] = None


class LocationQuery(BaseModel):
    """
    Resolved location handed to the fetcher.
    Either both lat and lon are set, or neither is and the
    default location name is used instead.
    """
    lat: Optional[str] = None
    lon: Optional[str] = None
    source: Literal["query", "cookie", "default"] = "default"

    @property
    def has_coordinates(self) -> bool:
        return bool(self.lat) and bool(self.lon)


class MainReading(BaseModel):
    temp: float

    class Config:
        extra = "allow"


class Condition(BaseModel):
    main: str

    class Config:
        extra = "allow"


class WeatherSnapshot(BaseModel):
    """
    Current weather as returned by the provider.
    Unknown provider fields are kept so the body passes through untouched.
    """
    dt: int
    main: MainReading
    name: str
    weather: List[Condition]

    class Config:
        extra = "allow"
