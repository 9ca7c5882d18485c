import base64
import logging
import math
import re
from typing import Optional
from urllib.parse import unquote

from fastapi import Query, Request # type: ignore

from weather_app.models.weather_model import Coordinates, LocationQuery, RequestContext

logger = logging.getLogger(__name__)

# plain decimal with optional exponent; no underscores, no inf/nan words
_NUMBER = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def decode_coords(encoded: str) -> Optional[Coordinates]:
    """
    Decode a cookie value of the form base64("<lat>,<lon>").
    Returns None on any failure; the reason is logged, never raised.
    """
    try:
        # cookie values may arrive percent-encoded (e.g. %3D padding)
        raw = unquote(encoded).strip()
        raw += "=" * (-len(raw) % 4)
        decoded = base64.b64decode(raw, validate=True).decode("latin-1")

        parts = decoded.split(",")
        if len(parts) != 2:
            raise ValueError(f"expected 2 comma-separated fields, got {len(parts)}")

        for part in parts:
            if not _NUMBER.fullmatch(part.strip()):
                raise ValueError(f"non-numeric coordinate {part!r}")

        lat, lon = float(parts[0]), float(parts[1])
        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(f"non-finite coordinates {decoded!r}")
    except ValueError as e:
        logger.warning("Failed to decode coordinates from cookie: %s", e)
        return None

    return Coordinates(latitude=lat, longitude=lon)


def format_coordinate(value: float) -> str:
    # 45.0 -> "45", 12.5 -> "12.5"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def resolve_location(context: RequestContext) -> LocationQuery:
    """
    Pick the location for this request, first match wins:
      1. lat & lon query parameters, passed on as-is (not validated)
      2. coordinates decoded from the cookie
      3. nothing, so the fetcher falls back to the default location
    """
    if context.lat and context.lon:
        return LocationQuery(lat=context.lat, lon=context.lon, source="query")

    if context.encrypted_coords:
        coords = decode_coords(context.encrypted_coords)
        if coords is not None:
            lat = format_coordinate(coords.latitude)
            lon = format_coordinate(coords.longitude)
            logger.info("Using coordinates from cookie: %s, %s", lat, lon)
            return LocationQuery(lat=lat, lon=lon, source="cookie")

    logger.info("No coordinates found, falling back to default location")
    return LocationQuery()


def request_context(
    request: Request,
    lat: Optional[str] = Query(default=None),
    lon: Optional[str] = Query(default=None)
) -> RequestContext:
    """FastAPI dependency: collect query parameters and the coordinates cookie."""
    # lat/lon stay strings: they are forwarded to the provider unvalidated
    cookie_name = request.app.state.settings.coords_cookie
    return RequestContext(
        lat=lat,
        lon=lon,
        encrypted_coords=request.cookies.get(cookie_name),
    )
