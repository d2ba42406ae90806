"""Device location: secure-origin check, error messages, IP fallback."""

import logging
from urllib.parse import urlparse

from weatherdash.ingest.openweather_client import OpenWeatherClient

logger = logging.getLogger(__name__)

PERMISSION_DENIED = 1
POSITION_UNAVAILABLE = 2
TIMEOUT = 3

_CODE_MESSAGES = {
    PERMISSION_DENIED: "Permission denied — allow location.",
    POSITION_UNAVAILABLE: "Position unavailable.",
    TIMEOUT: "Timeout — try again.",
}

INSECURE_ORIGIN = (
    "Location requires HTTPS or localhost. "
    "Run on http://localhost:3000 or deploy over HTTPS."
)


def is_secure_origin(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme == "https" or parsed.hostname in ("localhost", "127.0.0.1")


def geolocation_error_message(code: int | None, message: str = "") -> str:
    detail = _CODE_MESSAGES.get(code) if code is not None else None
    return f"Couldn’t get your location: {detail or message}"


async def approximate_location(client: OpenWeatherClient) -> tuple[float, float] | None:
    """IP-based fallback after a geolocation failure. Never raises."""
    coords = await client.locate_by_ip()
    if coords is None:
        logger.info("Approximate location unavailable")
    return coords
