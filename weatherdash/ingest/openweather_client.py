"""OpenWeather API client: current weather, 5-day forecast and geocoding."""

import logging

import httpx

from weatherdash.config.schema import ProviderConfig
from weatherdash.errors import ProviderError
from weatherdash.models.common import finite_number
from weatherdash.models.place import LocationQuery

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
OPENWEATHER_GEO_URL = "https://api.openweathermap.org/geo/1.0"
IP_LOCATE_URL = "https://ipapi.co/json/"
DEFAULT_USER_AGENT = "weatherdash/0.1.0"


class OpenWeatherClient:
    """Thin async wrapper around the OpenWeather REST API.

    Always asks for metric units; conversion happens at render time.
    Responses come back as the provider sent them.
    """

    def __init__(
        self,
        api_key: str = "",
        base_url: str = OPENWEATHER_BASE_URL,
        geo_base_url: str = OPENWEATHER_GEO_URL,
        ip_locate_url: str = IP_LOCATE_URL,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.geo_base_url = geo_base_url.rstrip("/")
        self.ip_locate_url = ip_locate_url
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: ProviderConfig) -> "OpenWeatherClient":
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            geo_base_url=config.geo_base_url,
            ip_locate_url=config.ip_locate_url,
            timeout=config.timeout_seconds,
        )

    async def _get(self, url: str, params: dict) -> dict | list:
        params = {**params, "appid": self.api_key}
        headers = {"User-Agent": self.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params, headers=headers)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed: GET %s -> %s", url, e)
            raise ProviderError(f"Request failed: {e}") from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.error("OpenWeather %d: GET %s -> %s", resp.status_code, url, message)
            raise ProviderError(f"HTTP {resp.status_code}: {message}", resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            logger.error("OpenWeather returned non-JSON body for %s", url)
            raise ProviderError("Malformed provider response", resp.status_code) from e

    # --- Weather ---

    async def get_current(self, query: LocationQuery) -> dict:
        """Current conditions for a city or coordinate pair."""
        data = await self._get(
            f"{self.base_url}/data/2.5/weather",
            {**query.to_params(), "units": "metric"},
        )
        return _expect_object(data)

    async def get_forecast(self, query: LocationQuery) -> dict:
        """5-day / 3-hour forecast for a city or coordinate pair."""
        data = await self._get(
            f"{self.base_url}/data/2.5/forecast",
            {**query.to_params(), "units": "metric"},
        )
        return _expect_object(data)

    # --- Geocoding ---

    async def geocode(self, text: str, limit: int = 5) -> list:
        data = await self._get(
            f"{self.geo_base_url}/direct", {"q": text, "limit": limit}
        )
        return _expect_list(data)

    async def reverse_geocode(self, lat: float, lon: float) -> list:
        data = await self._get(
            f"{self.geo_base_url}/reverse", {"lat": lat, "lon": lon, "limit": 1}
        )
        return _expect_list(data)

    # --- Approximate location ---

    async def locate_by_ip(self) -> tuple[float, float] | None:
        """Best-effort approximate location from the caller's IP address.

        Returns None on any failure.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.ip_locate_url)
            if resp.status_code >= 400:
                return None
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("IP location lookup failed: %s", e)
            return None
        if not isinstance(data, dict):
            return None
        lat = finite_number(data.get("latitude"))
        lon = finite_number(data.get("longitude"))
        if not lat or not lon:
            return None
        return lat, lon


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.text


def _expect_object(data: dict | list) -> dict:
    if not isinstance(data, dict):
        raise ProviderError("Malformed provider response: expected an object")
    return data


def _expect_list(data: dict | list) -> list:
    if not isinstance(data, list):
        raise ProviderError("Malformed provider response: expected a list")
    return data
