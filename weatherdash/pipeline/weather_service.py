"""Weather service: provider calls plus normalization and aggregation."""

import asyncio
import logging
from datetime import datetime

from weatherdash.errors import ProviderError
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.place import LocationQuery, Place
from weatherdash.models.weather import CurrentWeatherReading, DailyForecast
from weatherdash.processing.forecast_aggregator import (
    aggregate_forecast,
    current_sample,
    offset_from_payloads,
    samples_from_provider,
)
from weatherdash.processing.normalizer import (
    normalize_current,
    normalize_places,
    normalize_reverse,
)

logger = logging.getLogger(__name__)

MAX_GEOCODE_LIMIT = 10
DEFAULT_GEOCODE_LIMIT = 5


class WeatherService:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    async def current(self, query: LocationQuery) -> CurrentWeatherReading:
        raw = await self.client.get_current(query)
        return normalize_current(raw)

    async def forecast(
        self, query: LocationQuery, now: datetime | None = None
    ) -> list[DailyForecast]:
        """Daily forecast for today plus the next four local days.

        Forecast and current conditions are fetched concurrently; if either
        fails the other is cancelled and the whole call fails. Timestamps or
        offsets the calendar can't represent are a ProviderError.
        """
        try:
            async with asyncio.TaskGroup() as tg:
                forecast_task = tg.create_task(self.client.get_forecast(query))
                current_task = tg.create_task(self.client.get_current(query))
        except ExceptionGroup as eg:
            # The first failure cancels the sibling call
            raise eg.exceptions[0]
        forecast_raw, current_raw = forecast_task.result(), current_task.result()

        try:
            offset = offset_from_payloads(forecast_raw, current_raw)
            samples = samples_from_provider(forecast_raw.get("list") or [])
            days = aggregate_forecast(
                samples, offset, current=current_sample(current_raw, now), now=now
            )
        except (OverflowError, ValueError, OSError) as e:
            logger.error("Forecast payload has out-of-range timestamps: %s", e)
            raise ProviderError("Malformed provider response") from e
        logger.debug(
            "Aggregated %d samples into %d days (offset=%ds)",
            len(samples), len(days), offset,
        )
        return days

    async def geocode(self, text: str, limit: int = DEFAULT_GEOCODE_LIMIT) -> list[Place]:
        raw = await self.client.geocode(text, clamp_limit(limit))
        return normalize_places(raw)

    async def reverse_geocode(self, lat: float, lon: float) -> Place:
        raw = await self.client.reverse_geocode(lat, lon)
        return normalize_reverse(raw, lat, lon)


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_GEOCODE_LIMIT))


def parse_limit(raw: str | None) -> int:
    """Geocode limit from a query string; bad input falls back to the default."""
    if raw is None or raw == "":
        return DEFAULT_GEOCODE_LIMIT
    try:
        return clamp_limit(int(raw))
    except ValueError:
        return DEFAULT_GEOCODE_LIMIT
