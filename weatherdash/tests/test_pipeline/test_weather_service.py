"""Tests for the weather service with a mocked provider client."""

import asyncio
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from weatherdash.errors import ProviderError
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.place import LocationQuery
from weatherdash.pipeline.weather_service import WeatherService, clamp_limit, parse_limit

PARIS_NOW = datetime(2026, 2, 11, 10, 0, tzinfo=UTC)
PARIS = LocationQuery(city="Paris")


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock(spec=OpenWeatherClient)


class TestWeatherService:
    def test_current(self, mock_client: MagicMock, paris_current: dict):
        mock_client.get_current.return_value = paris_current

        reading = asyncio.run(WeatherService(mock_client).current(PARIS))

        assert reading.location == "Paris"
        mock_client.get_current.assert_awaited_once_with(PARIS)

    def test_forecast_uses_both_calls(
        self, mock_client: MagicMock, paris_forecast: dict, paris_current: dict
    ):
        mock_client.get_forecast.return_value = paris_forecast
        mock_client.get_current.return_value = paris_current

        days = asyncio.run(WeatherService(mock_client).forecast(PARIS, now=PARIS_NOW))

        assert len(days) == 5
        assert days[0].date == "2026-02-11T00:00:00.000Z"
        assert days[0].temp_max == 9.0
        mock_client.get_forecast.assert_awaited_once_with(PARIS)
        mock_client.get_current.assert_awaited_once_with(PARIS)

    def test_forecast_fails_if_current_fails(
        self, mock_client: MagicMock, paris_forecast: dict
    ):
        mock_client.get_forecast.return_value = paris_forecast
        mock_client.get_current.side_effect = ProviderError("HTTP 500: boom", 500)

        with pytest.raises(ProviderError):
            asyncio.run(WeatherService(mock_client).forecast(PARIS, now=PARIS_NOW))

    def test_forecast_offset_from_current_when_city_missing(
        self, mock_client: MagicMock, paris_forecast: dict, paris_current: dict
    ):
        del paris_forecast["city"]
        paris_current["timezone"] = -23 * 3600
        mock_client.get_forecast.return_value = paris_forecast
        mock_client.get_current.return_value = paris_current

        days = asyncio.run(WeatherService(mock_client).forecast(PARIS, now=PARIS_NOW))
        # 10:00 UTC at UTC-23 is still Feb 10
        assert days[0].date == "2026-02-10T00:00:00.000Z"

    def test_out_of_range_timestamp_is_provider_error(
        self, mock_client: MagicMock, paris_current: dict
    ):
        mock_client.get_forecast.return_value = {
            "city": {"timezone": 0}, "list": [{"dt": 1e20, "main": {"temp": 1}}],
        }
        mock_client.get_current.return_value = paris_current

        with pytest.raises(ProviderError, match="Malformed"):
            asyncio.run(WeatherService(mock_client).forecast(PARIS, now=PARIS_NOW))

    def test_numeric_string_offset_matches_current_weather(
        self, mock_client: MagicMock, paris_forecast: dict, paris_current: dict
    ):
        del paris_forecast["city"]
        paris_current["timezone"] = "-82800"
        mock_client.get_forecast.return_value = paris_forecast
        mock_client.get_current.return_value = paris_current

        service = WeatherService(mock_client)
        days = asyncio.run(service.forecast(PARIS, now=PARIS_NOW))
        reading = asyncio.run(service.current(PARIS))

        assert reading.timezone == -82800
        assert days[0].date == "2026-02-10T00:00:00.000Z"

    def test_failed_forecast_cancels_current_call(self, mock_client: MagicMock):
        cancelled = []

        async def failing_forecast(query):
            await asyncio.sleep(0)
            raise ProviderError("HTTP 502: bad gateway", 502)

        async def slow_current(query):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(query)
                raise

        mock_client.get_forecast.side_effect = failing_forecast
        mock_client.get_current.side_effect = slow_current

        with pytest.raises(ProviderError, match="502"):
            asyncio.run(WeatherService(mock_client).forecast(PARIS, now=PARIS_NOW))
        assert cancelled == [PARIS]

    def test_geocode_clamps_limit(self, mock_client: MagicMock, paris_geocode: list):
        mock_client.geocode.return_value = paris_geocode

        places = asyncio.run(WeatherService(mock_client).geocode("Paris", 50))

        assert len(places) == 5
        mock_client.geocode.assert_awaited_once_with("Paris", 10)

    def test_reverse_geocode(self, mock_client: MagicMock):
        mock_client.reverse_geocode.return_value = [{"name": "Lyon", "country": "FR"}]

        place = asyncio.run(WeatherService(mock_client).reverse_geocode(45.76, 4.83))
        assert place.label == "Lyon, FR"
        assert (place.lat, place.lon) == (45.76, 4.83)


class TestLimits:
    @pytest.mark.parametrize(
        "raw,expected",
        [(None, 5), ("", 5), ("3", 3), ("0", 1), ("-4", 1), ("11", 10), ("abc", 5)],
    )
    def test_parse_limit(self, raw, expected):
        assert parse_limit(raw) == expected

    def test_clamp_limit(self):
        assert clamp_limit(7) == 7
