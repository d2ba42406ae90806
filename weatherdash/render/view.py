"""Text rendering of current weather and the daily forecast.

ViewState holds what the dashboard is currently showing. Each successful
fetch replaces it wholesale.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime

from weatherdash.config.schema import Units
from weatherdash.models.weather import CurrentWeatherReading, DailyForecast
from weatherdash.render.clock import (
    fmt_day_label,
    fmt_gmt_offset,
    fmt_local_clock,
    fmt_time_with_offset,
)
from weatherdash.render.units import convert_temp, fmt_temp, fmt_wind, temp_suffix

NO_ADVISORIES = "No current advisories for this location."


@dataclass(frozen=True)
class ViewState:
    unit: Units = Units.METRIC
    coords: tuple[float, float] | None = None
    city_label: str | None = None
    weather: CurrentWeatherReading | None = None
    forecast: list[DailyForecast] = field(default_factory=list)


def apply_fetch(
    state: ViewState,
    weather: CurrentWeatherReading,
    forecast: list[DailyForecast],
    label: str | None = None,
) -> ViewState:
    """New state after a successful fetch. Last write wins."""
    coords = None
    if weather.coord.lat is not None and weather.coord.lon is not None:
        coords = (weather.coord.lat, weather.coord.lon)
    return replace(
        state,
        coords=coords,
        city_label=label or place_label(weather),
        weather=weather,
        forecast=list(forecast),
    )


def place_label(weather: CurrentWeatherReading) -> str:
    return ", ".join(p for p in (weather.location, weather.country) if p)


def advisory_banner(alerts: list[str]) -> str:
    if alerts:
        return "Advisories: " + " • ".join(alerts)
    return NO_ADVISORIES


def render_weather(
    data: CurrentWeatherReading, unit: Units, now: datetime | None = None
) -> list[str]:
    off = data.timezone or 0
    humidity = f"{data.humidity}%" if data.humidity is not None else "—"
    rise = fmt_time_with_offset(data.sunrise, off)
    sets = fmt_time_with_offset(data.sunset, off)
    return [
        place_label(data) or "—",
        f"Local time: {fmt_local_clock(off, now)} ({fmt_gmt_offset(off)})",
        f"{fmt_temp(data.temp, unit)}  {data.description or '—'}",
        f"Feels like: {fmt_temp(data.feels_like, unit)}",
        f"Humidity: {humidity}",
        f"Wind: {fmt_wind(data.wind_speed, unit)}",
        f"Sunrise / Sunset: {rise} / {sets}",
        advisory_banner(data.alerts),
    ]


def render_forecast(items: list[DailyForecast], unit: Units) -> list[str]:
    lines = []
    for it in items[:5]:
        hi = _fmt_bare(it.temp_max, unit)
        lo = _fmt_bare(it.temp_min, unit)
        lines.append(f"{fmt_day_label(it.date):<12} {hi}° / {lo}°  {it.description}")
    return lines


def chart_series(items: list[DailyForecast], unit: Units) -> dict:
    """Labels and daily highs for the temperature chart."""
    return {
        "label": f"Daily High ({temp_suffix(unit)})",
        "labels": [fmt_day_label(it.date) for it in items],
        "highs": [
            convert_temp(it.temp_max, unit) if it.temp_max is not None else None
            for it in items
        ],
    }


def render_error(message: str | None) -> str:
    return f"Error: {message or 'Something went wrong.'}"


def _fmt_bare(celsius: float | None, unit: Units) -> str:
    if celsius is None:
        return "—"
    return f"{convert_temp(celsius, unit):.1f}"
