"""Map raw provider payloads onto stable, sanitized shapes."""

from weatherdash.models.common import finite_number, round_half_up
from weatherdash.models.place import Place
from weatherdash.models.weather import Coord, CurrentWeatherReading

HEAT_THRESHOLD_C = 35.0
FREEZE_THRESHOLD_C = 0.0
HIGH_WIND_MS = 15.0
THUNDERSTORM_CODES = range(200, 300)

HEAT_ADVISORY = "Heat advisory (≥ 35°C)"
FREEZE_RISK = "Freeze risk (≤ 0°C)"
HIGH_WIND = "High wind (≥ 15 m/s)"
THUNDERSTORM = "Thunderstorm"


def determine_alerts(
    temp: float | None,
    feels_like: float | None,
    wind_speed: float | None,
    condition_code: int | None,
) -> list[str]:
    """Advisories for normalized values, always in the same order."""
    alerts = []
    if (temp is not None and temp >= HEAT_THRESHOLD_C) or (
        feels_like is not None and feels_like >= HEAT_THRESHOLD_C
    ):
        alerts.append(HEAT_ADVISORY)
    if temp is not None and temp <= FREEZE_THRESHOLD_C:
        alerts.append(FREEZE_RISK)
    if wind_speed is not None and wind_speed >= HIGH_WIND_MS:
        alerts.append(HIGH_WIND)
    if condition_code is not None and condition_code in THUNDERSTORM_CODES:
        alerts.append(THUNDERSTORM)
    return alerts


def normalize_current(data: dict) -> CurrentWeatherReading:
    main = _section(data, "main")
    wind = _section(data, "wind")
    sys_ = _section(data, "sys")
    coord = _section(data, "coord")
    weather = _first_condition(data)

    temp = finite_number(main.get("temp"))
    feels = finite_number(main.get("feels_like"))
    humidity = finite_number(main.get("humidity"))
    wind_ms = finite_number(wind.get("speed"))
    code = finite_number(weather.get("id"))

    return CurrentWeatherReading(
        location=str(data.get("name") or ""),
        country=str(sys_.get("country") or ""),
        coord=Coord(
            lat=finite_number(coord.get("lat")), lon=finite_number(coord.get("lon"))
        ),
        timezone=_int_or(data.get("timezone"), 0),
        dt=_int_or(data.get("dt"), None),
        temp=temp,
        feels_like=feels,
        humidity=round_half_up(humidity) if humidity is not None else None,
        wind_speed=wind_ms,
        sunrise=_int_or(sys_.get("sunrise"), None),
        sunset=_int_or(sys_.get("sunset"), None),
        description=str(weather.get("description") or ""),
        alerts=determine_alerts(
            temp, feels, wind_ms, int(code) if code is not None else None
        ),
    )


def normalize_places(data: list) -> list[Place]:
    """Direct geocoding results; entries without coordinates are dropped."""
    places = []
    for p in data or []:
        if not isinstance(p, dict):
            continue
        lat, lon = finite_number(p.get("lat")), finite_number(p.get("lon"))
        if lat is None or lon is None:
            continue
        places.append(
            Place(
                name=str(p.get("name") or ""),
                state=str(p.get("state") or ""),
                country=str(p.get("country") or ""),
                lat=lat,
                lon=lon,
            )
        )
    return places


def normalize_reverse(data: list, lat: float, lon: float) -> Place:
    """Best reverse-geocoding match, keeping the caller's coordinates."""
    p = data[0] if data and isinstance(data[0], dict) else {}
    return Place(
        name=str(p.get("name") or ""),
        state=str(p.get("state") or ""),
        country=str(p.get("country") or ""),
        lat=lat,
        lon=lon,
    )


def _section(data: dict, key: str) -> dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _first_condition(data: dict) -> dict:
    weather = data.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        return weather[0]
    return {}


def _int_or(value, default):
    number = finite_number(value)
    return int(number) if number is not None else default
