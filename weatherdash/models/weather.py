"""Weather data models: current readings, forecast samples, daily summaries."""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Coord:
    lat: float | None
    lon: float | None


@dataclass(frozen=True)
class CurrentWeatherReading:
    location: str
    country: str
    coord: Coord
    timezone: int  # seconds offset from UTC
    dt: int | None  # observation time, unix
    temp: float | None  # °C
    feels_like: float | None  # °C
    humidity: int | None  # % 0-100
    wind_speed: float | None  # m/s
    sunrise: int | None
    sunset: int | None
    description: str
    alerts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ForecastSample:
    timestamp: int  # unix, UTC
    temp_max: float | None = None
    temp_min: float | None = None
    temp: float | None = None
    description: str | None = None


@dataclass(frozen=True)
class DailyForecast:
    date: str  # UTC-midnight ISO string of the city-local day
    temp_max: float | None
    temp_min: float | None
    description: str

    def to_dict(self) -> dict:
        return asdict(self)
