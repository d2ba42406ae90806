"""Bucket 3-hourly forecast samples into city-local calendar days.

Local days are computed by shifting each UTC timestamp by the provider's
fixed offset and reading the calendar date in UTC. The host timezone never
enters into it, and DST is never applied.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from weatherdash.models.common import finite_number, real_number, utc_now
from weatherdash.models.weather import DailyForecast, ForecastSample

MAX_DAYS = 5


@dataclass
class _DayBucket:
    day: date
    maxes: list[float] = field(default_factory=list)
    mins: list[float] = field(default_factory=list)
    descriptions: list[str] = field(default_factory=list)

    def add(self, sample: ForecastSample) -> None:
        tmax = sample.temp_max if sample.temp_max is not None else sample.temp
        tmin = sample.temp_min if sample.temp_min is not None else sample.temp
        if tmax is not None:
            self.maxes.append(tmax)
        if tmin is not None:
            self.mins.append(tmin)
        if sample.description:
            self.descriptions.append(sample.description)

    def summarize(self) -> DailyForecast:
        return DailyForecast(
            date=utc_midnight_iso(self.day),
            temp_max=max(self.maxes) if self.maxes else None,
            temp_min=min(self.mins) if self.mins else None,
            description=most_common(self.descriptions),
        )


def local_date(unix_seconds: float, offset_seconds: int) -> date:
    """City-local calendar date of a UTC instant."""
    return datetime.fromtimestamp(unix_seconds + offset_seconds, UTC).date()


def utc_midnight_iso(day: date) -> str:
    return f"{day.isoformat()}T00:00:00.000Z"


def most_common(values: list[str]) -> str:
    """Most frequent value; ties go to whichever was seen first."""
    if not values:
        return ""
    # Counter preserves insertion order, and most_common is a stable sort.
    return Counter(values).most_common(1)[0][0]


def aggregate_forecast(
    samples: list[ForecastSample],
    offset_seconds: int,
    current: ForecastSample | None = None,
    now: datetime | None = None,
) -> list[DailyForecast]:
    """Summarize samples into at most five local days starting today.

    `current`, when given, is folded into today's bucket regardless of its
    own timestamp so the first day never relies on a single late slice.
    """
    if now is None:
        now = utc_now()
    today = local_date(now.timestamp(), offset_seconds)

    buckets: dict[date, _DayBucket] = {}
    for sample in samples:
        day = local_date(sample.timestamp, offset_seconds)
        buckets.setdefault(day, _DayBucket(day)).add(sample)

    if current is not None:
        buckets.setdefault(today, _DayBucket(today)).add(current)

    days = [buckets[d].summarize() for d in sorted(buckets) if d >= today]
    return days[:MAX_DAYS]


def sample_from_provider(item: dict) -> ForecastSample | None:
    """Parse one provider forecast/current entry. None if it has no timestamp."""
    ts = real_number(item.get("dt"))
    if ts is None:
        return None
    main = item.get("main")
    if not isinstance(main, dict):
        main = {}
    weather = item.get("weather")
    first = weather[0] if isinstance(weather, list) and weather else {}
    description = first.get("description") if isinstance(first, dict) else None
    return ForecastSample(
        timestamp=int(ts),
        temp_max=real_number(main.get("temp_max")),
        temp_min=real_number(main.get("temp_min")),
        temp=real_number(main.get("temp")),
        description=description if isinstance(description, str) else None,
    )


def samples_from_provider(items: list) -> list[ForecastSample]:
    samples = []
    for item in items or []:
        if not isinstance(item, dict):
            continue
        sample = sample_from_provider(item)
        if sample is not None:
            samples.append(sample)
    return samples


def current_sample(payload: dict, now: datetime | None = None) -> ForecastSample:
    """Current-weather payload as a sample for today's bucket.

    Unlike forecast entries it doesn't need a timestamp; it is placed by
    `now`, not by `dt`.
    """
    if now is None:
        now = utc_now()
    sample = sample_from_provider({**payload, "dt": int(now.timestamp())})
    assert sample is not None
    return sample


def offset_from_payloads(forecast: dict, current: dict | None = None) -> int:
    """Provider UTC offset in seconds: forecast city first, then current."""
    city = forecast.get("city") or {}
    tz = finite_number(city.get("timezone")) if isinstance(city, dict) else None
    if tz is None and current is not None:
        tz = finite_number(current.get("timezone"))
    return int(tz) if tz is not None else 0
