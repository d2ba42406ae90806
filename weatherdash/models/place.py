"""Geocoding results and the validated location selector."""

from dataclasses import asdict, dataclass

from weatherdash.errors import ValidationError
from weatherdash.models.common import finite_number

MISSING_SELECTOR = "Provide ?city= or ?lat=&lon="


@dataclass(frozen=True)
class Place:
    name: str
    lat: float
    lon: float
    state: str = ""
    country: str = ""

    @property
    def label(self) -> str:
        return ", ".join(p for p in (self.name, self.state, self.country) if p)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LocationQuery:
    """Either a city name or a coordinate pair, never neither."""

    city: str | None = None
    lat: float | None = None
    lon: float | None = None

    @classmethod
    def from_params(
        cls,
        city: str | None = None,
        lat: str | float | None = None,
        lon: str | float | None = None,
    ) -> "LocationQuery":
        """Build a query from raw request parameters.

        A non-empty city wins over coordinates. Raises ValidationError when
        neither selector is usable.
        """
        if city and city.strip():
            return cls(city=city.strip())
        if lat in (None, "") or lon in (None, ""):
            raise ValidationError(MISSING_SELECTOR)
        lat_f = finite_number(lat)
        lon_f = finite_number(lon)
        if lat_f is None or lon_f is None:
            raise ValidationError("lat and lon must be numbers")
        return cls(lat=lat_f, lon=lon_f)

    def to_params(self) -> dict[str, str | float]:
        if self.city:
            return {"q": self.city}
        return {"lat": self.lat, "lon": self.lon}
