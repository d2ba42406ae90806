"""Saved locations as persisted in local storage.

Older clients stored bare city names; newer ones store name plus
coordinates. Both shapes are read and written back unchanged.
"""

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class LegacyName:
    name: str

    @property
    def label(self) -> str:
        return self.name

    def to_storage(self) -> str:
        return self.name


@dataclass(frozen=True)
class CoordinatedFavorite:
    name: str
    lat: float
    lon: float
    state: str = ""
    country: str = ""

    @property
    def label(self) -> str:
        return ", ".join(p for p in (self.name, self.state, self.country) if p)

    def same_coords(self, lat: float, lon: float) -> bool:
        return self.lat == lat and self.lon == lon

    def to_storage(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "lat": self.lat, "lon": self.lon}
        if self.state:
            data["state"] = self.state
        if self.country:
            data["country"] = self.country
        return data


FavoriteLocation: TypeAlias = LegacyName | CoordinatedFavorite


def favorite_from_storage(raw: Any) -> FavoriteLocation | None:
    """Migrate one stored entry. Returns None for entries we can't read."""
    if isinstance(raw, str):
        return LegacyName(raw)
    if not isinstance(raw, dict):
        return None
    lat, lon = raw.get("lat"), raw.get("lon")
    if isinstance(lat, bool) or isinstance(lon, bool):
        return None
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        return None
    return CoordinatedFavorite(
        name=str(raw.get("name") or "Saved Location"),
        lat=lat,
        lon=lon,
        state=str(raw.get("state") or ""),
        country=str(raw.get("country") or ""),
    )
