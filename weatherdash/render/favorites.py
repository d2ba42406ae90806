"""Saved locations and theme preference, kept in local storage."""

import json
import logging

from weatherdash.errors import ValidationError
from weatherdash.models.favorites import (
    CoordinatedFavorite,
    FavoriteLocation,
    LegacyName,
    favorite_from_storage,
)
from weatherdash.render.view import ViewState
from weatherdash.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"
THEME_KEY = "theme"
THEMES = ("dark", "light")
DEFAULT_THEME = "dark"
DEFAULT_NAME = "Saved Location"


class FavoritesStore:
    """Ordered list of saved locations, in insertion order."""

    def __init__(self, store: LocalStore):
        self.store = store

    def load(self) -> list[FavoriteLocation]:
        raw = self.store.get_item(FAVORITES_KEY)
        if raw is None:
            return []
        try:
            entries = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable favorites list")
            return []
        if not isinstance(entries, list):
            return []
        favorites = []
        for entry in entries:
            fav = favorite_from_storage(entry)
            if fav is not None:
                favorites.append(fav)
        return favorites

    def save(self, favorites: list[FavoriteLocation]) -> None:
        self.store.set_item(
            FAVORITES_KEY, json.dumps([f.to_storage() for f in favorites])
        )

    def add(self, name: str | None, lat: float, lon: float) -> bool:
        """Append a location unless one with the same coordinates exists.

        The same name with different coordinates is a separate entry.
        """
        favorites = self.load()
        if any(
            isinstance(f, CoordinatedFavorite) and f.same_coords(lat, lon)
            for f in favorites
        ):
            return False
        favorites.append(CoordinatedFavorite(name=name or DEFAULT_NAME, lat=lat, lon=lon))
        self.save(favorites)
        return True

    def add_current(self, view: ViewState) -> bool:
        if view.coords is None:
            return False
        lat, lon = view.coords
        return self.add(view.city_label, lat, lon)

    def remove(self, index: int) -> FavoriteLocation:
        favorites = self.load()
        if not 0 <= index < len(favorites):
            raise ValidationError(f"No saved location at index {index}")
        removed = favorites.pop(index)
        self.save(favorites)
        return removed

    def get(self, index: int) -> FavoriteLocation:
        favorites = self.load()
        if not 0 <= index < len(favorites):
            raise ValidationError(f"No saved location at index {index}")
        return favorites[index]


def fetch_params(fav: FavoriteLocation) -> dict:
    """Query parameters to load a saved location."""
    if isinstance(fav, LegacyName):
        return {"city": fav.name}
    return {"lat": fav.lat, "lon": fav.lon, "label": fav.label}


def get_theme(store: LocalStore) -> str:
    theme = store.get_item(THEME_KEY)
    return theme if theme in THEMES else DEFAULT_THEME


def set_theme(store: LocalStore, mode: str) -> str:
    if mode not in THEMES:
        raise ValidationError(f"Theme must be one of: {', '.join(THEMES)}")
    store.set_item(THEME_KEY, mode)
    return mode
