"""CLI entry point for the weather dashboard."""

import argparse
import asyncio
import logging

from weatherdash.config.loader import load_config
from weatherdash.config.schema import AppConfig, Units
from weatherdash.errors import ProviderError, ValidationError
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.place import LocationQuery
from weatherdash.pipeline.weather_service import WeatherService
from weatherdash.render.favorites import (
    THEMES,
    FavoritesStore,
    fetch_params,
    get_theme,
    set_theme,
)
from weatherdash.render.geolocation import approximate_location
from weatherdash.render.suggestions import SuggestionFeed, SuggestionList
from weatherdash.render.view import (
    ViewState,
    apply_fetch,
    render_error,
    render_forecast,
    render_weather,
)
from weatherdash.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "weatherdash.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="Current weather and 5-day forecast dashboard",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--storage", help="Local storage JSON path")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP server")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)

    # weather
    weather_p = sub.add_parser("weather", help="Show current weather and forecast")
    weather_p.add_argument("city", nargs="?")
    weather_p.add_argument("--lat")
    weather_p.add_argument("--lon")
    weather_p.add_argument("--units", choices=[u.value for u in Units])
    weather_p.add_argument(
        "--save", action="store_true", help="Add the location to favorites"
    )

    # here
    here_p = sub.add_parser("here", help="Weather for your approximate location")
    here_p.add_argument("--units", choices=[u.value for u in Units])

    # suggest
    suggest_p = sub.add_parser("suggest", help="Suggest places matching text")
    suggest_p.add_argument("text")

    # favorites list / remove / load
    fav_p = sub.add_parser("favorites", help="Saved locations")
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="List saved locations")
    rm_p = fav_sub.add_parser("remove", help="Remove a saved location")
    rm_p.add_argument("index", type=int)
    load_p = fav_sub.add_parser("load", help="Show weather for a saved location")
    load_p.add_argument("index", type=int)
    load_p.add_argument("--units", choices=[u.value for u in Units])

    # theme
    theme_p = sub.add_parser("theme", help="Show or set the color theme")
    theme_p.add_argument("mode", nargs="?", choices=THEMES)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    store = LocalStore(args.storage or config.client.storage_path)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "weather":
        return _cmd_weather(config, store, args)
    elif args.command == "here":
        return _cmd_here(config, store, args)
    elif args.command == "suggest":
        return _cmd_suggest(config, args)
    elif args.command == "favorites":
        return _cmd_favorites(config, store, args)
    elif args.command == "theme":
        return _cmd_theme(store, args)
    else:
        parser.print_help()
        return 1


def _service(config: AppConfig) -> WeatherService:
    return WeatherService(OpenWeatherClient.from_config(config.provider))


def _units(config: AppConfig, args) -> Units:
    return Units(args.units) if getattr(args, "units", None) else config.client.units


def _cmd_serve(config: AppConfig, args) -> int:
    from weatherdash.server import run

    update = {}
    if args.host:
        update["host"] = args.host
    if args.port:
        update["port"] = args.port
    if update:
        config = config.model_copy(
            update={"server": config.server.model_copy(update=update)}
        )
    run(config)
    return 0


async def _fetch_view(
    service: WeatherService, query: LocationQuery, view: ViewState, label: str | None
) -> ViewState:
    weather = await service.current(query)
    forecast = await service.forecast(query)
    return apply_fetch(view, weather, forecast, label)


def _show(
    config: AppConfig,
    units: Units,
    city: str | None = None,
    lat=None,
    lon=None,
    label: str | None = None,
) -> ViewState | None:
    try:
        query = LocationQuery.from_params(city, lat, lon)
        view = asyncio.run(
            _fetch_view(_service(config), query, ViewState(unit=units), label)
        )
    except (ValidationError, ProviderError) as e:
        print(render_error(str(e)))
        return None

    for line in render_weather(view.weather, units):
        print(line)
    print()
    for line in render_forecast(view.forecast, units):
        print(line)
    return view


def _cmd_weather(config: AppConfig, store: LocalStore, args) -> int:
    view = _show(config, _units(config, args), args.city, args.lat, args.lon)
    if view is None:
        return 1
    if args.save:
        if FavoritesStore(store).add_current(view):
            print(f"Saved {view.city_label}")
        else:
            print(f"{view.city_label} is already saved")
    return 0


def _cmd_here(config: AppConfig, store: LocalStore, args) -> int:
    client = OpenWeatherClient.from_config(config.provider)
    coords = asyncio.run(approximate_location(client))
    if coords is None:
        print(render_error("Couldn’t determine your approximate location."))
        return 1
    lat, lon = coords
    view = _show(config, _units(config, args), lat=lat, lon=lon)
    return 0 if view is not None else 1


def _cmd_suggest(config: AppConfig, args) -> int:
    service = _service(config)
    suggestions = SuggestionList(
        min_chars=config.client.suggest_min_chars, limit=config.client.suggest_limit
    )
    feed = SuggestionFeed(
        service.geocode, suggestions, delay=config.client.suggest_debounce_ms / 1000
    )
    asyncio.run(feed.request(args.text))
    if not suggestions.visible:
        print("No suggestions.")
        return 0
    for i, place in enumerate(suggestions.items):
        print(f"{i}. {place.label}  ({place.lat:.2f}, {place.lon:.2f})")
    return 0


def _cmd_favorites(config: AppConfig, store: LocalStore, args) -> int:
    favorites = FavoritesStore(store)
    if args.favorites_command == "list":
        items = favorites.load()
        if not items:
            print("No saved locations.")
        for i, fav in enumerate(items):
            print(f"{i}. {fav.label}")
        return 0
    elif args.favorites_command == "remove":
        try:
            removed = favorites.remove(args.index)
        except ValidationError as e:
            print(render_error(str(e)))
            return 1
        print(f"Removed {removed.label}")
        return 0
    elif args.favorites_command == "load":
        try:
            fav = favorites.get(args.index)
        except ValidationError as e:
            print(render_error(str(e)))
            return 1
        view = _show(config, _units(config, args), **fetch_params(fav))
        return 0 if view is not None else 1
    else:
        print("Use: favorites list | favorites remove INDEX | favorites load INDEX")
        return 1


def _cmd_theme(store: LocalStore, args) -> int:
    if args.mode:
        set_theme(store, args.mode)
    print(f"Theme: {get_theme(store)}")
    return 0
