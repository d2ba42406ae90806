"""Weather dashboard API: thin proxy over OpenWeather plus the static front end."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

from weatherdash.config.loader import load_config
from weatherdash.config.schema import AppConfig
from weatherdash.errors import ProviderError, ValidationError
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.common import finite_number
from weatherdash.models.place import LocationQuery
from weatherdash.pipeline.weather_service import WeatherService, parse_limit

logger = logging.getLogger(__name__)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)


def create_app(
    config: AppConfig | None = None, service: WeatherService | None = None
) -> FastAPI:
    if config is None:
        config = load_config()
    if service is None:
        service = WeatherService(OpenWeatherClient.from_config(config.provider))
    index_html = config.server.static_dir / "index.html"

    app = FastAPI(title="Weather Dashboard", version="0.1.0")
    app.state.config = config
    app.state.service = service
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Data endpoints ──────────────────────────────────────────────

    @app.get("/api/weather")
    async def get_weather(
        city: str | None = None, lat: str | None = None, lon: str | None = None
    ):
        """Current conditions plus computed advisories."""
        try:
            query = LocationQuery.from_params(city, lat, lon)
            reading = await service.current(query)
        except ValidationError as e:
            return _error(400, str(e))
        except ProviderError:
            logger.exception("Weather lookup failed for city=%s lat=%s lon=%s", city, lat, lon)
            return _error(500, "Failed to fetch weather")
        return reading.to_dict()

    @app.get("/api/forecast")
    async def get_forecast(
        city: str | None = None, lat: str | None = None, lon: str | None = None
    ):
        """Five local days of high/low/description, starting today."""
        try:
            query = LocationQuery.from_params(city, lat, lon)
            days = await service.forecast(query)
        except ValidationError as e:
            return _error(400, str(e))
        except ProviderError:
            logger.exception("Forecast lookup failed for city=%s lat=%s lon=%s", city, lat, lon)
            return _error(500, "Failed to fetch forecast")
        return {"forecast": [d.to_dict() for d in days]}

    @app.get("/api/geocode")
    async def get_geocode(
        q: str | None = None, query: str | None = None, limit: str | None = None
    ):
        """Place suggestions for free text."""
        text = q or query
        if not text:
            return _error(400, "Provide ?q=")
        try:
            places = await service.geocode(text, parse_limit(limit))
        except ProviderError:
            logger.exception("Geocode failed for q=%s", text)
            return _error(500, "Geocode failed")
        return {"results": [p.to_dict() for p in places]}

    @app.get("/api/revgeo")
    async def get_reverse_geocode(lat: str | None = None, lon: str | None = None):
        """Nice label for a coordinate pair."""
        lat_f, lon_f = finite_number(lat), finite_number(lon)
        if not lat or not lon or lat_f is None or lon_f is None:
            return _error(400, "Provide lat & lon")
        try:
            place = await service.reverse_geocode(lat_f, lon_f)
        except ProviderError:
            logger.exception("Reverse geocode failed for lat=%s lon=%s", lat, lon)
            return _error(500, "Reverse geocode failed")
        return place.to_dict()

    @app.get("/api/health")
    def get_health():
        """Quick health check."""
        return {"ok": True, "api_key_configured": bool(config.provider.api_key)}

    # ── Serve front end (SPA fallback, registered last) ─────────────

    @app.get("/{path:path}")
    def serve_index(path: str):
        if index_html.exists():
            return FileResponse(index_html, media_type="text/html")
        return HTMLResponse("<h1>Dashboard not found</h1>", status_code=404)

    return app


def run(config: AppConfig) -> None:
    import uvicorn

    app = create_app(config)
    logger.info(
        "Weather dashboard server listening on %s:%d",
        config.server.host, config.server.port,
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)
