"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, Field


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org"
    geo_base_url: str = "https://api.openweathermap.org/geo/1.0"
    ip_locate_url: str = "https://ipapi.co/json/"
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]
    static_dir: Path = Path(__file__).parent.parent / "static"


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    units: Units = Units.METRIC
    storage_path: Path = Path.home() / ".weatherdash" / "storage.json"
    suggest_min_chars: int = Field(default=2, ge=1)
    suggest_limit: int = Field(default=5, ge=1, le=10)
    suggest_debounce_ms: int = Field(default=250, ge=0)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    server: ServerConfig = ServerConfig()
    client: ClientConfig = ClientConfig()
