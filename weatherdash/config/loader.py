"""YAML config loader with environment overrides."""

import logging
import os
from pathlib import Path

import yaml

from weatherdash.config.schema import AppConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"
PORT_ENV = "PORT"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from an optional YAML file.

    OPENWEATHER_API_KEY and PORT from the environment override the file.
    A missing API key is logged, not fatal.
    """
    raw: dict = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.warning("Config file %s not found, using defaults", path)

    api_key = os.environ.get(API_KEY_ENV)
    if api_key:
        raw.setdefault("provider", {})["api_key"] = api_key
    port = os.environ.get(PORT_ENV)
    if port:
        raw.setdefault("server", {})["port"] = port

    config = AppConfig(**raw)
    if not config.provider.api_key:
        logger.warning(
            "No OpenWeather API key provided. Set %s or provider.api_key.",
            API_KEY_ENV,
        )
    return config
