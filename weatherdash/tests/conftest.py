"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

from weatherdash.config.schema import AppConfig, ProviderConfig, ServerConfig
from weatherdash.storage.local_store import LocalStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def paris_current() -> dict:
    return load_fixture("owm_current_paris.json")


@pytest.fixture
def paris_forecast() -> dict:
    return load_fixture("owm_forecast_paris.json")


@pytest.fixture
def paris_geocode() -> list:
    return load_fixture("owm_geocode_paris.json")


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Config pointing at a fake provider and an empty static dir."""
    return AppConfig(
        provider=ProviderConfig(
            api_key="test-key",
            base_url="https://test-owm.example.com",
            geo_base_url="https://test-owm.example.com/geo/1.0",
            ip_locate_url="https://test-ip.example.com/json/",
        ),
        server=ServerConfig(static_dir=tmp_path / "static"),
    )


@pytest.fixture
def store(tmp_path: Path) -> LocalStore:
    return LocalStore(tmp_path / "storage.json")
