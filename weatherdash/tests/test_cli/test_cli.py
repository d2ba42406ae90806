"""Tests for CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
import respx

from weatherdash.cli import main

BASE = "https://api.openweathermap.org"


@pytest.fixture
def base_args(tmp_path: Path) -> list[str]:
    config_path = tmp_path / "test.yaml"
    config_path.write_text("provider:\n  api_key: test-key\n")
    return ["--config", str(config_path), "--storage", str(tmp_path / "storage.json")]


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        assert main([]) == 1

    def test_theme(self, base_args: list[str], capsys):
        assert main([*base_args, "theme"]) == 0
        assert "dark" in capsys.readouterr().out

        assert main([*base_args, "theme", "light"]) == 0
        assert "light" in capsys.readouterr().out

    def test_favorites_empty(self, base_args: list[str], capsys):
        assert main([*base_args, "favorites", "list"]) == 0
        assert "No saved locations." in capsys.readouterr().out

    def test_favorites_remove(self, base_args: list[str], tmp_path: Path, capsys):
        storage = tmp_path / "storage.json"
        storage.write_text(json.dumps({"favorites": json.dumps(["London", "Oslo"])}))

        assert main([*base_args, "favorites", "remove", "0"]) == 0
        assert "Removed London" in capsys.readouterr().out

        assert main([*base_args, "favorites", "list"]) == 0
        assert "0. Oslo" in capsys.readouterr().out

    def test_favorites_remove_out_of_range(self, base_args: list[str], capsys):
        assert main([*base_args, "favorites", "remove", "3"]) == 1

    def test_weather_requires_selector(self, base_args: list[str], capsys):
        assert main([*base_args, "weather"]) == 1
        assert "Provide ?city= or ?lat=&lon=" in capsys.readouterr().out

    @respx.mock
    def test_weather_and_save(
        self, base_args: list[str], paris_current: dict, paris_forecast: dict, capsys
    ):
        respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=paris_current)
        )
        respx.get(f"{BASE}/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=paris_forecast)
        )

        assert main([*base_args, "weather", "Paris", "--units", "imperial", "--save"]) == 0
        out = capsys.readouterr().out
        assert "Paris, FR" in out
        assert "45.5°F" in out
        assert "Saved Paris, FR" in out

        assert main([*base_args, "weather", "Paris", "--save"]) == 0
        assert "already saved" in capsys.readouterr().out

    @respx.mock
    def test_weather_provider_failure(self, base_args: list[str], capsys):
        respx.get(f"{BASE}/data/2.5/weather").mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )

        assert main([*base_args, "weather", "InvalidPlaceName"]) == 1
        assert "Error:" in capsys.readouterr().out

    @respx.mock
    def test_suggest(self, base_args: list[str], paris_geocode: list, capsys):
        respx.get(f"{BASE}/geo/1.0/direct").mock(
            return_value=httpx.Response(200, json=paris_geocode)
        )

        assert main([*base_args, "suggest", "Paris"]) == 0
        out = capsys.readouterr().out
        assert "0. Paris, Ile-de-France, FR" in out
        assert "4. Paris, Illinois, US" in out

    def test_suggest_too_short(self, base_args: list[str], capsys):
        assert main([*base_args, "suggest", "P"]) == 0
        assert "No suggestions." in capsys.readouterr().out

    @respx.mock
    def test_here_without_location(self, base_args: list[str], capsys):
        respx.get("https://ipapi.co/json/").mock(side_effect=httpx.ConnectError("offline"))

        assert main([*base_args, "here"]) == 1
        assert "approximate location" in capsys.readouterr().out

    def test_serve_overrides(self, base_args: list[str]):
        with patch("weatherdash.server.run") as run:
            assert main([*base_args, "serve", "--port", "8123"]) == 0
        config = run.call_args.args[0]
        assert config.server.port == 8123
