"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from depgather.config import DEFAULT_PYPI_URL, Settings, load_settings
from depgather.errors import ConfigError


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings()
        assert settings == Settings()
        assert settings.pypi_url == DEFAULT_PYPI_URL
        assert settings.lookup_delay == 0.1

    def test_explicit_file(self, tmp_path: Path):
        path = tmp_path / "depgather.json"
        path.write_text(json.dumps({"lookup_delay": 0.5, "retry_attempts": 5}), encoding="utf-8")

        settings = load_settings(path)

        assert settings.lookup_delay == 0.5
        assert settings.retry_attempts == 5

    def test_env_config_path(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"pypi_url": "https://mirror.example.org/pypi"}), encoding="utf-8")
        monkeypatch.setenv("DEPGATHER_CONFIG", str(path))

        assert load_settings().pypi_url == "https://mirror.example.org/pypi"

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"lookup_delay": 1}), encoding="utf-8")
        monkeypatch.setenv("DEPGATHER_LOOKUP_DELAY", "0")
        monkeypatch.setenv("DEPGATHER_LOG_LEVEL", "debug")

        settings = load_settings(path)

        assert settings.lookup_delay == 0.0
        assert settings.log_level == "debug"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "cfg.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_settings(path)

    def test_non_object(self, tmp_path: Path):
        path = tmp_path / "cfg.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            load_settings(path)

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("DEPGATHER_LOOKUP_DELAY", "soon")
        with pytest.raises(ConfigError, match="DEPGATHER_LOOKUP_DELAY"):
            load_settings()


class TestSettingsValidation:
    @pytest.mark.parametrize(
        "data",
        [
            {"unknown": 1},
            {"pypi_url": ""},
            {"pypi_url": "ftp://example.org"},
            {"lookup_delay": "fast"},
            {"lookup_delay": -1},
            {"retry_attempts": 0},
            {"retry_attempts": 1.5},
            {"request_timeout": True},
            {"log_level": "LOUD"},
        ],
    )
    def test_rejects_invalid(self, data):
        with pytest.raises(ConfigError):
            Settings.from_dict(data)
