"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from wit.config import AppConfig, PrintConfig, Settings, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config == AppConfig()
        assert config.app_url == "http://localhost:3000"
        assert config.qr_size == 200
        assert config.max_batch_size == 100
        assert config.auth_api_url is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()

    def test_values_from_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "app_url: https://wit.example\n"
            "qr_size: 300\n"
            "auth_api_url: https://auth.example\n"
            "print:\n"
            "  settle_delay_ms: 500\n"
            "  command: [lp, -d, office]\n"
            "  output_dir: /tmp/labels\n"
        )
        config = load_config(path)
        assert config.app_url == "https://wit.example"
        assert config.qr_size == 300
        assert config.auth_api_url == "https://auth.example"
        assert config.print.command == ["lp", "-d", "office"]
        assert config.print.output_dir == Path("/tmp/labels")
        assert config.print.settle_delay == 0.5

    def test_null_values_fall_back_to_defaults(self, tmp_path):
        """Keys left empty in YAML keep their defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("app_url:\nqr_size:\nprint:\n  settle_delay_ms:\n")
        config = load_config(path)
        assert config.app_url == "http://localhost:3000"
        assert config.qr_size == 200
        assert config.print.settle_delay_ms == 250

    def test_invalid_qr_size(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("qr_size: 50\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestPrintConfig:
    """Tests for print settings."""

    def test_defaults(self):
        config = PrintConfig()
        assert config.settle_delay_ms == 250
        assert config.settle_delay == 0.25
        assert config.command is None

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            PrintConfig(settle_delay_ms=-1)


class TestSettings:
    """Tests for environment settings."""

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("WIT_PORT", "8080")
        monkeypatch.setenv("WIT_CONFIG_FILE", "/etc/wit/config.yaml")
        settings = Settings()
        assert settings.port == 8080
        assert settings.config_file == Path("/etc/wit/config.yaml")
