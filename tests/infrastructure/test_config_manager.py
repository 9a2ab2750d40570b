"""Tests for configuration loading, settings and logging setup."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from aamva_forge.domain.ports import ConfigurationError
from aamva_forge.infrastructure.config_manager import (
    CodecConfig,
    ConfigManager,
    get_codec_config,
)
from aamva_forge.infrastructure.logging_config import StructuredFormatter, setup_logging
from aamva_forge.infrastructure.settings import Settings


class TestCodecConfig:
    """Test CodecConfig validation."""

    def test_defaults(self):
        config = CodecConfig()

        assert config.default_jurisdiction == "CA"
        assert config.log_level == "INFO"
        assert config.log_json is False
        assert config.report_dir == "reports"

    def test_values_are_normalized(self):
        config = CodecConfig(default_jurisdiction=" tx ", log_level="debug")

        assert config.default_jurisdiction == "TX"
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("kwargs", [
        {"default_jurisdiction": "TEX"},
        {"default_jurisdiction": "1A"},
        {"log_level": "VERBOSE"},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            CodecConfig(**kwargs)


class TestConfigManager:
    """Test loading configuration from environment and files."""

    def test_from_environment(self):
        env = {
            "AF_DEFAULT_JURISDICTION": "ny",
            "AF_LOG_LEVEL": "warning",
            "AF_LOG_JSON": "true",
            "AF_REPORT_DIR": "/tmp/reports",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ConfigManager.from_environment().get_codec_config()

        assert config.default_jurisdiction == "NY"
        assert config.log_level == "WARNING"
        assert config.log_json is True
        assert config.report_dir == "/tmp/reports"

    def test_from_environment_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = get_codec_config()

        assert config == CodecConfig()

    def test_invalid_environment_raises_configuration_error(self):
        with patch.dict(os.environ, {"AF_LOG_LEVEL": "LOUD"}, clear=True):
            manager = ConfigManager.from_environment()
            with pytest.raises(ConfigurationError):
                manager.get_codec_config()

    def test_from_file(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"default_jurisdiction": "FL", "log_json": True}))

        manager = ConfigManager.from_file(str(config_file))

        assert manager.get_codec_config().default_jurisdiction == "FL"
        assert manager.get("codec.log_json") is True
        assert manager.get("codec.missing", "fallback") == "fallback"

    def test_from_file_with_codec_section(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"codec": {"report_dir": "out"}}))

        assert ConfigManager.from_file(str(config_file)).get_codec_config().report_dir == "out"

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager.from_file(str(tmp_path / "nope.json"))

    def test_from_file_invalid_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with pytest.raises(ValueError):
            ConfigManager.from_file(str(config_file))


class TestSettings:

    def test_lazy_config_and_reload(self):
        with patch.dict(os.environ, {"AF_DEFAULT_JURISDICTION": "TX"}, clear=True):
            settings = Settings()
            assert settings.config.default_jurisdiction == "TX"

            os.environ["AF_DEFAULT_JURISDICTION"] = "FL"
            assert settings.config.default_jurisdiction == "TX"

            settings.reload()
            assert settings.config.default_jurisdiction == "FL"

    def test_explicit_config(self):
        settings = Settings(config=CodecConfig(default_jurisdiction="NY"))
        assert settings.config.default_jurisdiction == "NY"


class TestLogging:

    def test_structured_formatter_emits_json(self):
        record = logging.LogRecord("aamva_forge.test", logging.INFO, __file__, 10, "decoded %d", (3,), None)

        data = json.loads(StructuredFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "aamva_forge.test"
        assert data["message"] == "decoded 3"
        assert data["timestamp"].endswith("Z")

    def test_setup_logging(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(use_json=True, log_level="debug")

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
