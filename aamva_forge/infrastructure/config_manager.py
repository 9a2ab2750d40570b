"""Configuration Manager.

Loads codec configuration from environment variables (with optional .env
support) or from a JSON file, and validates it with a Pydantic model before
use.

Architecture:
    - Infrastructure layer isolated from the domain
    - Type-safe configuration using Pydantic models
    - Fail-fast validation prevents runtime errors
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from aamva_forge.domain.ports import ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class CodecConfig(BaseModel):
    """Codec and CLI configuration.

    Parameters:
        default_jurisdiction: Jurisdiction code used when none is given or detected
        log_level: Logging level name
        log_json: Emit structured JSON logs
        report_dir: Directory where saved validation reports are written
    """

    default_jurisdiction: str = Field("CA", description="Default two-letter jurisdiction code")
    log_level: str = Field("INFO", description="Logging level")
    log_json: bool = Field(False, description="Structured JSON logging")
    report_dir: str = Field("reports", description="Directory for saved validation reports")

    @field_validator("default_jurisdiction")
    @classmethod
    def validate_jurisdiction_code(cls, v: str) -> str:
        """Normalize to uppercase and require two letters."""
        code = v.strip().upper()
        if len(code) != 2 or not code.isalpha():
            raise ValueError(f"Jurisdiction code must be two letters. Got: {v}")
        return code

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}. Supported: {list(LOG_LEVELS)}")
        return level


class ConfigManager:
    """Configuration manager combining environment variables and config files.

    Example Usage:
        ```python
        config = ConfigManager.from_environment().get_codec_config()
        config = ConfigManager.from_file("aamva_forge.json").get_codec_config()
        ```
    """

    def __init__(self, config_data: Dict[str, Any]):
        """Initialize configuration manager.

        Parameters:
            config_data: Configuration dictionary
        """
        self._config_data = config_data
        self._codec_config: Optional[CodecConfig] = None

    @classmethod
    def from_environment(cls) -> 'ConfigManager':
        """Load configuration from environment variables.

        Environment Variables:
            - AF_DEFAULT_JURISDICTION: Default jurisdiction code
            - AF_LOG_LEVEL: Logging level
            - AF_LOG_JSON: "true" for structured JSON logs
            - AF_REPORT_DIR: Directory for saved validation reports

        A .env file in the project root is loaded first (python-dotenv).
        """
        env_path = Path(__file__).parent.parent.parent / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded environment variables from {env_path}")

        config_data: Dict[str, Any] = {}
        env_map = {
            "default_jurisdiction": "AF_DEFAULT_JURISDICTION",
            "log_level": "AF_LOG_LEVEL",
            "report_dir": "AF_REPORT_DIR",
        }
        for key, env_var in env_map.items():
            value = os.getenv(env_var)
            if value:
                config_data[key] = value

        log_json = os.getenv("AF_LOG_JSON")
        if log_json:
            config_data["log_json"] = log_json.strip().lower() == "true"

        return cls({"codec": config_data})

    @classmethod
    def from_file(cls, config_path: str) -> 'ConfigManager':
        """Load configuration from a JSON file.

        The file may hold the settings at the top level or under a "codec" key.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid JSON
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {str(e)}")

        if not isinstance(config_data, dict):
            raise ValueError("Configuration file must contain a JSON object")
        if "codec" not in config_data:
            config_data = {"codec": config_data}
        return cls(config_data)

    def get_codec_config(self) -> CodecConfig:
        """Get validated codec configuration.

        Raises:
            ConfigurationError: If the configuration values are invalid
        """
        if self._codec_config is None:
            try:
                self._codec_config = CodecConfig(**self._config_data.get("codec", {}))
            except ValidationError as e:
                raise ConfigurationError(f"Invalid codec configuration: {e}") from e
        return self._codec_config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (dot notation, e.g. "codec.log_level")."""
        value: Any = self._config_data
        for k in key.split("."):
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default


def get_codec_config() -> CodecConfig:
    """Convenience function to get codec configuration from environment."""
    return ConfigManager.from_environment().get_codec_config()
