"""Application Settings.

Combines the validated codec configuration with application metadata.
"""

from typing import Optional

from aamva_forge import __version__
from aamva_forge.infrastructure.config_manager import CodecConfig, get_codec_config

APP_NAME = "AAMVA-Forge"
APP_VERSION = __version__


class Settings:
    """Application settings loaded lazily from the configuration manager."""

    def __init__(self, config: Optional[CodecConfig] = None):
        self.app_name = APP_NAME
        self.app_version = APP_VERSION
        self._config = config

    @property
    def config(self) -> CodecConfig:
        """Codec configuration, loaded from the environment on first access."""
        if self._config is None:
            self._config = get_codec_config()
        return self._config

    def reload(self) -> None:
        """Drop the cached configuration so the next access re-reads it."""
        self._config = None


# Global settings instance
settings = Settings()
