"""
Settings Management Module

Provides pydantic-based configuration management with:
- YAML configuration file loading
- Environment variable overrides (WMI_EXPORTER_*)
- Nested per-collector sections (e.g. WMI_EXPORTER_LOGICAL_DISK__VOLUME_EXCLUDE)
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .collector.logical_disk import DEFAULT_VOLUME_EXCLUDE, DEFAULT_VOLUME_INCLUDE
from .exceptions import ConfigError
from .scrape import ScrapeMode
from .wmi import DEFAULT_NAMESPACE


DEFAULT_COLLECTORS = ("cs", "logical_disk", "system")


class LogicalDiskSettings(BaseModel):
    """Options for the logical_disk collector."""

    volume_include: str = DEFAULT_VOLUME_INCLUDE
    volume_exclude: str = DEFAULT_VOLUME_EXCLUDE


class Settings(BaseSettings):
    """
    Exporter settings.

    Configuration hierarchy (lowest to highest precedence):
    1. Defaults
    2. YAML config file (--config)
    3. Environment variables (WMI_EXPORTER_*)
    4. Command-line flags (applied by the CLI)

    Examples:
        >>> settings = Settings(enabled_collectors="system,cs")
        >>> settings.enabled_collectors
        ['system', 'cs']
    """

    model_config = SettingsConfigDict(
        env_prefix="WMI_EXPORTER_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    listen_address: str = "0.0.0.0"
    listen_port: int = Field(default=9182, ge=0, le=65535)

    enabled_collectors: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_COLLECTORS)
    )
    scrape_mode: ScrapeMode = ScrapeMode.PARALLEL
    scrape_timeout: float = 10.0
    """Per-scrape collector timeout in seconds; <= 0 disables it"""

    wmi_namespace: str = DEFAULT_NAMESPACE

    log_level: str = "INFO"
    log_json: bool = False

    logical_disk: LogicalDiskSettings = Field(default_factory=LogicalDiskSettings)

    @field_validator("enabled_collectors", mode="before")
    @classmethod
    def _split_collectors(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [name.strip() for name in value.split(",") if name.strip()]
        return value

    @property
    def effective_timeout(self) -> float | None:
        return self.scrape_timeout if self.scrape_timeout > 0 else None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables override values passed in from the YAML file
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "Settings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config file; defaults only when None

        Returns:
            Settings instance

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        if config_path is None:
            return cls()

        if not config_path.exists():
            raise ConfigError("Config file not found", config_path=str(config_path))

        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Failed to read config file: {e}", config_path=str(config_path)
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigError("Config file must contain a mapping", config_path=str(config_path))

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigError(
                f"Invalid configuration: {e}", config_path=str(config_path)
            ) from e


@lru_cache
def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Settings instance
    """
    return Settings.load_from_yaml(config_path)


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings(config_path)


__all__ = [
    "DEFAULT_COLLECTORS",
    "LogicalDiskSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
