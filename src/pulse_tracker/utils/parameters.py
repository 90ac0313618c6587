"""
Configuration and parameter loading using Pydantic.

This module provides centralized configuration management for the tracker.
All parameters are loaded from YAML and validated using Pydantic models.
"""

from pathlib import Path

import pytz
import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pulse_tracker.utils.exceptions import ErrorKind, TrackerError


class StorageConfig(BaseModel):
    """Data file and hash file locations, relative to the working directory."""

    data_file: str = "pulsepilot_data.txt"
    hash_file: str = "pulsepilot_hash.txt"


class ProcessingConfig(BaseModel):
    """Input processing configuration."""

    timezone: str = "Asia/Singapore"

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {value}")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = "pulsepilot_log.txt"
    console: bool = False


class AppConfig(BaseSettings):
    """Main application configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(env_prefix="PULSE_", case_sensitive=False)


class ParameterLoader:
    """
    Centralized parameter loader for the application.

    Loads and validates configuration from YAML files using Pydantic models.
    """

    def __init__(self, config_path: str = "config/config.yaml") -> None:
        """
        Initialize parameter loader.

        Args:
            config_path: Path to the YAML configuration file.

        Raises:
            TrackerError: If configuration file cannot be loaded or is invalid.
        """
        self.config_path = Path(config_path)
        self.config: AppConfig
        self._load_config()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file.

        Raises:
            TrackerError: If configuration file cannot be loaded or is invalid.
        """
        if not self.config_path.exists():
            raise TrackerError(
                ErrorKind.CONFIGURATION, f"Configuration file not found: {self.config_path}"
            )

        try:
            with open(self.config_path, encoding="utf-8") as f:
                config_dict = yaml.safe_load(f) or {}

            self.config = AppConfig(**config_dict)

        except yaml.YAMLError as e:
            raise TrackerError(
                ErrorKind.CONFIGURATION, f"Failed to parse YAML configuration: {e}"
            ) from e
        except Exception as e:
            raise TrackerError(
                ErrorKind.CONFIGURATION, f"Failed to load configuration: {e}"
            ) from e

    def get_storage_config(self) -> StorageConfig:
        """Get data file configuration."""
        return self.config.storage

    def get_processing_config(self) -> ProcessingConfig:
        """Get input processing configuration."""
        return self.config.processing

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        return self.config.logging
