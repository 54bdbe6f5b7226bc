"""
Configuration management for the WSF client.

This module handles loading, saving, and validating client configuration
using Pydantic models for type safety and validation.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from version import (
    __app_name__,
    __default_base_url__,
    __default_user_agent__,
    __version__,
    get_api_info,
)

logger = logging.getLogger(__name__)

ACCESS_CODE_ENV_VAR = "WSF_ACCESS_CODE"


class APIConfig(BaseModel):
    """Configuration for WSF API access."""

    access_code: str = Field(..., description="WSF API access code")
    base_url: str = Field(
        default=__default_base_url__,
        description="Base URL for API requests, with a trailing slash",
    )
    user_agent: str = Field(
        default=__default_user_agent__, description="User-Agent header value"
    )
    timeout_seconds: int = Field(
        default=10, ge=1, le=120, description="API request timeout"
    )

    @field_validator("access_code")
    @classmethod
    def validate_access_code(cls, v):
        """Validate access code is not blank."""
        if not v.strip():
            raise ValueError("Access code cannot be empty")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Validate base URL is absolute and ends with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base URL must start with http:// or https://")
        if not v.endswith("/"):
            raise ValueError("Base URL must end with a trailing slash")
        return v


class ConfigData(BaseModel):
    """Main configuration data model."""

    api: APIConfig


class ConfigurationError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class ConfigManager:
    """
    Manages client configuration with file persistence.

    Loads configuration from a JSON file, letting the ``WSF_ACCESS_CODE``
    environment variable supply or override the access code.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses the
                per-user config directory
        """
        if config_path is None:
            self.config_path = self.get_default_config_path()
        else:
            self.config_path = Path(config_path)
        self.config: Optional[ConfigData] = None
        logger.debug(f"ConfigManager initialized with path: {self.config_path}")

    @staticmethod
    def get_default_config_path() -> Path:
        """
        Get the default configuration file path.

        Uses XDG_CONFIG_HOME/wsf-client/config.json or
        ~/.config/wsf-client/config.json.

        Returns:
            Path: Default configuration file path
        """
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            config_dir = Path(xdg_config) / __app_name__
        else:
            config_dir = Path.home() / ".config" / __app_name__
        return config_dir / "config.json"

    def load_config(self, access_code: Optional[str] = None) -> ConfigData:
        """
        Load configuration from file and environment.

        The file is optional when the access code comes from the environment
        or the caller. An explicit access code wins over both and is validated
        like one read from the file.

        Args:
            access_code: Access code overriding the file and environment

        Returns:
            ConfigData: The loaded configuration

        Raises:
            ConfigurationError: If the configuration is missing or invalid
        """
        logger.debug(f"Loading config from: {self.config_path}")

        data: dict = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in config file: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Failed to read config: {e}") from e
            if not isinstance(data, dict):
                raise ConfigurationError("Config file must contain a JSON object")
        else:
            logger.info(f"Config file doesn't exist: {self.config_path}")

        env_access_code = os.environ.get(ACCESS_CODE_ENV_VAR)
        if env_access_code:
            data = self._with_access_code(data, env_access_code)
            logger.debug(f"Using access code from {ACCESS_CODE_ENV_VAR}")

        if access_code is not None:
            data = self._with_access_code(data, access_code)
            logger.debug("Using access code supplied by caller")

        if "api" not in data:
            raise ConfigurationError(
                f"No API access code configured; set {ACCESS_CODE_ENV_VAR} "
                f"or create {self.config_path}"
            )

        try:
            self.config = ConfigData(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Failed to load config: {e}") from e

        logger.debug(f"Successfully loaded config from: {self.config_path}")
        return self.config

    @staticmethod
    def _with_access_code(data: dict, access_code: str) -> dict:
        """Return config data with the API access code replaced."""
        api_data = dict(data.get("api") or {})
        api_data["access_code"] = access_code
        return {**data, "api": api_data}

    def save_config(self, config: ConfigData) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration data to save

        Returns:
            bool: True if saved successfully, False otherwise
        """
        logger.info(f"Saving config to: {self.config_path}")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(), f, indent=2, ensure_ascii=False)

            self.config = config
            logger.info(f"Successfully saved config to: {self.config_path}")
            return True

        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")
            return False

    def get_config_summary(self) -> dict:
        """
        Get a summary of current configuration for display.

        Returns:
            dict: Configuration summary
        """
        if self.config is None:
            self.load_config()

        api_info = get_api_info()
        return {
            "app_version": __version__,
            "provider": api_info["provider"],
            "documentation": api_info["documentation"],
            "base_url": self.config.api.base_url,
            "user_agent": self.config.api.user_agent,
            "timeout": f"{self.config.api.timeout_seconds} seconds",
            "api_configured": "Yes" if self.config.api.access_code else "No",
        }
