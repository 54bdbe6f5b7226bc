"""
Configuration management for the WSF client.
"""

from .config_manager import APIConfig, ConfigData, ConfigManager, ConfigurationError

__all__ = ["APIConfig", "ConfigData", "ConfigManager", "ConfigurationError"]
