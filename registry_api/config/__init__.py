"""
Configuration management for Registry API.

Loads settings from environment variables and an optional .env file.
"""

from registry_api.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
