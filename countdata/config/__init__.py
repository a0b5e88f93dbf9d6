"""
Configuration management for CountData.

Loads settings from environment variables and an optional .env file and
exposes a single Settings object for the database client and API server.
"""

from countdata.config.settings import Settings, get_settings, reset_settings_cache  # noqa: F401

__all__ = ["Settings", "get_settings", "reset_settings_cache"]
