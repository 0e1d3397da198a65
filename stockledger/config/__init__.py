"""Configuration module."""

from stockledger.config.logging import configure_logging, get_logger
from stockledger.config.settings import (
    APISettings,
    AuthSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "StorageSettings",
    "APISettings",
    "AuthSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
