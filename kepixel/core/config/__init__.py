"""Configuration module for the Kepixel client.

Usage:
    from kepixel.core.config import settings

    if settings.DISABLED:
        ...
"""

from kepixel.core.config.enums import LogFormat
from kepixel.core.config.settings import Settings

__all__ = [
    "LogFormat",
    "Settings",
    "settings",
]

# Singleton settings instance
settings = Settings()
