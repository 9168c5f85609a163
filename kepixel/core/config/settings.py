"""Tracker settings loaded from the environment.

Every value can be overridden per tracker through constructor arguments;
these are only the process-wide defaults.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kepixel.core.config.enums import LogFormat


class Settings(BaseSettings):
    """Kepixel client settings.

    Env vars use the ``KEPIXEL_`` prefix:
        KEPIXEL_APP_ID=my-app
        KEPIXEL_HEARTBEAT_ACTIVE_TIME=30
    """

    model_config = SettingsConfigDict(
        env_prefix="KEPIXEL_",
        env_file=".env",
        extra="ignore",
    )

    TRACKER_URL: str = Field("https://edge.kepixel.com", description="Collector base URL")
    APP_ID: Optional[str] = Field(None, description="Default application identifier")
    USER_ID: Optional[str] = Field(None, description="Default user identifier")
    LOG: bool = Field(False, description="Log every successful send at INFO level")
    DISABLED: bool = Field(False, description="Drop every tracking call")

    LOG_LEVEL: str = Field("INFO", description="Level of the package logger")
    LOG_FORMAT: LogFormat = Field(LogFormat.TEXT, description="text or json log lines")

    LANGUAGE: str = Field("en", description="Default Accept-Language for beacon calls")
    LIBRARY_NAME: str = Field("http", description="context.library.name tag")
    HTTP_TIMEOUT: float = Field(10.0, gt=0, description="Transport timeout in seconds")

    HEARTBEAT_ACTIVE_TIME: float = Field(15.0, gt=0, description="Idle seconds before a ping")
    HEARTBEAT_CHECK_INTERVAL: float = Field(5.0, gt=0, description="Seconds between checks")

    @field_validator("TRACKER_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined with a leading slash."""
        return v.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lower-case level names."""
        return v.upper()
