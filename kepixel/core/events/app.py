"""App lifecycle, navigation and custom events."""

from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from kepixel.core.events.base import TrackingEvent


class PageViewEvent(TrackingEvent):
    event_name: Literal["page_view"] = "page_view"
    id: Optional[Any] = None
    name: Optional[Any] = None
    category: Optional[Any] = None
    type: Optional[Any] = None
    ecommerce_view: Optional[Any] = None


class DownloadEvent(TrackingEvent):
    """A file download, tracked explicitly or by the link tracker."""

    event_name: Literal["download"] = "download"
    download: Any = Field(...)
    content_type: Optional[Any] = None
    content_id: Optional[Any] = None

    @field_validator("download")
    @classmethod
    def download_is_present(cls, value: Any) -> Any:
        """A download without a path or URL cannot be tracked."""
        if value is None or value == "":
            raise ValueError("download must not be empty")
        return value


class AppOpenEvent(TrackingEvent):
    event_name: Literal["app_open"] = "app_open"
    app_name: Optional[Any] = None
    app_version: Optional[Any] = None


class AppInstallEvent(TrackingEvent):
    event_name: Literal["app_install"] = "app_install"
    app_name: Optional[Any] = None
    app_version: Optional[Any] = None


class CustomEvent(TrackingEvent):
    """Caller-named event.

    The name passes through the category mapper unchanged unless it
    happens to match a catalog key. All other keywords are extension
    fields.
    """
