"""Logging for the Kepixel client.

All modules log through ``ContextualLogger``, a ``LoggerAdapter`` that
carries key/value dimensions (app id, component, ...) and renders them
into every record.

Usage:
    from kepixel.core.logging import logger

    tracker_logger = logger.with_context(app_id="my-app")
    tracker_logger.warning("Invalid user_data")
"""

import json
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from kepixel.core.config import LogFormat, settings

LOGGER_NAME = "kepixel"


class _TextFormatter(logging.Formatter):
    """Plain text with ``key=value`` dimensions appended."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dims = getattr(record, "dimensions", None)
        if dims:
            rendered = " ".join(f"{k}={v}" for k, v in dims.items())
            return f"{base} [{rendered}]"
        return base


class _JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "dimensions", None) or {})
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter with immutable context dimensions.

    ``with_context`` and ``with_prefix`` return new adapters, so a derived
    logger never leaks its dimensions back into its parent.
    """

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with the given dimensions and message prefix."""
        super().__init__(logger, {})
        self.dimensions: Dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["dimensions"] = {**self.dimensions, **extra.get("dimensions", {})}
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a logger carrying additional dimensions."""
        return ContextualLogger(
            self.logger, {**self.dimensions, **dimensions}, prefix=self.prefix
        )

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, prefix=self.prefix + prefix)


def _configure_base_logger() -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(settings.LOG_LEVEL)

    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        if settings.LOG_FORMAT == LogFormat.JSON:
            handler.setFormatter(_JsonFormatter())
        else:
            handler.setFormatter(
                _TextFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
        base.addHandler(handler)

    return base


logger = ContextualLogger(_configure_base_logger())
