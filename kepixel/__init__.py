"""Kepixel behavioral analytics client."""

from kepixel.core.exceptions import (
    ConfigurationError,
    KepixelException,
    MissingParameterError,
    TransportError,
)
from kepixel.schemas.item import Item
from kepixel.schemas.transport import DispatchOutcome
from kepixel.schemas.user_data import UserData
from kepixel.tracker import KepixelTracker

__all__ = [
    "ConfigurationError",
    "DispatchOutcome",
    "Item",
    "KepixelException",
    "KepixelTracker",
    "MissingParameterError",
    "TransportError",
    "UserData",
]
