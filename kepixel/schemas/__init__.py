"""Schemas for the Kepixel client."""

from kepixel.schemas.dom import ActivationEvent, ActivityKind, DomElement, VisibilityState
from kepixel.schemas.item import REQUIRED_ITEM_FIELDS, CartItem, EcommerceView, Item
from kepixel.schemas.transport import (
    DispatchOutcome,
    Endpoint,
    TransportRequest,
    TransportResponse,
)
from kepixel.schemas.user_data import UserData

__all__ = [
    "ActivationEvent",
    "ActivityKind",
    "CartItem",
    "DispatchOutcome",
    "DomElement",
    "EcommerceView",
    "Endpoint",
    "Item",
    "REQUIRED_ITEM_FIELDS",
    "TransportRequest",
    "TransportResponse",
    "UserData",
    "VisibilityState",
]
