"""Per-tracker session state.

One ``SessionState`` is created by each tracker and passed by reference to
the identity resolver, dispatcher, heartbeat scheduler and link tracker.
Nothing reads it through a global.
"""

import asyncio
import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from kepixel.schemas.item import CartItem, EcommerceView


def encode_app_id(app_id: str) -> str:
    """Base64 of the app id, used as the bearer credential."""
    return base64.b64encode(app_id.encode("utf-8")).decode("ascii")


@dataclass
class HeartbeatState:
    """Heartbeat timer state. Mutated only by the heartbeat scheduler."""

    enabled: bool = False
    active_time: float = 15.0
    last_active: float = 0.0
    timer: Optional["asyncio.Task[None]"] = field(default=None, repr=False)


@dataclass
class LinkTrackingState:
    """Automatic link tracking state. Mutated only by the link tracker."""

    enabled: bool = False
    track_content: bool = False


@dataclass
class EcommerceCart:
    """Ordered staging area for items until the next cart update or order."""

    items: List[CartItem] = field(default_factory=list)

    def add(self, item: CartItem) -> None:
        self.items.append(item)

    def clear(self) -> None:
        self.items.clear()

    def drain(self) -> List[Dict[str, Any]]:
        """Serialize the staged items and empty the cart."""
        wire = [item.to_wire() for item in self.items]
        self.clear()
        return wire

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class SessionState:
    """Mutable state shared by every component of one tracker."""

    app_id: str
    user_id: Optional[str] = None
    disabled: bool = False
    log: bool = False
    heartbeat: HeartbeatState = field(default_factory=HeartbeatState)
    link_tracking: LinkTrackingState = field(default_factory=LinkTrackingState)
    cart: EcommerceCart = field(default_factory=EcommerceCart)
    ecommerce_view: Optional[EcommerceView] = None

    @property
    def encoded_app_id(self) -> str:
        return encode_app_id(self.app_id)
