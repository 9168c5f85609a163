"""Commerce events."""

from typing import Any, Literal, Optional

from kepixel.core.events.base import CommerceEvent, TrackingEvent


class PurchaseEvent(CommerceEvent):
    """Order completed."""

    event_name: Literal["purchase"] = "purchase"
    order_id: Optional[Any] = None
    description: Optional[Any] = None


class AddToCartEvent(CommerceEvent):
    """Product added to the cart."""

    event_name: Literal["add_to_cart"] = "add_to_cart"
    description: Optional[Any] = None


class InitiateCheckoutEvent(CommerceEvent):
    event_name: Literal["initiate_checkout"] = "initiate_checkout"


class AddPaymentInfoEvent(CommerceEvent):
    event_name: Literal["add_payment_info"] = "add_payment_info"


class AddToWishlistEvent(TrackingEvent):
    event_name: Literal["add_to_wishlist"] = "add_to_wishlist"
    items: Optional[Any] = None


class ViewContentEvent(TrackingEvent):
    """A single product or content item was viewed."""

    event_name: Literal["view_content"] = "view_content"
    id: Optional[Any] = None
    name: Optional[Any] = None
    currency: Optional[Any] = None
    type: Optional[Any] = None
    value: Optional[Any] = None


class ListViewEvent(TrackingEvent):
    """A product list was viewed."""

    event_name: Literal["list_view"] = "list_view"
    id: Optional[Any] = None
    name: Optional[Any] = None
    category: Optional[Any] = None
    type: Optional[Any] = None


class SearchEvent(TrackingEvent):
    event_name: Literal["search"] = "search"
    search_string: Optional[Any] = None
