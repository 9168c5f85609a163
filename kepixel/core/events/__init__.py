"""Tracking event models and the event catalog."""

from typing import Dict, Type

from kepixel.core.events.account import (
    CompleteRegistrationEvent,
    ContactEvent,
    LoginEvent,
    SignUpEvent,
)
from kepixel.core.events.app import (
    AppInstallEvent,
    AppOpenEvent,
    CustomEvent,
    DownloadEvent,
    PageViewEvent,
)
from kepixel.core.events.base import CommerceEvent, TrackingEvent
from kepixel.core.events.catalog import EVENT_CATEGORY_MAP, canonical_event_name
from kepixel.core.events.commerce import (
    AddPaymentInfoEvent,
    AddToCartEvent,
    AddToWishlistEvent,
    InitiateCheckoutEvent,
    ListViewEvent,
    PurchaseEvent,
    SearchEvent,
    ViewContentEvent,
)
from kepixel.core.events.enums import EventName

# Typed event class for every catalog key
EVENT_TYPES: Dict[EventName, Type[TrackingEvent]] = {
    EventName.ADD_TO_CART: AddToCartEvent,
    EventName.ADD_TO_WISHLIST: AddToWishlistEvent,
    EventName.INITIATE_CHECKOUT: InitiateCheckoutEvent,
    EventName.ADD_PAYMENT_INFO: AddPaymentInfoEvent,
    EventName.PURCHASE: PurchaseEvent,
    EventName.VIEW_CONTENT: ViewContentEvent,
    EventName.LIST_VIEW: ListViewEvent,
    EventName.SEARCH: SearchEvent,
    EventName.SIGN_UP: SignUpEvent,
    EventName.COMPLETE_REGISTRATION: CompleteRegistrationEvent,
    EventName.LOGIN: LoginEvent,
    EventName.CONTACT: ContactEvent,
    EventName.PAGE_VIEW: PageViewEvent,
    EventName.DOWNLOAD: DownloadEvent,
    EventName.APP_OPEN: AppOpenEvent,
    EventName.APP_INSTALL: AppInstallEvent,
}

__all__ = [
    "AddPaymentInfoEvent",
    "AddToCartEvent",
    "AddToWishlistEvent",
    "AppInstallEvent",
    "AppOpenEvent",
    "CommerceEvent",
    "CompleteRegistrationEvent",
    "ContactEvent",
    "CustomEvent",
    "DownloadEvent",
    "EVENT_CATEGORY_MAP",
    "EVENT_TYPES",
    "EventName",
    "InitiateCheckoutEvent",
    "ListViewEvent",
    "LoginEvent",
    "PageViewEvent",
    "PurchaseEvent",
    "SearchEvent",
    "SignUpEvent",
    "TrackingEvent",
    "ViewContentEvent",
    "canonical_event_name",
]
