"""Event name enum: the keys every typed tracking event produces.

When adding a new typed event:
1. Add its key here
2. Map it to a canonical name in catalog.EVENT_CATEGORY_MAP
3. Define its model in the matching events module
"""

from enum import Enum


class EventName(str, Enum):
    """Internal event keys of the typed events."""

    # Commerce
    ADD_TO_CART = "add_to_cart"
    ADD_TO_WISHLIST = "add_to_wishlist"
    INITIATE_CHECKOUT = "initiate_checkout"
    ADD_PAYMENT_INFO = "add_payment_info"
    PURCHASE = "purchase"
    VIEW_CONTENT = "view_content"
    LIST_VIEW = "list_view"
    SEARCH = "search"

    # Account
    SIGN_UP = "sign_up"
    COMPLETE_REGISTRATION = "complete_registration"
    LOGIN = "login"
    CONTACT = "contact"

    # App and navigation
    PAGE_VIEW = "page_view"
    DOWNLOAD = "download"
    APP_OPEN = "app_open"
    APP_INSTALL = "app_install"
