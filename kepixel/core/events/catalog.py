"""Category mapper: internal event keys to the collector's canonical names.

Two naming schemes feed the same canonical vocabulary: the commerce
lifecycle keys (``order_completed``) and the short keys the typed events
produce (``purchase``). Several keys intentionally share one name.
"""

from types import MappingProxyType
from typing import Mapping

EVENT_CATEGORY_MAP: Mapping[str, str] = MappingProxyType(
    {
        # Commerce lifecycle keys
        "product_clicked": "Product Clicked",
        "product_viewed": "Product Viewed",
        "product_added": "Product Added",
        "product_removed": "Product Removed",
        "cart_viewed": "Cart Viewed",
        "checkout_started": "Checkout Started",
        "checkout_step_viewed": "Checkout Step Viewed",
        "checkout_step_completed": "Checkout Step Completed",
        "payment_info_entered": "Payment Info Entered",
        "order_updated": "Order Updated",
        "order_completed": "Order Completed",
        "order_refunded": "Order Refunded",
        "order_cancelled": "Order Cancelled",
        "coupon_entered": "Coupon Entered",
        "coupon_applied": "Coupon Applied",
        "coupon_denied": "Coupon Denied",
        "coupon_removed": "Coupon Removed",
        "products_searched": "Products Searched",
        "product_list_viewed": "Product List Viewed",
        "product_list_filtered": "Product List Filtered",
        "product_added_to_wishlist": "Product Added to Wishlist",
        "product_removed_from_wishlist": "Product Removed from Wishlist",
        "wishlist_product_added_to_cart": "Wishlist Product Added to Cart",
        "product_shared": "Product Shared",
        "cart_shared": "Cart Shared",
        "promotion_viewed": "Promotion Viewed",
        "promotion_clicked": "Promotion Clicked",
        "product_reviewed": "Product Reviewed",
        "page_loaded": "Page Loaded",
        # Short keys produced by the typed events
        "add_to_cart": "Product Added",
        "search": "Products Searched",
        "list_view": "Product List Viewed",
        "view_content": "Product Viewed",
        "initiate_checkout": "Checkout Started",
        "add_to_wishlist": "Product Added to Wishlist",
        "purchase": "Order Completed",
        "add_payment_info": "Payment Info Entered",
        "sign_up": "Sign Up",
        "complete_registration": "Sign Up",
        "login": "Login",
        "app_install": "App Install",
        "download": "Download",
        "app_open": "App Open",
        "contact": "Contact",
        "page_view": "Page Viewed",
    }
)


def canonical_event_name(key: str) -> str:
    """Return the canonical name for ``key``, or ``key`` itself when unmapped."""
    return EVENT_CATEGORY_MAP.get(key, key)
