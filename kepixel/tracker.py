"""Kepixel tracker facade.

``KepixelTracker`` is the public entry point. It owns one ``SessionState``
and wires the dispatcher, heartbeat scheduler and link tracker to it.

Usage:
    async def main():
        async with KepixelTracker(app_id="my-app") as tracker:
            tracker.track_purchase(
                value=42.0,
                currency="USD",
                order_id="o-1",
                user_data={"email": "u@x.com"},
            )
"""

import asyncio
import time
from typing import Any, Callable, Coroutine, Dict, Mapping, Optional, Set, Type, Union

from kepixel.adapters.environment import NullEnvironment
from kepixel.adapters.transport import HttpxTransport
from kepixel.core.config import Settings
from kepixel.core.config import settings as default_settings
from kepixel.core.dispatcher import Dispatcher
from kepixel.core.events import EVENT_TYPES, CustomEvent, EventName, TrackingEvent
from kepixel.core.exceptions import ConfigurationError, MissingParameterError
from kepixel.core.heartbeat import HeartbeatScheduler
from kepixel.core.link_tracking import LinkTracker
from kepixel.core.logging import logger as default_logger
from kepixel.core.protocols.environment import EnvironmentObserver
from kepixel.core.protocols.transport import Transport
from kepixel.core.session import SessionState
from kepixel.core.validation import is_present, warn_if_invalid_items
from kepixel.schemas.item import CartItem, EcommerceView
from kepixel.schemas.transport import DispatchOutcome
from kepixel.schemas.user_data import UserData

UserDataInput = Union[UserData, Mapping[str, Any], None]


def _require(value: Any, parameter: str, operation: str) -> None:
    if not is_present(value):
        raise MissingParameterError(parameter, operation)


class KepixelTracker:
    """Client-side tracker for one Kepixel application.

    Every ``track_*`` method validates its arguments synchronously, then
    schedules the send as a task on the running loop and returns that task.
    Callers may ignore it; failures are logged, never raised.
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        user_id: Optional[str] = None,
        log: bool = False,
        disabled: bool = False,
        transport: Optional[Transport] = None,
        environment: Optional[EnvironmentObserver] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the tracker.

        Args:
            app_id: Application identifier. Falls back to ``KEPIXEL_APP_ID``.
            user_id: Initial user id. Falls back to ``KEPIXEL_USER_ID``.
            log: Log successful sends at INFO instead of DEBUG.
            disabled: Drop every call without sending it.
            transport: Delivery adapter. Defaults to ``HttpxTransport``.
            environment: Page signal source. Defaults to ``NullEnvironment``.
            settings: Settings to read defaults from.
            clock: Monotonic time source for the heartbeat.

        Raises:
            ConfigurationError: If no application identifier is available.
        """
        self._settings = settings or default_settings

        app_id = app_id or self._settings.APP_ID
        if not app_id:
            raise ConfigurationError("appId is required for Kepixel tracking.")

        self.session = SessionState(
            app_id=app_id,
            user_id=user_id or self._settings.USER_ID,
            disabled=disabled or self._settings.DISABLED,
            log=log or self._settings.LOG,
        )
        self._logger = default_logger.with_context(app_id=app_id)

        self.transport = transport or HttpxTransport(
            timeout=self._settings.HTTP_TIMEOUT, logger=self._logger
        )
        self.environment = environment or NullEnvironment()

        self.dispatcher = Dispatcher(
            self.session, self.transport, settings=self._settings, logger=self._logger
        )
        self.heartbeat = HeartbeatScheduler(
            self.session.heartbeat,
            self.environment,
            send_ping=self._send_heartbeat,
            clock=clock,
            check_interval=self._settings.HEARTBEAT_CHECK_INTERVAL,
            logger=self._logger,
        )
        self.link_tracker = LinkTracker(
            self.session.link_tracking,
            self.environment,
            on_download=self._on_download_click,
            on_outbound=self._on_outbound_click,
            logger=self._logger,
        )

        self._pending: Set["asyncio.Task[DispatchOutcome]"] = set()

        if self.session.disabled:
            self._logger.info("Kepixel tracking is disabled")
        elif self.session.log:
            self._logger.info(f"Kepixel tracking is enabled for {app_id}")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def app_id(self) -> str:
        return self.session.app_id

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id

    def set_app_id(self, app_id: str) -> None:
        _require(app_id, "app_id", "the application")
        self.session.app_id = app_id
        self._logger = default_logger.with_context(app_id=app_id)

    def set_user_id(self, user_id: Optional[str]) -> None:
        self.session.user_id = user_id or None

    def set_log(self, log: bool) -> None:
        self.session.log = log

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def pending(self) -> int:
        """Number of sends not yet settled."""
        return len(self._pending)

    async def flush(self) -> None:
        """Wait until every scheduled send has settled."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        """Stop background producers, flush pending sends and close the transport."""
        self.heartbeat.disable()
        self.link_tracker.disable()
        await self.flush()
        await self.transport.aclose()

    async def __aenter__(self) -> "KepixelTracker":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def track(
        self, data: Mapping[str, Any], user_data: UserDataInput = None
    ) -> "asyncio.Task[DispatchOutcome]":
        """Schedule a raw dispatch of ``data``.

        Data carrying ``e_c`` goes out as a structured event; anything else
        as a legacy beacon.
        """
        return self._spawn(dict(data), UserData.coerce(user_data))

    def track_event(
        self,
        category: Optional[str],
        action: Optional[str],
        name: Any = None,
        value: Optional[Union[int, float]] = None,
        campaign: Optional[str] = None,
        user_data: UserDataInput = None,
        source: Optional[str] = None,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> "asyncio.Task[DispatchOutcome]":
        """Track a structured event.

        ``category`` is mapped to its canonical event name. When ``name`` is
        a mapping it becomes the event's properties verbatim.

        Raises:
            MissingParameterError: If ``category`` or ``action`` is empty.
        """
        _require(category, "category", "an event")
        _require(action, "action", "an event")
        data = {
            "e_c": category,
            "e_a": action,
            "e_n": name,
            "e_v": value,
            "mtm_campaign": campaign,
            "source": source,
            "custom_data": custom_data,
        }
        return self.track(data, user_data)

    def track_app_start(self, user_data: UserDataInput = None) -> "asyncio.Task[DispatchOutcome]":
        return self.track_action("App / start", user_data)

    def track_screen_view(
        self, name: Optional[str], user_data: UserDataInput = None
    ) -> "asyncio.Task[DispatchOutcome]":
        _require(name, "name", "a screen view")
        return self.track_action(f"Screen / {name}", user_data)

    def track_action(
        self, name: Optional[str], user_data: UserDataInput = None
    ) -> "asyncio.Task[DispatchOutcome]":
        _require(name, "name", "an action")
        return self.track({"action_name": name}, user_data)

    def track_site_search(
        self,
        keyword: Optional[str],
        category: Optional[str] = None,
        count: Optional[int] = None,
        user_data: UserDataInput = None,
    ) -> "asyncio.Task[DispatchOutcome]":
        _require(keyword, "keyword", "a site search")
        return self.track(
            {"search": keyword, "search_cat": category, "search_count": count}, user_data
        )

    def track_link(
        self,
        link: Optional[str],
        user_data: UserDataInput = None,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> "asyncio.Task[DispatchOutcome]":
        """Track an outbound link click."""
        _require(link, "link", "a link")
        return self.track({"link": link, "url": link, "custom_data": custom_data}, user_data)

    def track_goal(
        self,
        goal_id: Optional[Union[str, int]],
        revenue: Optional[Union[int, float]] = None,
        user_data: UserDataInput = None,
        custom_data: Optional[Dict[str, Any]] = None,
    ) -> "asyncio.Task[DispatchOutcome]":
        """Track a goal conversion. A goal id of 0 is valid."""
        _require(goal_id, "goal_id", "a goal")
        return self.track(
            {"idgoal": goal_id, "revenue": revenue, "custom_data": custom_data}, user_data
        )

    # ------------------------------------------------------------------
    # Typed business events
    # ------------------------------------------------------------------

    def track_purchase(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        """Track a completed order (``Order Completed``)."""
        return self._track_catalog_event(EventName.PURCHASE, fields)

    def track_add_to_cart(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.ADD_TO_CART, fields)

    def track_add_to_wishlist(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.ADD_TO_WISHLIST, fields)

    def track_initiate_checkout(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.INITIATE_CHECKOUT, fields)

    def track_add_payment_info(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.ADD_PAYMENT_INFO, fields)

    def track_view_content(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.VIEW_CONTENT, fields)

    def track_list_view(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.LIST_VIEW, fields)

    def track_page_view(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        """Track a page view, attaching and consuming any pending ecommerce view."""
        if self.session.ecommerce_view is not None:
            fields.setdefault("ecommerce_view", self.session.ecommerce_view.to_wire())
            self.session.ecommerce_view = None
        return self._track_catalog_event(EventName.PAGE_VIEW, fields)

    def track_search(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.SEARCH, fields)

    def track_sign_up(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.SIGN_UP, fields)

    def track_complete_registration(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.COMPLETE_REGISTRATION, fields)

    def track_login(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.LOGIN, fields)

    def track_contact(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.CONTACT, fields)

    def track_download(
        self, download: Optional[str] = None, **fields: Any
    ) -> "asyncio.Task[DispatchOutcome]":
        """Track a file download.

        Raises:
            MissingParameterError: If ``download`` is empty.
        """
        _require(download, "download", "a download")
        return self._track_catalog_event(EventName.DOWNLOAD, dict(fields, download=download))

    def track_app_open(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.APP_OPEN, fields)

    def track_app_install(self, **fields: Any) -> "asyncio.Task[DispatchOutcome]":
        return self._track_catalog_event(EventName.APP_INSTALL, fields)

    def track_custom_event(
        self, event_name: Optional[str] = None, **fields: Any
    ) -> "asyncio.Task[DispatchOutcome]":
        """Track an event outside the catalog. Its name is sent unchanged.

        Raises:
            MissingParameterError: If ``event_name`` is empty.
        """
        _require(event_name, "event_name", "a custom event")
        return self._track_typed(CustomEvent, dict(fields, event_name=str(event_name)))

    # ------------------------------------------------------------------
    # Ecommerce
    # ------------------------------------------------------------------

    def set_ecommerce_view(
        self,
        sku: Optional[str] = None,
        name: Optional[str] = None,
        category: Any = None,
        price: Optional[Union[int, float]] = None,
    ) -> None:
        """Mark the current page as a product or category view.

        The marker rides along with the next ``track_page_view``.
        """
        self.session.ecommerce_view = EcommerceView(
            sku=sku, name=name, category=category, price=price
        )

    def add_ecommerce_item(
        self,
        sku: Optional[str],
        name: Optional[str] = None,
        category: Any = None,
        price: Optional[Union[int, float]] = None,
        quantity: Union[int, float] = 1,
    ) -> None:
        """Stage an item for the next cart update or order."""
        if not sku:
            self._logger.warning("Ecommerce item ignored: a product SKU is required")
            return
        self.session.cart.add(
            CartItem(sku=sku, name=name, category=category, price=price, quantity=quantity)
        )

    def clear_ecommerce_cart(self) -> None:
        self.session.cart.clear()

    def track_ecommerce_cart_update(
        self, grand_total: Union[int, float]
    ) -> "asyncio.Task[DispatchOutcome]":
        """Send the staged cart with its total, then empty it."""
        self._warn_if_cart_empty("cart update")
        data = {
            "ecommerce_cart_update": 1,
            "revenue": grand_total,
            "ec_items": self.session.cart.drain(),
        }
        return self.track(data)

    def track_ecommerce_order(
        self,
        order_id: Optional[str],
        grand_total: Union[int, float],
        sub_total: Optional[Union[int, float]] = None,
        tax: Optional[Union[int, float]] = None,
        shipping: Optional[Union[int, float]] = None,
        discount: Optional[Union[int, float]] = None,
    ) -> "asyncio.Task[DispatchOutcome]":
        """Send an order with the staged cart, then empty it.

        Raises:
            MissingParameterError: If ``order_id`` is empty.
        """
        _require(order_id, "order_id", "an ecommerce order")
        self._warn_if_cart_empty("order")
        data = {
            "ecommerce_order": 1,
            "order_id": order_id,
            "revenue": grand_total,
            "subtotal": sub_total,
            "tax": tax,
            "shipping": shipping,
            "discount": discount,
            "ec_items": self.session.cart.drain(),
        }
        return self.track(data)

    # ------------------------------------------------------------------
    # Background producers
    # ------------------------------------------------------------------

    def enable_heart_beat_timer(self, active_time: Optional[float] = None) -> None:
        """Start heartbeat pings. Must be called from a running event loop."""
        if active_time is None:
            active_time = self._settings.HEARTBEAT_ACTIVE_TIME
        self.heartbeat.enable(active_time)

    def disable_heart_beat_timer(self) -> None:
        self.heartbeat.disable()

    def enable_link_tracking(self, track_content: bool = False) -> None:
        """Track outbound and download link clicks automatically."""
        self.link_tracker.enable(track_content=track_content)

    def disable_link_tracking(self) -> None:
        self.link_tracker.disable()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _track_catalog_event(
        self, name: EventName, fields: Dict[str, Any]
    ) -> "asyncio.Task[DispatchOutcome]":
        return self._track_typed(EVENT_TYPES[name], fields)

    def _track_typed(
        self, event_cls: Type[TrackingEvent], fields: Dict[str, Any]
    ) -> "asyncio.Task[DispatchOutcome]":
        fields = dict(fields)
        campaign = fields.pop("campaign", None)
        if fields.get("items") is not None:
            warn_if_invalid_items(fields["items"], self._logger)

        event = event_cls(**fields)
        return self.track_event(
            category=event.event_name,
            action=event.event_name,
            name=event.to_properties(campaign),
            campaign=campaign,
            user_data=event.user_data,
            source=event.source,
            custom_data=event.custom_data,
        )

    def _warn_if_cart_empty(self, operation: str) -> None:
        if not len(self.session.cart):
            self._logger.warning(f"Ecommerce {operation} sent with an empty cart")

    def _spawn(
        self, data: Dict[str, Any], user_data: Optional[UserData]
    ) -> "asyncio.Task[DispatchOutcome]":
        loop = asyncio.get_running_loop()
        coro: Coroutine[Any, Any, DispatchOutcome] = self.dispatcher.dispatch(data, user_data)
        task = loop.create_task(coro, name="kepixel-dispatch")
        self._pending.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: "asyncio.Task[DispatchOutcome]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._logger.error(f"Kepixel dispatch failed: {exc}", exc_info=exc)
            return
        outcome = task.result()
        self._logger.debug(
            f"Kepixel {outcome.endpoint.value} dispatch settled "
            f"(ok={outcome.ok}, skipped={outcome.skipped})"
        )

    def _send_heartbeat(self) -> "asyncio.Task[DispatchOutcome]":
        return self.track({"ping": 1})

    def _on_download_click(self, href: str, custom_data: Optional[Dict[str, Any]]) -> None:
        self.track_download(download=href, custom_data=custom_data)

    def _on_outbound_click(self, href: str, custom_data: Optional[Dict[str, Any]]) -> None:
        self.track_link(href, custom_data=custom_data)
