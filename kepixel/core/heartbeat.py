"""Heartbeat scheduler.

Sends a liveness ping once the page has been visible and free of user
activity for ``active_time`` seconds, measuring time on page more
accurately than page views alone.

States: disabled (initial) -> enabled via ``enable()`` -> disabled via
``disable()``. ``disable()`` is idempotent and safe before any ``enable()``.
"""

import asyncio
import time
from typing import Any, Callable, List, Optional

from kepixel.core.logging import ContextualLogger
from kepixel.core.logging import logger as default_logger
from kepixel.core.protocols.environment import EnvironmentObserver, Unsubscribe
from kepixel.core.session import HeartbeatState
from kepixel.schemas.dom import ActivityKind, VisibilityState


class HeartbeatScheduler:
    """Recurring idle check that emits heartbeat pings.

    A timer task runs ``check()`` every ``check_interval`` seconds. Activity
    and visibility observers keep ``state.last_active`` current; a switch to
    hidden forces an immediate check so the last ping is not lost when the
    page is closed.
    """

    DEFAULT_ACTIVE_TIME = 15.0
    DEFAULT_CHECK_INTERVAL = 5.0

    def __init__(
        self,
        state: HeartbeatState,
        environment: EnvironmentObserver,
        send_ping: Callable[[], Any],
        clock: Callable[[], float] = time.monotonic,
        check_interval: float = DEFAULT_CHECK_INTERVAL,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            state: Heartbeat slice of the session state (mutated in place).
            environment: Source of visibility and activity signals.
            send_ping: Called once per ping; expected to schedule the send
                and return immediately.
            clock: Monotonic time source in seconds.
            check_interval: Seconds between recurring checks.
            logger: Logger carrying tracker context.
        """
        self.state = state
        self._environment = environment
        self._send_ping = send_ping
        self._clock = clock
        self._check_interval = check_interval
        self._logger = (logger or default_logger).with_context(component="heartbeat")
        self._unsubscribers: List[Unsubscribe] = []

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    def enable(self, active_time: float = DEFAULT_ACTIVE_TIME) -> None:
        """Start (or restart) the heartbeat timer.

        Must be called from a running event loop. Enabling while already
        enabled replaces the previous timer and observers.

        Args:
            active_time: Idle seconds required before a ping is sent.
        """
        loop = asyncio.get_running_loop()
        self._teardown()

        self.state.enabled = True
        self.state.active_time = active_time
        self.state.last_active = self._clock()

        self._unsubscribers = [
            self._environment.on_visibility_change(self._on_visibility_change),
            self._environment.on_user_activity(self._on_user_activity),
        ]
        self.state.timer = loop.create_task(self._run(), name="kepixel-heartbeat")
        self._logger.debug(
            f"Heartbeat enabled (active_time={active_time}s, interval={self._check_interval}s)"
        )

    def disable(self) -> None:
        """Stop the timer and detach all observers. Pings already sent are not aborted."""
        was_enabled = self.state.enabled
        self.state.enabled = False
        self._teardown()
        if was_enabled:
            self._logger.debug("Heartbeat disabled")

    def check(self, ignore_visibility: bool = False) -> bool:
        """Send a ping if the idle threshold has been reached.

        Args:
            ignore_visibility: Skip the visible-page requirement (used when
                the page is being hidden).

        Returns:
            True if a ping was sent.
        """
        if not self.state.enabled:
            return False

        if not ignore_visibility and (
            self._environment.visibility_state != VisibilityState.VISIBLE
        ):
            return False

        now = self._clock()
        if now - self.state.last_active < self.state.active_time:
            return False

        self._send_ping()
        self.state.last_active = now
        return True

    def mark_active(self) -> None:
        """Record user activity now."""
        self.state.last_active = self._clock()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _teardown(self) -> None:
        if self.state.timer is not None:
            self.state.timer.cancel()
            self.state.timer = None
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._check_interval)
            try:
                self.check()
            except Exception as e:
                self._logger.error(f"Heartbeat check failed: {e}", exc_info=True)

    def _on_user_activity(self, kind: ActivityKind) -> None:
        self.mark_active()

    def _on_visibility_change(self, visibility: VisibilityState) -> None:
        if visibility == VisibilityState.VISIBLE:
            self.mark_active()
        else:
            self.check(ignore_visibility=True)
