"""Fake environment for testing.

Lets tests drive visibility, activity and clicks synchronously and
inspect which handlers are attached.
"""

from typing import Callable, List, Optional, TypeVar

from kepixel.core.protocols.environment import (
    ActivationHandler,
    ActivityHandler,
    Unsubscribe,
    VisibilityHandler,
)
from kepixel.schemas.dom import ActivationEvent, ActivityKind, DomElement, VisibilityState

H = TypeVar("H", bound=Callable)


class FakeEnvironment:
    """Test implementation of EnvironmentObserver.

    Usage:
        env = FakeEnvironment(page_host="example.com")
        tracker = KepixelTracker(app_id="app", environment=env, transport=fake)
        tracker.enable_link_tracking()
        env.click(DomElement("A", {"href": "https://othersite.com/x"}))
    """

    def __init__(
        self,
        page_host: Optional[str] = "example.com",
        visibility: VisibilityState = VisibilityState.VISIBLE,
    ) -> None:
        """Initialize with a host and an initial visibility state."""
        self._page_host = page_host
        self._visibility = visibility
        self.visibility_handlers: List[VisibilityHandler] = []
        self.activity_handlers: List[ActivityHandler] = []
        self.activation_handlers: List[ActivationHandler] = []

    @property
    def visibility_state(self) -> VisibilityState:
        return self._visibility

    @property
    def page_host(self) -> Optional[str]:
        return self._page_host

    @staticmethod
    def _subscribe(handlers: List[H], handler: H) -> Unsubscribe:
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def on_visibility_change(self, handler: VisibilityHandler) -> Unsubscribe:
        """Attach a visibility handler."""
        return self._subscribe(self.visibility_handlers, handler)

    def on_user_activity(self, handler: ActivityHandler) -> Unsubscribe:
        """Attach an activity handler."""
        return self._subscribe(self.activity_handlers, handler)

    def on_element_activation(self, handler: ActivationHandler) -> Unsubscribe:
        """Attach an activation handler."""
        return self._subscribe(self.activation_handlers, handler)

    # Test helpers

    def set_visibility(self, state: VisibilityState) -> None:
        """Change visibility and notify handlers."""
        self._visibility = state
        for handler in list(self.visibility_handlers):
            handler(state)

    def emit_activity(self, kind: ActivityKind = ActivityKind.POINTER_MOVE) -> None:
        """Simulate user activity."""
        for handler in list(self.activity_handlers):
            handler(kind)

    def click(self, target: Optional[DomElement]) -> None:
        """Simulate a click on ``target``."""
        event = ActivationEvent(target=target)
        for handler in list(self.activation_handlers):
            handler(event)

    @property
    def handler_count(self) -> int:
        """Total number of attached handlers."""
        return (
            len(self.visibility_handlers)
            + len(self.activity_handlers)
            + len(self.activation_handlers)
        )
