"""EnvironmentObserver protocol for passive page hooks.

The heartbeat scheduler and link tracker never touch a browser directly.
They subscribe through this protocol, which lets tests drive them with
synthetic events and lets headless processes run with no hooks at all.

Usage:
    unsubscribe = environment.on_user_activity(lambda kind: ...)
    ...
    unsubscribe()
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from kepixel.schemas.dom import ActivationEvent, ActivityKind, VisibilityState

Unsubscribe = Callable[[], None]
VisibilityHandler = Callable[[VisibilityState], None]
ActivityHandler = Callable[[ActivityKind], None]
ActivationHandler = Callable[[ActivationEvent], None]


@runtime_checkable
class EnvironmentObserver(Protocol):
    """Source of visibility, activity and element-activation signals.

    Handlers are plain callables invoked synchronously on the event loop
    thread. Each ``on_*`` method returns a callable that detaches the
    handler; calling it more than once is a no-op.
    """

    @property
    def visibility_state(self) -> VisibilityState:
        """Current page visibility."""
        ...

    @property
    def page_host(self) -> Optional[str]:
        """Host name of the current page, or None when unknown."""
        ...

    def on_visibility_change(self, handler: VisibilityHandler) -> Unsubscribe:
        """Subscribe to visibility transitions."""
        ...

    def on_user_activity(self, handler: ActivityHandler) -> Unsubscribe:
        """Subscribe to pointer, key, scroll and click activity."""
        ...

    def on_element_activation(self, handler: ActivationHandler) -> Unsubscribe:
        """Subscribe to element activations (clicks)."""
        ...
