"""Null environment for headless processes.

Satisfies EnvironmentObserver so a tracker can always be constructed.
There is no page: visibility is always hidden (so the heartbeat never
pings), no host is known and no signal is ever delivered.
"""

from typing import Optional

from kepixel.core.protocols.environment import (
    ActivationHandler,
    ActivityHandler,
    Unsubscribe,
    VisibilityHandler,
)
from kepixel.schemas.dom import VisibilityState


def _noop() -> None:
    return None


class NullEnvironment:
    """No-op environment used when no page bridge is configured."""

    @property
    def visibility_state(self) -> VisibilityState:
        return VisibilityState.HIDDEN

    @property
    def page_host(self) -> Optional[str]:
        return None

    def on_visibility_change(self, handler: VisibilityHandler) -> Unsubscribe:
        """No-op: nothing will ever change."""
        return _noop

    def on_user_activity(self, handler: ActivityHandler) -> Unsubscribe:
        """No-op: no user to observe."""
        return _noop

    def on_element_activation(self, handler: ActivationHandler) -> Unsubscribe:
        """No-op: no elements to click."""
        return _noop
