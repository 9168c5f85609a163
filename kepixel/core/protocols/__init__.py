"""Core protocols for dependency injection."""

from kepixel.core.protocols.environment import (
    ActivationHandler,
    ActivityHandler,
    EnvironmentObserver,
    Unsubscribe,
    VisibilityHandler,
)
from kepixel.core.protocols.transport import Transport

__all__ = [
    "ActivationHandler",
    "ActivityHandler",
    "EnvironmentObserver",
    "Transport",
    "Unsubscribe",
    "VisibilityHandler",
]
