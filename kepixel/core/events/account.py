"""Account and contact events."""

from typing import Any, Literal, Optional

from kepixel.core.events.base import TrackingEvent


class SignUpEvent(TrackingEvent):
    event_name: Literal["sign_up"] = "sign_up"


class CompleteRegistrationEvent(TrackingEvent):
    """Registration flow finished. Reported to the collector as 'Sign Up'."""

    event_name: Literal["complete_registration"] = "complete_registration"
    value: Optional[Any] = None
    currency: Optional[Any] = None
    method: Optional[Any] = None


class LoginEvent(TrackingEvent):
    event_name: Literal["login"] = "login"


class ContactEvent(TrackingEvent):
    event_name: Literal["contact"] = "contact"
    method: Optional[Any] = None
