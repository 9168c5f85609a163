"""Base class for all tracking events.

Every typed event is a Pydantic model carrying the shared envelope
(source, identity fragment, custom data). Keywords a subclass does not
declare are kept as extension fields and serialized alongside the
declared ones.

Event fields accept any value. Presence is checked by the advisory
validators in ``kepixel.core.validation``; an off-type value is sent as
given rather than rejected.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kepixel.schemas.item import coerce_items
from kepixel.schemas.user_data import UserData


class TrackingEvent(BaseModel):
    """Canonical unit sent downstream.

    Subclasses pin ``event_name`` to their key in the event catalog and
    add event-specific fields.
    """

    model_config = ConfigDict(extra="allow")

    event_name: str = Field(..., min_length=1)
    source: Optional[Any] = None
    user_data: Optional[UserData] = None
    custom_data: Optional[Any] = None

    @field_validator("items", mode="before", check_fields=False)
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        return coerce_items(value)

    def to_properties(self, campaign: Optional[str] = None) -> Dict[str, Any]:
        """Flatten into the ``properties`` object of a structured call.

        Unset fields are dropped; extension fields are merged in.
        """
        properties = self.model_dump(mode="json", exclude_none=True)
        if campaign is not None:
            properties["campaign"] = campaign
        return properties


class CommerceEvent(TrackingEvent):
    """Shared fields of the money-carrying commerce events."""

    value: Optional[Any] = None
    currency: Optional[Any] = None
    items: Optional[Any] = None
