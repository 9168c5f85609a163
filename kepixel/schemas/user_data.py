"""Identity fragment schema."""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict


class UserData(BaseModel):
    """Partial set of user-identifying attributes supplied with a tracking call.

    The four known signals are declared fields that accept any value. Any
    other keyword (``app_version``, ``device_model``, ...) is kept as an
    extension field and only merged back in when the fragment is flattened
    into traits.
    """

    model_config = ConfigDict(extra="allow")

    email: Optional[Any] = None
    phone: Optional[Any] = None
    name: Optional[Any] = None
    id: Optional[Any] = None

    def to_traits(self) -> Dict[str, Any]:
        """Flatten known and extension fields, dropping unset values."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def coerce(cls, value: Union["UserData", Mapping[str, Any], None]) -> Optional["UserData"]:
        """Accept a ``UserData``, a plain mapping or ``None``."""
        if value is None or isinstance(value, UserData):
            return value
        return cls(**dict(value))
