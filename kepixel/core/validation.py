"""Advisory validation of identity fragments and line items.

Nothing here raises or blocks a send. A failed check is reported as a
warning and the call proceeds with the data as given.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional

from kepixel.core.logging import ContextualLogger
from kepixel.core.logging import logger as default_logger
from kepixel.schemas.item import REQUIRED_ITEM_FIELDS, Item
from kepixel.schemas.user_data import UserData

IDENTITY_FIELDS = ("email", "phone", "name", "id")


def _field(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def is_present(value: Any) -> bool:
    """True unless ``value`` is None or an empty string. ``0`` and ``False`` count."""
    return value is not None and value != ""


def validate_identity(fragment: Any) -> bool:
    """True iff at least one of email, phone, name or id is non-empty."""
    if not isinstance(fragment, (UserData, Mapping)):
        return False
    return any(is_present(_field(fragment, name)) for name in IDENTITY_FIELDS)


def validate_item(item: Any) -> bool:
    """True iff id, name, price and quantity were all supplied.

    An explicit ``None`` counts as supplied; only a missing key fails.
    Values are not type- or range-checked.
    """
    if isinstance(item, Item):
        supplied = item.model_fields_set
    elif isinstance(item, Mapping):
        supplied = item.keys()
    else:
        return False
    return all(name in supplied for name in REQUIRED_ITEM_FIELDS)


def validate_items(items: Any) -> bool:
    """True for an empty sequence, otherwise iff every item validates."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        return False
    return all(validate_item(item) for item in items)


def warn_if_invalid_identity(
    fragment: Any, logger: Optional[ContextualLogger] = None
) -> bool:
    """Validate ``fragment`` and log a warning when it fails."""
    valid = validate_identity(fragment)
    if not valid:
        (logger or default_logger).warning(
            "Invalid user_data. It should have at least one of these properties: "
            "email, phone, name, id"
        )
    return valid


def warn_if_invalid_items(items: Any, logger: Optional[ContextualLogger] = None) -> bool:
    """Validate ``items`` and log a warning when any item fails."""
    valid = validate_items(items)
    if not valid:
        (logger or default_logger).warning(
            "Invalid items array. Each item should have id, name, price, and quantity properties."
        )
    return valid
