"""Line item and ecommerce cart schemas.

Item fields accept any value: an incomplete or off-type item is reported
by the validator but still sent as given.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Fields an item must carry to be considered valid
REQUIRED_ITEM_FIELDS = ("id", "name", "price", "quantity")


class Item(BaseModel):
    """A line item attached to a commerce event."""

    model_config = ConfigDict(extra="allow")

    id: Optional[Any] = None
    name: Optional[Any] = None
    price: Optional[Any] = None
    quantity: Optional[Any] = None
    category: Optional[Any] = None
    variant: Optional[Any] = None


def coerce_items(value: Any) -> Any:
    """Turn mapping entries of an items list into ``Item``; keep everything else."""
    if not isinstance(value, (list, tuple)):
        return value
    return [
        Item(**{str(k): v for k, v in entry.items()}) if isinstance(entry, Mapping) else entry
        for entry in value
    ]


class CartItem(BaseModel):
    """An item staged in the ecommerce cart until the next cart update or order."""

    model_config = ConfigDict(populate_by_name=True)

    sku: Optional[Any] = Field(None, serialization_alias="productSKU")
    name: Optional[Any] = Field(None, serialization_alias="productName")
    category: Optional[Any] = Field(None, serialization_alias="categoryName")
    price: Optional[Any] = None
    quantity: Any = 1

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with the collector's key names."""
        return self.model_dump(mode="json", by_alias=True)


class EcommerceView(BaseModel):
    """Product or category page view marker, consumed by the next page view."""

    sku: Optional[Any] = Field(None, serialization_alias="productSKU")
    name: Optional[Any] = Field(None, serialization_alias="productName")
    category: Optional[Any] = Field(None, serialization_alias="categoryName")
    price: Optional[Any] = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with the collector's key names, dropping unset values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
