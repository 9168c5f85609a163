"""Synthetic page-environment types.

Environment adapters translate whatever the host platform provides
(a browser bridge, a test harness) into these types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


class VisibilityState(str, Enum):
    """Page visibility as reported by the environment."""

    VISIBLE = "visible"
    HIDDEN = "hidden"


class ActivityKind(str, Enum):
    """User activity signals that count as 'not idle'."""

    POINTER_MOVE = "mousemove"
    KEY_DOWN = "keydown"
    SCROLL = "scroll"
    CLICK = "click"


@dataclass
class DomElement:
    """Minimal element node: tag, attributes, parent link and text."""

    tag_name: str
    attributes: Dict[str, Optional[str]] = field(default_factory=dict)
    parent: Optional["DomElement"] = field(default=None, repr=False)
    text: str = ""

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes


@dataclass
class ActivationEvent:
    """A click (or equivalent activation) on ``target``."""

    target: Optional[DomElement]
