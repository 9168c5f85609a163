"""Transport adapters."""

from kepixel.adapters.transport.fake import FakeTransport
from kepixel.adapters.transport.http import HttpxTransport

__all__ = ["HttpxTransport", "FakeTransport"]
