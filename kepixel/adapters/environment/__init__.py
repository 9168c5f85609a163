"""Environment adapters."""

from kepixel.adapters.environment.fake import FakeEnvironment
from kepixel.adapters.environment.null import NullEnvironment

__all__ = ["NullEnvironment", "FakeEnvironment"]
