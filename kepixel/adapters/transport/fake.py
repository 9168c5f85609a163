"""Fake transport for testing."""

from typing import List, Optional

from kepixel.core.exceptions import TransportError
from kepixel.schemas.transport import Endpoint, TransportRequest, TransportResponse


class FakeTransport:
    """In-memory test double for the Transport protocol.

    Records every request in send order and answers with a configurable
    status, or raises TransportError when ``fail_with`` is set.

    Usage:
        transport = FakeTransport()
        tracker = KepixelTracker(app_id="app", transport=transport)
        await tracker.track_purchase(value=10)
        assert transport.get(Endpoint.TRACK).json_body["event"] == "Order Completed"
    """

    def __init__(self, status_code: int = 200, fail_with: Optional[str] = None) -> None:
        """Initialize with the status to return (or the error to raise)."""
        self.requests: List[TransportRequest] = []
        self.status_code = status_code
        self.fail_with = fail_with
        self.closed = False

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Record the request, then answer or fail."""
        self.requests.append(request)
        if self.fail_with is not None:
            raise TransportError(self.fail_with, request.url)
        return TransportResponse(status_code=self.status_code, reason="fake")

    async def aclose(self) -> None:
        """Mark closed."""
        self.closed = True

    # Test helpers

    def get_all(self, endpoint: Endpoint) -> List[TransportRequest]:
        """Return all requests sent to ``endpoint``, in order."""
        return [r for r in self.requests if r.endpoint == endpoint]

    def get(self, endpoint: Endpoint) -> TransportRequest:
        """Return the only request sent to ``endpoint``, or raise AssertionError."""
        matches = self.get_all(endpoint)
        if len(matches) != 1:
            raise AssertionError(
                f"Expected exactly one '{endpoint.value}' request, got {len(matches)}. "
                f"Sent: {[r.endpoint.value for r in self.requests]}"
            )
        return matches[0]

    @property
    def endpoints(self) -> List[Endpoint]:
        """Endpoints hit, in send order."""
        return [r.endpoint for r in self.requests]

    def clear(self) -> None:
        """Reset recorded requests."""
        self.requests.clear()
