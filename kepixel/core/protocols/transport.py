"""Transport protocol for delivering requests to the collector.

The dispatcher shapes every request itself; the transport only moves
bytes. Swapping httpx for another client (or a fake) means implementing
this one method.

Usage:
    response = await transport.send(request)
    if not response.ok:
        ...
"""

from typing import Protocol, runtime_checkable

from kepixel.schemas.transport import TransportRequest, TransportResponse


@runtime_checkable
class Transport(Protocol):
    """Deliver a shaped request and report the collector's status."""

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send a single request.

        Non-2xx responses are returned, not raised. Network-level failures
        (connection refused, timeout, ...) raise TransportError.

        Args:
            request: The request to deliver.

        Returns:
            The collector's status code and reason.
        """
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
