"""httpx transport adapter.

Implements the Transport protocol on top of a shared ``httpx.AsyncClient``.
"""

from typing import Optional

import httpx

from kepixel.core.exceptions import TransportError
from kepixel.core.logging import ContextualLogger
from kepixel.core.logging import logger as default_logger
from kepixel.schemas.transport import TransportRequest, TransportResponse


class HttpxTransport:
    """Send collector requests with httpx.

    The client is created lazily on first use so a tracker can be built
    outside a running event loop. Pass ``client`` to share a pool (or a
    mock) with the rest of the application; a client passed in is not
    closed by ``aclose``.
    """

    DEFAULT_TIMEOUT_SECONDS = 10.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds.
            client: Optional pre-built client to use instead of an owned one.
            logger: Logger carrying tracker context.
        """
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._logger = (logger or default_logger).with_prefix("[HttpxTransport] ")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, request: TransportRequest) -> TransportResponse:
        """Deliver the request.

        Raises:
            TransportError: On timeouts, connection failures and other
                httpx transport errors. HTTP error statuses are returned.
        """
        client = self._get_client()
        try:
            response = await client.request(
                request.method,
                request.url,
                headers=request.headers,
                json=request.json_body,
                data=request.form_body,
            )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Collector did not respond within {self._timeout:.0f} seconds", request.url
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Failed to reach collector: {exc}", request.url) from exc

        self._logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return TransportResponse(status_code=response.status_code, reason=response.reason_phrase)

    async def aclose(self) -> None:
        """Close the owned client, if one was created."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
