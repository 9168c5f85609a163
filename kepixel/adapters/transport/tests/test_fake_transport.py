"""Tests for the FakeTransport test helpers."""

import pytest

from kepixel.adapters.transport.fake import FakeTransport
from kepixel.core.exceptions import TransportError
from kepixel.schemas.transport import Endpoint, TransportRequest


def _request(endpoint: Endpoint) -> TransportRequest:
    return TransportRequest(endpoint=endpoint, url=f"https://collector.test/{endpoint.value}")


class TestFakeTransport:
    @pytest.mark.asyncio
    async def test_records_in_send_order(self):
        transport = FakeTransport()
        await transport.send(_request(Endpoint.IDENTIFY))
        await transport.send(_request(Endpoint.TRACK))

        assert transport.endpoints == [Endpoint.IDENTIFY, Endpoint.TRACK]
        assert transport.get(Endpoint.TRACK).url == "https://collector.test/track"

    @pytest.mark.asyncio
    async def test_configured_status(self):
        response = await FakeTransport(status_code=500).send(_request(Endpoint.BEACON))
        assert response.status_code == 500
        assert not response.ok

    @pytest.mark.asyncio
    async def test_fail_with_raises_after_recording(self):
        transport = FakeTransport(fail_with="boom")

        with pytest.raises(TransportError):
            await transport.send(_request(Endpoint.BEACON))

        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_get_requires_exactly_one(self):
        transport = FakeTransport()
        await transport.send(_request(Endpoint.BEACON))
        await transport.send(_request(Endpoint.BEACON))

        with pytest.raises(AssertionError):
            transport.get(Endpoint.BEACON)
        with pytest.raises(AssertionError):
            transport.get(Endpoint.TRACK)

    @pytest.mark.asyncio
    async def test_clear_and_close(self):
        transport = FakeTransport()
        await transport.send(_request(Endpoint.BEACON))

        transport.clear()
        await transport.aclose()

        assert transport.requests == []
        assert transport.closed
