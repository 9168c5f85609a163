"""Tests for the Dispatcher: wire shapes, identify pairing and failure handling."""

import base64

import pytest

from kepixel.adapters.transport.fake import FakeTransport
from kepixel.core.dispatcher import Dispatcher, encode_form_value
from kepixel.core.session import SessionState
from kepixel.schemas.transport import Endpoint
from kepixel.schemas.user_data import UserData

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def session() -> SessionState:
    return SessionState(app_id="app-123")


@pytest.fixture
def dispatcher(session, fake_transport, test_settings) -> Dispatcher:
    return Dispatcher(session, fake_transport, settings=test_settings)


# ============================================================================
# Form encoding
# ============================================================================


class TestEncodeFormValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, "1"),
            (False, "0"),
            (3, "3"),
            (9.5, "9.5"),
            ("text", "text"),
            ({"a": 1}, '{"a":1}'),
            ([{"productSKU": "s"}], '[{"productSKU":"s"}]'),
        ],
    )
    def test_values(self, value, expected):
        assert encode_form_value(value) == expected


# ============================================================================
# Beacon path
# ============================================================================


class TestBeacon:
    @pytest.mark.asyncio
    async def test_identify_then_beacon(self, dispatcher, fake_transport):
        outcome = await dispatcher.dispatch({"action_name": "Home"})

        assert fake_transport.endpoints == [Endpoint.IDENTIFY, Endpoint.BEACON]
        assert outcome.ok
        assert outcome.endpoint == Endpoint.BEACON

    @pytest.mark.asyncio
    async def test_body_and_headers(self, dispatcher, fake_transport, session):
        session.user_id = "u-1"

        await dispatcher.dispatch(
            {"action_name": "Home", "search_cat": None, "lang": "fr"},
            UserData(email="u@x.com"),
        )

        request = fake_transport.get(Endpoint.BEACON)
        assert request.url == "https://collector.test"
        assert request.form_body == {
            "appid": "app-123",
            "rec": "1",
            "apiv": "1",
            "uid": "u-1",
            "send_image": "0",
            "email": "u@x.com",
            "action_name": "Home",
        }
        assert request.headers["Accept-Language"] == "fr"
        assert request.headers["Content-Type"].startswith("application/x-www-form-urlencoded")

    @pytest.mark.asyncio
    async def test_default_language(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"ping": 1})

        assert fake_transport.get(Endpoint.BEACON).headers["Accept-Language"] == "en"

    @pytest.mark.asyncio
    async def test_uid_omitted_when_unknown(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"ping": 1})

        assert "uid" not in fake_transport.get(Endpoint.BEACON).form_body


# ============================================================================
# Structured path
# ============================================================================


class TestStructured:
    @pytest.mark.asyncio
    async def test_track_request(self, dispatcher, fake_transport):
        properties = {"event_name": "purchase", "value": 100}

        outcome = await dispatcher.dispatch(
            {"e_c": "purchase", "e_a": "purchase", "e_n": properties},
            UserData(email="u@x.com"),
        )

        assert outcome.endpoint == Endpoint.TRACK
        assert fake_transport.endpoints == [Endpoint.IDENTIFY, Endpoint.TRACK]
        body = fake_transport.get(Endpoint.TRACK).json_body
        assert body["event"] == "Order Completed"
        assert body["userId"] == "u@x.com"
        assert body["properties"] == properties
        assert body["traits"] == {"email": "u@x.com"}
        assert body["context"] == {"library": {"name": "http"}}

    @pytest.mark.asyncio
    async def test_identify_and_track_share_timestamp(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"e_c": "login", "e_a": "login"})

        identify = fake_transport.get(Endpoint.IDENTIFY).json_body
        track = fake_transport.get(Endpoint.TRACK).json_body
        assert identify["timestamp"] == track["timestamp"]
        assert track["timestamp"].endswith("Z")

    @pytest.mark.asyncio
    async def test_bearer_auth(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"e_c": "login", "e_a": "login"})

        expected = base64.b64encode(b"app-123").decode()
        for request in fake_transport.requests:
            assert request.headers["Authorization"] == f"Bearer {expected}"

    @pytest.mark.asyncio
    async def test_urls(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"e_c": "login", "e_a": "login"})

        assert fake_transport.get(Endpoint.IDENTIFY).url == "https://collector.test/v1/identify"
        assert fake_transport.get(Endpoint.TRACK).url == "https://collector.test/v1/track"

    def test_plain_event_properties(self):
        properties = Dispatcher.structured_properties(
            {"e_c": "Videos", "e_a": "Play", "e_n": "Intro", "e_v": None, "mtm_campaign": "c"}
        )

        assert properties == {
            "category": "Videos",
            "action": "Play",
            "name": "Intro",
            "campaign": "c",
        }

    @pytest.mark.asyncio
    async def test_unmapped_category_passes_through(self, dispatcher, fake_transport):
        await dispatcher.dispatch({"e_c": "Videos", "e_a": "Play"})

        assert fake_transport.get(Endpoint.TRACK).json_body["event"] == "Videos"


# ============================================================================
# Failures and disabled sessions
# ============================================================================


class TestFailures:
    @pytest.mark.asyncio
    async def test_disabled_session_sends_nothing(self, dispatcher, fake_transport, session):
        session.disabled = True

        outcome = await dispatcher.dispatch({"e_c": "login", "e_a": "login"})

        assert outcome.skipped
        assert not outcome.ok
        assert fake_transport.requests == []

    @pytest.mark.asyncio
    async def test_transport_error_becomes_outcome(self, session, test_settings, caplog):
        transport = FakeTransport(fail_with="connection refused")
        dispatcher = Dispatcher(session, transport, settings=test_settings)

        outcome = await dispatcher.dispatch({"ping": 1})

        assert not outcome.ok
        assert outcome.error == "connection refused"
        assert "connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_error_status_becomes_outcome(self, session, test_settings):
        dispatcher = Dispatcher(session, FakeTransport(status_code=500), settings=test_settings)

        outcome = await dispatcher.dispatch({"ping": 1})

        assert not outcome.ok
        assert outcome.status_code == 500

    @pytest.mark.asyncio
    async def test_invalid_identity_warns_but_sends(self, dispatcher, fake_transport, caplog):
        outcome = await dispatcher.dispatch({"ping": 1}, UserData(app_version="1.0"))

        assert outcome.ok
        assert "Invalid user_data" in caplog.text


class TestBeaconProtocolFields:
    @pytest.mark.asyncio
    async def test_traits_never_replace_protocol_fields(
        self, dispatcher, fake_transport, session
    ):
        session.user_id = "session-user"

        await dispatcher.dispatch(
            {"action_name": "Click"},
            UserData(uid="123456", appid="other", rec=0, email="u@x.com"),
        )

        body = fake_transport.get(Endpoint.BEACON).form_body
        assert body["appid"] == "app-123"
        assert body["uid"] == "session-user"
        assert body["rec"] == "1"
        assert body["email"] == "u@x.com"

    @pytest.mark.asyncio
    async def test_uid_trait_dropped_when_session_has_no_user(
        self, dispatcher, fake_transport
    ):
        await dispatcher.dispatch({"ping": 1}, UserData(uid="123456", name="Ada"))

        body = fake_transport.get(Endpoint.BEACON).form_body
        assert "uid" not in body
        assert body["name"] == "Ada"
