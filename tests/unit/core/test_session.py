"""Tests for session state and schema helpers."""

from kepixel.core.datetime_utils import iso_timestamp
from kepixel.core.session import SessionState, encode_app_id
from kepixel.schemas.item import CartItem
from kepixel.schemas.user_data import UserData


class TestSessionState:
    def test_encoded_app_id(self):
        assert encode_app_id("app") == "YXBw"
        assert SessionState(app_id="app").encoded_app_id == "YXBw"

    def test_cart_drain_serializes_and_clears(self):
        session = SessionState(app_id="app")
        session.cart.add(CartItem(sku="s", name="Shirt"))

        wire = session.cart.drain()

        assert wire == [
            {
                "productSKU": "s",
                "productName": "Shirt",
                "categoryName": None,
                "price": None,
                "quantity": 1,
            }
        ]
        assert len(session.cart) == 0

    def test_components_share_state(self):
        session = SessionState(app_id="app")
        heartbeat = session.heartbeat

        heartbeat.enabled = True

        assert session.heartbeat.enabled


class TestUserData:
    def test_coerce(self):
        assert UserData.coerce(None) is None
        fragment = UserData(email="u@x.com")
        assert UserData.coerce(fragment) is fragment
        assert UserData.coerce({"phone": "+1"}).phone == "+1"

    def test_traits_keep_extension_fields(self):
        traits = UserData(email="u@x.com", device_model="Pixel").to_traits()

        assert traits == {"email": "u@x.com", "device_model": "Pixel"}


def test_iso_timestamp_format():
    from datetime import datetime, timezone

    stamp = iso_timestamp(datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc))

    assert stamp == "2024-05-01T12:30:00.123Z"
