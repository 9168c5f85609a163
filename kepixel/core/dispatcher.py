"""Dispatcher: shapes wire requests and hands them to the transport.

Two wire shapes exist:

* Structured event (``POST {base}/v1/track``, JSON, bearer auth) for every
  named business event. Chosen when the call data carries ``e_c``.
* Legacy beacon (``POST {base}``, form-encoded) for low-level primitives
  such as actions, site search, goals, ecommerce flushes and heartbeats.

Every dispatch also registers the current identity with
``POST {base}/v1/identify``. Transport failures are logged and returned as
a failed ``DispatchOutcome``; they never propagate to the caller.
"""

import asyncio
import json
from collections.abc import Mapping
from typing import Any, Dict, Optional

from kepixel.core.config import Settings
from kepixel.core.config import settings as default_settings
from kepixel.core.datetime_utils import iso_timestamp
from kepixel.core.events.catalog import canonical_event_name
from kepixel.core.exceptions import TransportError
from kepixel.core.identity import IdentityResolver
from kepixel.core.logging import ContextualLogger
from kepixel.core.logging import logger as default_logger
from kepixel.core.protocols.transport import Transport
from kepixel.core.session import SessionState
from kepixel.core.validation import warn_if_invalid_identity
from kepixel.schemas.transport import DispatchOutcome, Endpoint, TransportRequest
from kepixel.schemas.user_data import UserData

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
JSON_CONTENT_TYPE = "application/json"

# Beacon fields owned by the client, never taken from identity traits
BEACON_PROTOCOL_FIELDS = frozenset({"appid", "rec", "apiv", "uid", "send_image"})

# Call-data keys that map onto the properties of a structured event
_STRUCTURED_KEYS = (
    ("e_c", "category"),
    ("e_a", "action"),
    ("e_n", "name"),
    ("e_v", "value"),
    ("mtm_campaign", "campaign"),
    ("source", "source"),
    ("custom_data", "custom_data"),
)


def encode_form_value(value: Any) -> str:
    """Render one beacon field: booleans as 1/0, containers as JSON."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, default=str, separators=(",", ":"))
    return str(value)


class Dispatcher:
    """Builds both wire formats and sends them through a Transport.

    Attributes:
        session: Shared session state (app id, user id, flags).
        transport: Delivery adapter.
        identity: Resolver bound to the same session.
    """

    def __init__(
        self,
        session: SessionState,
        transport: Transport,
        settings: Optional[Settings] = None,
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            session: The tracker's session state.
            transport: Adapter that delivers requests.
            settings: Collector URL, language and library tag. Defaults to
                the process-wide settings.
            logger: Logger carrying tracker context.
        """
        self.session = session
        self.transport = transport
        self._settings = settings or default_settings
        self._logger = (logger or default_logger).with_context(component="dispatcher")
        self.identity = IdentityResolver(session, library_name=self._settings.LIBRARY_NAME)

    @property
    def base_url(self) -> str:
        return self._settings.TRACKER_URL

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def dispatch(
        self, data: Mapping[str, Any], user_data: Optional[UserData] = None
    ) -> DispatchOutcome:
        """Send one tracking call and return its settled outcome.

        The identify request is started before the business request and
        both run concurrently; the identify outcome is only logged.

        Args:
            data: Call data. ``e_c`` selects the structured path; ``lang``
                is moved to the Accept-Language header.
            user_data: Identity fragment supplied with the call.

        Returns:
            Outcome of the business request.
        """
        payload = dict(data)
        structured = bool(payload.get("e_c"))
        endpoint = Endpoint.TRACK if structured else Endpoint.BEACON

        if self.session.disabled:
            self._logger.debug(f"Tracking disabled, dropping {endpoint.value} call")
            return DispatchOutcome.skipped_for(endpoint)

        lang = payload.pop("lang", None) or self._settings.LANGUAGE

        if user_data is not None:
            warn_if_invalid_identity(user_data, self._logger)
        self.identity.resolve(user_data)

        timestamp = iso_timestamp()
        identify_request = self.build_identify_request(user_data, timestamp)

        if structured:
            request = self.build_track_request(
                canonical_event_name(str(payload["e_c"])),
                self.structured_properties(payload),
                user_data,
                timestamp,
            )
        else:
            request = self.build_beacon_request(payload, user_data, lang)

        _, outcome = await asyncio.gather(self._send(identify_request), self._send(request))
        return outcome

    # ------------------------------------------------------------------
    # Request builders
    # ------------------------------------------------------------------

    def build_beacon_request(
        self,
        data: Mapping[str, Any],
        user_data: Optional[UserData] = None,
        lang: Optional[str] = None,
    ) -> TransportRequest:
        """Shape a form-encoded legacy beacon.

        The flattened identity fragment comes first, then the protocol
        fields, then the caller's data. Traits never replace a protocol
        field. ``None`` values are dropped and ``lang`` never reaches the
        body.
        """
        body: Dict[str, Any] = {}
        if user_data is not None:
            traits = user_data.to_traits()
            body.update((k, v) for k, v in traits.items() if k not in BEACON_PROTOCOL_FIELDS)
        body.update({"appid": self.session.app_id, "rec": 1, "apiv": 1})
        if self.session.user_id:
            body["uid"] = self.session.user_id
        body["send_image"] = 0
        body.update(data)
        body.pop("lang", None)

        form = {key: encode_form_value(value) for key, value in body.items() if value is not None}
        return TransportRequest(
            endpoint=Endpoint.BEACON,
            url=self.base_url,
            headers={
                "Accept": "application/json",
                "Accept-Language": lang or self._settings.LANGUAGE,
                "Content-Type": FORM_CONTENT_TYPE,
            },
            form_body=form,
        )

    def build_identify_request(
        self, user_data: Optional[UserData], timestamp: str
    ) -> TransportRequest:
        """Shape ``POST {base}/v1/identify``."""
        return TransportRequest(
            endpoint=Endpoint.IDENTIFY,
            url=f"{self.base_url}/v1/identify",
            headers=self._json_headers(),
            json_body=self.identity.build_identify_payload(user_data, timestamp),
        )

    def build_track_request(
        self,
        event: str,
        properties: Optional[Dict[str, Any]],
        user_data: Optional[UserData],
        timestamp: str,
    ) -> TransportRequest:
        """Shape ``POST {base}/v1/track`` for a canonical event name."""
        return TransportRequest(
            endpoint=Endpoint.TRACK,
            url=f"{self.base_url}/v1/track",
            headers=self._json_headers(),
            json_body={
                "userId": self.session.user_id,
                "event": event,
                "properties": properties or {},
                "traits": user_data.to_traits() if user_data else {},
                "context": {"library": {"name": self._settings.LIBRARY_NAME}},
                "timestamp": timestamp,
            },
        )

    @staticmethod
    def structured_properties(payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Properties of a structured call.

        Typed events pass their flattened fields as ``e_n``; a plain
        category/action event gets its own fields instead.
        """
        name = payload.get("e_n")
        if isinstance(name, Mapping):
            return dict(name)
        return {
            prop: payload[key] for key, prop in _STRUCTURED_KEYS if payload.get(key) is not None
        }

    def _json_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": JSON_CONTENT_TYPE,
            "Authorization": f"Bearer {self.session.encoded_app_id}",
        }

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def _send(self, request: TransportRequest) -> DispatchOutcome:
        name = request.endpoint.value
        try:
            response = await self.transport.send(request)
        except TransportError as exc:
            self._logger.warning(f"Kepixel {name} call failed: {exc.message} ({request.url})")
            return DispatchOutcome(endpoint=request.endpoint, ok=False, error=exc.message)

        if not response.ok:
            self._logger.warning(
                f"Kepixel {name} call failed: HTTP {response.status_code} "
                f"{response.reason} ({request.url})"
            )
            return DispatchOutcome(
                endpoint=request.endpoint,
                ok=False,
                status_code=response.status_code,
                error=response.reason or f"HTTP {response.status_code}",
            )

        message = f"Kepixel {name} call sent ({request.url})"
        if self.session.log:
            self._logger.info(message)
        else:
            self._logger.debug(message)
        return DispatchOutcome(endpoint=request.endpoint, ok=True, status_code=response.status_code)
