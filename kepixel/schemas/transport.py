"""Wire-level request and result schemas."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Endpoint(str, Enum):
    """Collector endpoints a dispatch can target."""

    BEACON = "beacon"
    IDENTIFY = "identify"
    TRACK = "track"


class TransportRequest(BaseModel):
    """A fully shaped HTTP request, ready for a transport adapter.

    Exactly one of ``json_body`` (structured calls) or ``form_body``
    (legacy beacon) is set.
    """

    model_config = ConfigDict(frozen=True)

    endpoint: Endpoint
    url: str
    method: str = "POST"
    headers: Dict[str, str] = Field(default_factory=dict)
    json_body: Optional[Dict[str, Any]] = None
    form_body: Optional[Dict[str, str]] = None


class TransportResponse(BaseModel):
    """What came back from the collector."""

    status_code: int
    reason: str = ""

    @property
    def ok(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status_code < 300


class DispatchOutcome(BaseModel):
    """Settled result of a tracking call, returned instead of raising."""

    endpoint: Endpoint
    ok: bool
    skipped: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def skipped_for(cls, endpoint: Endpoint) -> "DispatchOutcome":
        """Outcome for a call dropped because tracking is disabled."""
        return cls(endpoint=endpoint, ok=False, skipped=True)
