"""Automatic outbound-link and download tracking.

A click observer (attached only while link tracking is enabled) walks
from the click target to the nearest anchor, classifies its href and
routes it to the download or outbound-link tracking call.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlsplit

from kepixel.core.logging import ContextualLogger
from kepixel.core.logging import logger as default_logger
from kepixel.core.protocols.environment import EnvironmentObserver, Unsubscribe
from kepixel.core.session import LinkTrackingState
from kepixel.schemas.dom import ActivationEvent, DomElement

# fmt: off
DOWNLOAD_EXTENSIONS = (
    # Documents
    "pdf", "doc", "docx", "xls", "xlsx", "ppt", "pptx", "odt", "ods", "odp",
    # Archives
    "zip", "rar", "tar", "gz", "7z",
    # Media
    "mp3", "mp4", "avi", "mov", "wmv", "flv", "wav",
    # Images
    "jpg", "jpeg", "png", "gif", "svg", "webp",
    # Other
    "txt", "csv", "json", "xml",
)
# fmt: on

ANCHOR_TAG = "A"
DOWNLOAD_ATTRIBUTE = "download"


class LinkKind(str, Enum):
    """How a clicked link is tracked."""

    DOWNLOAD = "download"
    EXTERNAL = "external"


def is_download_link(href: str) -> bool:
    """True if the href points at a file with a known download extension.

    Matches ``.ext`` at the end of the URL or ``.ext?`` anywhere in it.
    """
    url = href.lower()
    return any(url.endswith(f".{ext}") or f".{ext}?" in url for ext in DOWNLOAD_EXTENSIONS)


def is_external_link(href: str, page_host: Optional[str]) -> bool:
    """True if the href is absolute http(s) and its host differs from the page's."""
    if not page_host or not href.startswith(("http://", "https://")):
        return False
    host = urlsplit(href).hostname
    return host is not None and host != page_host.lower()


def classify_link(
    href: str, page_host: Optional[str], has_download_attribute: bool = False
) -> Optional[LinkKind]:
    """Classify a link. Download wins over external; None means not tracked."""
    if has_download_attribute or is_download_link(href):
        return LinkKind.DOWNLOAD
    if is_external_link(href, page_host):
        return LinkKind.EXTERNAL
    return None


def find_anchor(element: Optional[DomElement]) -> Optional[DomElement]:
    """Walk up from ``element`` to the nearest anchor."""
    while element is not None and element.tag_name.upper() != ANCHOR_TAG:
        element = element.parent
    return element


class LinkTracker:
    """Attaches the click observer and routes classified links.

    ``on_download`` and ``on_outbound`` receive the href plus optional
    custom data and must return without waiting on the network.
    """

    def __init__(
        self,
        state: LinkTrackingState,
        environment: EnvironmentObserver,
        on_download: Callable[[str, Optional[Dict[str, Any]]], Any],
        on_outbound: Callable[[str, Optional[Dict[str, Any]]], Any],
        logger: Optional[ContextualLogger] = None,
    ) -> None:
        """Initialize the link tracker.

        Args:
            state: Link-tracking slice of the session state.
            environment: Source of element activations and the page host.
            on_download: Called with the href of a download link.
            on_outbound: Called with the href of an external link.
            logger: Logger carrying tracker context.
        """
        self.state = state
        self._environment = environment
        self._on_download = on_download
        self._on_outbound = on_outbound
        self._logger = (logger or default_logger).with_context(component="link_tracking")
        self._unsubscribe: Optional[Unsubscribe] = None

    def enable(self, track_content: bool = False) -> None:
        """Start observing clicks. Re-enabling replaces the observer.

        Args:
            track_content: Attach the anchor's text as ``link_text``.
        """
        self._detach()
        self.state.enabled = True
        self.state.track_content = track_content
        self._unsubscribe = self._environment.on_element_activation(self.handle_activation)

    def disable(self) -> None:
        """Stop observing clicks. Idempotent."""
        self.state.enabled = False
        self._detach()

    def handle_activation(self, event: ActivationEvent) -> Optional[LinkKind]:
        """Classify one click and route it.

        Returns:
            The kind the link was tracked as, or None if ignored.
        """
        if not self.state.enabled:
            return None

        anchor = find_anchor(event.target)
        if anchor is None:
            return None

        href = anchor.get_attribute("href")
        if not href:
            return None

        kind = classify_link(
            href,
            self._environment.page_host,
            has_download_attribute=anchor.has_attribute(DOWNLOAD_ATTRIBUTE),
        )
        if kind is None:
            return None

        custom_data = None
        if self.state.track_content and anchor.text.strip():
            custom_data = {"link_text": anchor.text.strip()}

        self._logger.debug(f"Tracking {kind.value} link: {href}")
        if kind == LinkKind.DOWNLOAD:
            self._on_download(href, custom_data)
        else:
            self._on_outbound(href, custom_data)
        return kind

    def _detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
