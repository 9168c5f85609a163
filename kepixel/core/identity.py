"""Identity resolution.

Derives a stable user id from whatever identity fragment arrives with a
tracking call, and shapes the identify payload that registers it.
"""

from typing import Any, Dict, Optional

from kepixel.core.session import SessionState
from kepixel.core.validation import is_present
from kepixel.schemas.user_data import UserData

# Fragment fields that may become the user id, in priority order.
USER_ID_PRIORITY = ("email", "phone", "id")


class IdentityResolver:
    """Sets ``session.user_id`` once from the first usable identity fragment."""

    def __init__(self, session: SessionState, library_name: str = "http") -> None:
        """Bind the resolver to a session.

        Args:
            session: The tracker's session state (mutated in place).
            library_name: Value of ``context.library.name`` in identify payloads.
        """
        self.session = session
        self.library_name = library_name

    def resolve(self, fragment: Optional[UserData]) -> Optional[str]:
        """Adopt an identifier from ``fragment`` unless one is already set.

        Returns:
            The session's user id after resolution (may still be None).
        """
        if self.session.user_id or fragment is None:
            return self.session.user_id

        for name in USER_ID_PRIORITY:
            value = getattr(fragment, name, None)
            if is_present(value):
                self.session.user_id = str(value)
                break

        return self.session.user_id

    def build_identify_payload(
        self, fragment: Optional[UserData], timestamp: str
    ) -> Dict[str, Any]:
        """Shape the body of ``POST /v1/identify``."""
        return {
            "userId": self.session.user_id,
            "context": {
                "traits": fragment.to_traits() if fragment else {},
                "library": {"name": self.library_name},
            },
            "timestamp": timestamp,
        }
