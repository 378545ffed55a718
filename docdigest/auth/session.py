"""Session gate for authenticated API calls.

Every call to the summarization API goes through SessionGate.require_auth()
first. The session itself is supplied by a provider callable, so the gate
reads whatever the identity layer currently holds without owning it.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel

from docdigest.config import ClientConfig
from docdigest.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


class Credential(BaseModel):
    """Bearer credential attached to API requests."""

    token: str

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class AuthSession(BaseModel):
    """Authentication state handed over by the identity layer.

    Attributes:
        is_authenticated: Whether the user completed sign-in.
        id_token: Bearer ID token issued at sign-in.
        email: Signed-in user's email, for display.
    """

    is_authenticated: bool = False
    id_token: str | None = None
    email: str | None = None

    @classmethod
    def from_token(cls, id_token: str, email: str | None = None) -> "AuthSession":
        return cls(is_authenticated=True, id_token=id_token.strip(), email=email or None)

    @classmethod
    def anonymous(cls) -> "AuthSession":
        return cls()


SIGNED_OUT_KEY = "signed_out"


def session_from_storage(storage: Mapping[str, Any], config: ClientConfig) -> AuthSession:
    """Rebuild the session from per-user storage.

    A token stored at sign-in wins. The configured dev token only applies
    until the user explicitly signs out.

    Args:
        storage: Per-user storage holding id_token, email and the sign-out flag.
        config: Client configuration carrying the optional dev token.

    Returns:
        Authenticated session, or an anonymous one.
    """
    token = storage.get("id_token")
    if not token and not storage.get(SIGNED_OUT_KEY):
        token = config.dev_id_token
    if not token:
        return AuthSession.anonymous()
    return AuthSession.from_token(token, email=storage.get("email"))


SessionProvider = Callable[[], AuthSession | None]


class SessionGate:
    """Authentication precondition for outbound API calls."""

    def __init__(self, session_provider: SessionProvider) -> None:
        """Initialize the gate.

        Args:
            session_provider: Returns the current session, or None if absent.
        """
        self._session_provider = session_provider

    @property
    def session(self) -> AuthSession | None:
        return self._session_provider()

    @property
    def is_authenticated(self) -> bool:
        session = self.session
        return bool(session and session.is_authenticated and session.id_token)

    def require_auth(self) -> Credential:
        """Return the bearer credential for the current session.

        Returns:
            Credential carrying the session's ID token.

        Raises:
            UnauthenticatedError: If there is no authenticated session.
        """
        session = self.session
        if session is None or not session.is_authenticated or not session.id_token:
            logger.debug("Rejected call: no authenticated session")
            raise UnauthenticatedError()
        return Credential(token=session.id_token)


def build_logout_url(config: ClientConfig) -> str | None:
    """Build the identity provider's hosted sign-out URL.

    Args:
        config: Client configuration with identity provider settings.

    Returns:
        The sign-out URL, or None when no identity domain is configured.
    """
    if not config.cognito_domain:
        return None

    params: dict[str, str] = {}
    if config.cognito_client_id:
        params["client_id"] = config.cognito_client_id
    params["logout_uri"] = config.logout_uri or ""

    url = httpx.URL(f"{config.cognito_domain.rstrip('/')}/logout", params=params)
    return str(url)
