"""Authentication gate for the summarization API.

Wraps every outbound API call with an authentication precondition and
builds the bearer credential it carries. Token issuance belongs to the
identity provider; this package only reads the session it hands over.
"""

from docdigest.auth.session import (
    SIGNED_OUT_KEY,
    AuthSession,
    Credential,
    SessionGate,
    build_logout_url,
    session_from_storage,
)

__all__ = [
    "SIGNED_OUT_KEY",
    "AuthSession",
    "Credential",
    "SessionGate",
    "build_logout_url",
    "session_from_storage",
]
