"""Error taxonomy for the document lifecycle client.

Every failure a user action can hit is one of these. The orchestrator
catches them at the action boundary and turns them into notices.
"""


class DocumentClientError(Exception):
    """Base class for all client-side failures."""

    @property
    def user_message(self) -> str:
        """Message suitable for showing to the user verbatim."""
        return str(self)


class UnauthenticatedError(DocumentClientError):
    """Raised before any network I/O when no valid credential is present."""

    def __init__(self, message: str = "Not authenticated. Please sign in.") -> None:
        super().__init__(message)


class RequestRejectedError(DocumentClientError):
    """Raised when an API call returns non-2xx or cannot reach the server.

    Attributes:
        status_code: HTTP status, or None for connection failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UploadTransportError(DocumentClientError):
    """Raised when the presigned PUT to object storage fails.

    Attributes:
        status_code: HTTP status, or None for connection failures.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LocalPreconditionError(DocumentClientError):
    """Raised for client-side validation failures that never reach the network."""

    pass
