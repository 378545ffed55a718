"""HTTP client for the summarization API.

Issues the remote operations the lifecycle depends on and classifies every
outcome into a parsed payload or a DocumentClientError:

    POST /upload               -> UploadTicket          (bearer)
    PUT  <presigned url>       -> None                  (no auth)
    POST /summaries/summarize  -> success payload       (bearer)
    GET  /summaries            -> list[Document]        (bearer, uncached)
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from docdigest.auth.session import SessionGate
from docdigest.config import ClientConfig, get_client_config
from docdigest.errors import RequestRejectedError, UploadTransportError
from docdigest.models.schemas import PDF_CONTENT_TYPE, Document, DocumentList, UploadTicket

logger = logging.getLogger(__name__)

# Status values change while the pipeline runs; never serve a cached list.
_NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class DocumentTransport:
    """Async client for the document summarization API.

    Every API call checks the session gate before touching the network.
    The storage PUT is the only call made without a bearer token: the
    presigned URL is its own authorization.
    """

    def __init__(
        self,
        gate: SessionGate,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            gate: Session gate supplying bearer credentials.
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Optional preconfigured client. The transport only
                         closes clients it created itself.
        """
        self._gate = gate
        self._config = config or get_client_config()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=self._config.request_timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _url(self, path: str) -> str:
        return f"{self._config.api_base_url}{path}"

    async def _send(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        credential = self._gate.require_auth()
        request_headers = credential.authorization_header()
        if headers:
            request_headers.update(headers)

        try:
            return await self._client.request(
                method,
                self._url(path),
                json=json,
                headers=request_headers,
            )
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} failed to connect: {e}")
            raise RequestRejectedError(f"Connection failed: {e}") from e

    async def request_upload_url(self, filename: str) -> UploadTicket:
        """Ask the API for a presigned upload URL.

        Args:
            filename: Display name of the file being uploaded.

        Returns:
            UploadTicket with the presigned URL and the new document ID.

        Raises:
            UnauthenticatedError: No authenticated session.
            RequestRejectedError: Non-2xx response or unusable body.
        """
        response = await self._send("POST", "/upload", json={"filename": filename})
        if not response.is_success:
            logger.warning(f"POST /upload rejected: {response.status_code}")
            raise RequestRejectedError(
                f"Failed to create upload URL: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            ticket = UploadTicket.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RequestRejectedError(
                f"Failed to create upload URL: invalid response ({e})",
                status_code=response.status_code,
            ) from e

        logger.info(f"Issued upload URL for {filename} as document {ticket.id}")
        return ticket

    async def upload_bytes(self, upload_url: str, content: bytes) -> None:
        """PUT file bytes to a presigned storage URL.

        Args:
            upload_url: Presigned URL from request_upload_url.
            content: Raw PDF bytes.

        Raises:
            UploadTransportError: Non-2xx response or connection failure.
        """
        try:
            response = await self._client.put(
                upload_url,
                content=content,
                headers={"Content-Type": PDF_CONTENT_TYPE},
            )
        except httpx.RequestError as e:
            logger.warning(f"Storage upload failed to connect: {e}")
            raise UploadTransportError(f"Upload to storage failed: {e}") from e

        if not response.is_success:
            logger.warning(f"Storage upload rejected: {response.status_code}")
            raise UploadTransportError(
                f"Upload to storage failed: {response.reason_phrase}",
                status_code=response.status_code,
            )

    async def notify_summarize(self, document_id: str) -> dict[str, Any]:
        """Ask the API to summarize an extracted document.

        Eligibility (status == extracted) is the caller's job; the API
        rejects ineligible documents like any other bad request.

        Args:
            document_id: ID of the document to summarize.

        Returns:
            The API's success payload, or an empty dict if it sent none.

        Raises:
            UnauthenticatedError: No authenticated session.
            RequestRejectedError: Non-2xx response, carrying the API's
                                  error message when it sent one.
        """
        response = await self._send("POST", "/summaries/summarize", json={"id": document_id})
        if not response.is_success:
            message = _error_message(response) or response.reason_phrase
            logger.warning(f"Summarize {document_id} rejected: {response.status_code} {message}")
            raise RequestRejectedError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {"result": payload}

    async def list_documents(self) -> list[Document]:
        """Fetch the live document list in server order.

        Returns:
            Documents as returned by the API, empty if it sent none.

        Raises:
            UnauthenticatedError: No authenticated session.
            RequestRejectedError: Non-2xx response or malformed payload.
        """
        response = await self._send("GET", "/summaries", headers=_NO_CACHE_HEADERS)
        if not response.is_success:
            logger.warning(f"GET /summaries rejected: {response.status_code}")
            raise RequestRejectedError(
                f"Failed to load documents: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            listing = DocumentList.model_validate(response.json() or {})
        except (ValueError, ValidationError) as e:
            raise RequestRejectedError(
                f"Failed to load documents: invalid response ({e})",
                status_code=response.status_code,
            ) from e

        return listing.summaries

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()


def _error_message(response: httpx.Response) -> str | None:
    """Extract the `error` field from a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
