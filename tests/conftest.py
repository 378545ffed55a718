"""Pytest fixtures and shared test configuration.

Provides an in-process fake of the summarization API and object store,
served over httpx's ASGITransport, so the transport and orchestrator run
against real HTTP semantics without a network.

Fixtures:
    - remote: FakeSummaryAPI with its recorded requests and documents
    - config: ClientConfig pointing at the fake
    - auth_session / gate: authenticated session and its gate
    - transport: DocumentTransport bound to the fake
    - notices / orchestrator: LifecycleOrchestrator collecting its notices
    - async_client: HTTPX client for the docdigest host app
"""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from httpx import ASGITransport, AsyncClient

from docdigest.api import create_app
from docdigest.auth.session import AuthSession, SessionGate
from docdigest.config import ClientConfig
from docdigest.lifecycle.orchestrator import LifecycleOrchestrator
from docdigest.models.schemas import Notice
from docdigest.transport.client import DocumentTransport

API_BASE_URL = "http://api.test"
TEST_TOKEN = "test-id-token"

SAMPLE_SUMMARY = {
    "title": "Quarterly Report, Explained",
    "phase1": "Revenue grew while costs held flat.",
    "phase2": "Margins, churn and regional growth.",
    "phase3": "Invest in the two fastest-growing regions.",
    "readingTimeMinutes": 7,
}


class FakeSummaryAPI:
    """In-memory stand-in for the summarization API and object store.

    Attributes:
        documents: Wire-format documents returned by GET /summaries.
        requests: (method, path) of every request received, in order.
        headers: Headers of every request received, in order.
        stored: Bytes received by the storage PUT, keyed by path.
        failures: Route name -> status code to fail with.
        upload_url: Presigned URL handed out by POST /upload.
        next_id: Document ID handed out by POST /upload.
        omit_summaries: Drop the summaries field from GET /summaries.
        null_summaries: Send summaries as null from GET /summaries.
    """

    def __init__(self) -> None:
        self.documents: list[dict[str, Any]] = []
        self.requests: list[tuple[str, str]] = []
        self.headers: list[dict[str, str]] = []
        self.stored: dict[str, bytes] = {}
        self.failures: dict[str, int] = {}
        self.upload_url = "https://store/x"
        self.next_id = "abc123"
        self.omit_summaries = False
        self.null_summaries = False
        self.summarize_error_body: dict[str, Any] | None = None
        self.app = self._build_app()

    def calls(self, method: str, path: str) -> int:
        return self.requests.count((method, path))

    def add_document(self, doc_id: str, status: str, **fields: Any) -> dict[str, Any]:
        document = {"id": doc_id, "filename": f"{doc_id}.pdf", "status": status, **fields}
        self.documents.append(document)
        return document

    def _find(self, doc_id: str) -> dict[str, Any] | None:
        return next((d for d in self.documents if d["id"] == doc_id), None)

    def _authorized(self, request: Request) -> bool:
        return request.headers.get("authorization") == f"Bearer {TEST_TOKEN}"

    def _build_app(self) -> FastAPI:
        app = FastAPI()

        @app.middleware("http")
        async def record(request: Request, call_next):
            self.requests.append((request.method, request.url.path))
            self.headers.append(dict(request.headers))
            return await call_next(request)

        @app.post("/upload")
        async def create_upload(request: Request) -> Response:
            if not self._authorized(request):
                return JSONResponse({"error": "Unauthorized"}, status_code=401)
            if "upload" in self.failures:
                return PlainTextResponse("nope", status_code=self.failures["upload"])
            body = await request.json()
            self.add_document(self.next_id, "pending_upload", filename=body["filename"])
            return JSONResponse({"uploadUrl": self.upload_url, "id": self.next_id})

        @app.get("/summaries")
        async def list_summaries(request: Request) -> Response:
            if not self._authorized(request):
                return JSONResponse({"error": "Unauthorized"}, status_code=401)
            if "list" in self.failures:
                return PlainTextResponse("boom", status_code=self.failures["list"])
            if self.omit_summaries:
                return JSONResponse({"count": 0})
            if self.null_summaries:
                return JSONResponse({"summaries": None, "count": 0})
            return JSONResponse({"summaries": self.documents, "count": len(self.documents)})

        @app.post("/summaries/summarize")
        async def summarize(request: Request) -> Response:
            if not self._authorized(request):
                return JSONResponse({"error": "Unauthorized"}, status_code=401)
            if "summarize" in self.failures:
                status_code = self.failures["summarize"]
                if self.summarize_error_body is not None:
                    return JSONResponse(self.summarize_error_body, status_code=status_code)
                return PlainTextResponse("<html>oops</html>", status_code=status_code)
            body = await request.json()
            document = self._find(body["id"])
            if document is None:
                return JSONResponse({"error": "Document not found"}, status_code=404)
            if document["status"] != "extracted":
                return JSONResponse(
                    {"error": f"Document is in {document['status']} state"}, status_code=409
                )
            document.update(
                status="completed", summary=dict(SAMPLE_SUMMARY), completedAt=1760000000000
            )
            return JSONResponse({"id": document["id"], "status": "completed"})

        @app.put("/{key:path}")
        async def store_object(key: str, request: Request) -> Response:
            if "put" in self.failures:
                return PlainTextResponse("denied", status_code=self.failures["put"])
            self.stored[f"/{key}"] = await request.body()
            return Response(status_code=200)

        return app


@pytest.fixture
def remote() -> FakeSummaryAPI:
    """Fresh fake API per test."""
    return FakeSummaryAPI()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_base_url=API_BASE_URL, upload_refresh_delay=40.0)


@pytest.fixture
def auth_session() -> AuthSession:
    return AuthSession.from_token(TEST_TOKEN, email="reader@example.com")


@pytest.fixture
def gate(auth_session: AuthSession) -> SessionGate:
    return SessionGate(lambda: auth_session)


@pytest.fixture
async def transport(
    remote: FakeSummaryAPI, gate: SessionGate, config: ClientConfig
) -> AsyncGenerator[DocumentTransport, None]:
    """DocumentTransport whose HTTP client is wired to the fake API.

    Yields:
        Transport ready for use.
    """
    async with AsyncClient(transport=ASGITransport(app=remote.app)) as http_client:
        yield DocumentTransport(gate, config, http_client=http_client)


@pytest.fixture
def notices() -> list[Notice]:
    return []


@pytest.fixture
async def orchestrator(
    transport: DocumentTransport, notices: list[Notice]
) -> AsyncGenerator[LifecycleOrchestrator, None]:
    """Orchestrator collecting notices; cancels leftover deferred refreshes.

    Yields:
        LifecycleOrchestrator bound to the fake API.
    """
    orchestrator = LifecycleOrchestrator(transport, notify=notices.append)
    yield orchestrator
    for task in orchestrator.scheduled_refreshes:
        task.cancel()


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for the docdigest host app.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
