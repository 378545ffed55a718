"""Document lifecycle orchestration.

Owns the client's view of the user's documents and mediates every user
intent: picking a file, uploading it, requesting a summary, refreshing and
selecting a document for the detail view.

The server holds the authoritative status of each document:

    pending_upload -> processing -> extracted -> summarizing -> completed
                                        (any non-terminal) -> failed

The client never predicts the next status. Every write is followed by a
full re-read of the document list, which replaces the local collection.
"""

import asyncio
import logging
from collections.abc import Callable

from docdigest.errors import DocumentClientError, LocalPreconditionError
from docdigest.models.schemas import (
    PDF_CONTENT_TYPE,
    Document,
    Notice,
    NoticeLevel,
    PendingUpload,
    Summary,
    UploadTicket,
)
from docdigest.transport.client import DocumentTransport

logger = logging.getLogger(__name__)

NotifyCallback = Callable[[Notice], None]
ChangeCallback = Callable[[], None]

PROCESSING_HINT = "Processing will take about 30-60 seconds."


def _log_notice(notice: Notice) -> None:
    logger.info(f"[{notice.level.value}] {notice.message}")


def check_pdf(content_type: str | None) -> None:
    """Accept only files the browser reports as application/pdf.

    Raises:
        LocalPreconditionError: For any other MIME type.
    """
    if content_type != PDF_CONTENT_TYPE:
        raise LocalPreconditionError("Please upload a PDF file")


def check_summarizable(document: Document | None, document_id: str) -> Document:
    """Return the document if it can be summarized now.

    Raises:
        LocalPreconditionError: If the document is unknown or not extracted.
    """
    if document is None:
        raise LocalPreconditionError(f"Document {document_id} is not loaded")
    if not document.is_summarizable:
        raise LocalPreconditionError(f"Document is not ready. Status: {document.status}")
    return document


class LifecycleOrchestrator:
    """Client-side state and user-intent handling for document processing.

    Busy flags (uploading, loading) only gate UI controls. Nothing here
    depends on them for correctness: the document list is always replaced
    wholesale and the last completed refresh wins.

    Attributes:
        documents: Documents in server order, as of the last refresh.
        selected_id: ID of the document open in the detail view.
        pending: File selected for upload but not yet sent.
        uploading: True while an upload flow is running.
    """

    def __init__(
        self,
        transport: DocumentTransport,
        notify: NotifyCallback | None = None,
        on_change: ChangeCallback | None = None,
        refresh_delay: float | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            transport: API client used for every remote call.
            notify: Receives user-visible notices. Logs them if not provided.
            on_change: Called after any state change so the view can re-render.
            refresh_delay: Seconds before the refresh that follows an upload.
                           Defaults to the transport's configured delay.
        """
        self._transport = transport
        self._notify = notify or _log_notice
        self._on_change = on_change
        self.refresh_delay = (
            transport.config.upload_refresh_delay if refresh_delay is None else refresh_delay
        )

        self.documents: list[Document] = []
        self.selected_id: str | None = None
        self.pending: PendingUpload | None = None
        self.uploading: bool = False

        self._busy = 0
        self._closed = False
        self._scheduled: set[asyncio.Task[None]] = set()

    # === State ===

    @property
    def loading(self) -> bool:
        """True while a list or summarize call is in flight."""
        return self._busy > 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def selected_document(self) -> Document | None:
        """The selected document, resolved against the current collection."""
        if self.selected_id is None:
            return None
        return self.get_document(self.selected_id)

    @property
    def selected_summary(self) -> Summary | None:
        document = self.selected_document
        return document.summary if document else None

    @property
    def scheduled_refreshes(self) -> tuple[asyncio.Task[None], ...]:
        """Deferred refreshes that have not run yet."""
        return tuple(self._scheduled)

    def get_document(self, document_id: str) -> Document | None:
        for document in self.documents:
            if document.id == document_id:
                return document
        return None

    def _changed(self) -> None:
        if self._on_change is not None and not self._closed:
            self._on_change()

    def _emit(self, message: str, level: NoticeLevel) -> None:
        if self._closed:
            logger.debug(f"Dropped notice after teardown: {message}")
            return
        self._notify(Notice(message=message, level=level))

    # === File selection ===

    def offer_file(self, filename: str, content_type: str | None, content: bytes) -> bool:
        """Offer a dropped or picked file as the upload candidate.

        Args:
            filename: Original file name.
            content_type: MIME type reported by the browser.
            content: Raw file bytes.

        Returns:
            True if the file became the pending candidate.
        """
        try:
            check_pdf(content_type)
        except LocalPreconditionError as e:
            logger.info(f"Rejected {filename}: content type {content_type!r}")
            self._emit(e.user_message, NoticeLevel.WARNING)
            return False

        self.pending = PendingUpload(
            filename=filename,
            content_type=PDF_CONTENT_TYPE,
            content=content,
        )
        self._changed()
        return True

    def clear_pending(self) -> None:
        self.pending = None
        self._changed()

    # === Upload ===

    async def upload(self) -> UploadTicket | None:
        """Upload the pending file through a presigned URL.

        Requests the URL, then PUTs the bytes. On success the candidate is
        cleared and a one-shot refresh is scheduled; on failure the candidate
        stays so the user can retry.

        Returns:
            The upload ticket on success, None otherwise.
        """
        candidate = self.pending
        if candidate is None:
            return None

        self.uploading = True
        self._changed()
        try:
            ticket = await self._transport.request_upload_url(candidate.filename)
            await self._transport.upload_bytes(ticket.upload_url, candidate.content)
        except DocumentClientError as e:
            logger.warning(f"Upload of {candidate.filename} failed: {e}")
            self._emit(f"Upload failed: {e.user_message}", NoticeLevel.NEGATIVE)
            return None
        finally:
            self.uploading = False
            self._changed()

        logger.info(f"Uploaded {candidate.filename} as document {ticket.id}")
        if self._closed:
            return ticket

        # A file picked while this upload ran stays pending.
        if self.pending is candidate:
            self.pending = None
        self._emit(
            f"Upload successful! Document ID: {ticket.id}. {PROCESSING_HINT}",
            NoticeLevel.POSITIVE,
        )
        self.schedule_refresh()
        self._changed()
        return ticket

    # === Summarize ===

    async def summarize(self, document_id: str) -> bool:
        """Trigger summarization of an extracted document.

        Checks the cached status first and makes no call unless it is
        `extracted`. After the call, success or not, the document list is
        re-read so the new status comes from the server.

        Args:
            document_id: ID of the document to summarize.

        Returns:
            True if the API accepted the request.
        """
        try:
            document = check_summarizable(self.get_document(document_id), document_id)
        except LocalPreconditionError as e:
            self._emit(e.user_message, NoticeLevel.WARNING)
            return False

        self._busy += 1
        self._changed()
        try:
            try:
                await self._transport.notify_summarize(document.id)
            except DocumentClientError as e:
                logger.warning(f"Summarize {document.id} failed: {e}")
                self._emit(f"Failed to generate summary: {e.user_message}", NoticeLevel.NEGATIVE)
                accepted = False
            else:
                logger.info(f"Summarize accepted for {document.id}")
                accepted = True

            await self.refresh()
            if accepted:
                self._emit("Summary generated successfully!", NoticeLevel.POSITIVE)
            return accepted
        finally:
            self._busy -= 1
            self._changed()

    # === Refresh ===

    async def refresh(self, quiet: bool = False) -> bool:
        """Replace the local collection with the server's document list.

        On failure the collection is left as it was.

        Args:
            quiet: Log failures instead of notifying the user.

        Returns:
            True if the collection was replaced.
        """
        if self._closed:
            return False

        self._busy += 1
        self._changed()
        documents: list[Document] | None = None
        try:
            documents = await self._transport.list_documents()
        except DocumentClientError as e:
            logger.warning(f"Refresh failed: {e}")
            if not quiet:
                self._emit(e.user_message, NoticeLevel.NEGATIVE)
        finally:
            self._busy -= 1

        if documents is None:
            self._changed()
            return False
        if self._closed:
            logger.debug("Ignored document list that arrived after teardown")
            return False

        self.documents = documents
        if self.selected_id is not None and self.get_document(self.selected_id) is None:
            self.selected_id = None
        self._changed()
        return True

    def schedule_refresh(self, delay: float | None = None) -> asyncio.Task[None]:
        """Schedule a one-shot background refresh.

        There is no push channel for status changes, so an upload is
        followed by a single delayed re-read. Manual refreshes do not cancel
        it; refresh is a full replace, so running both is harmless.
        """
        delay = self.refresh_delay if delay is None else delay
        task = asyncio.get_running_loop().create_task(self._deferred_refresh(delay))
        self._scheduled.add(task)
        task.add_done_callback(self._scheduled.discard)
        logger.info(f"Scheduled refresh in {delay:.0f}s")
        return task

    async def _deferred_refresh(self, delay: float) -> None:
        await asyncio.sleep(delay)
        if self._closed:
            return
        await self.refresh(quiet=True)

    # === Selection ===

    def select(self, document_id: str) -> Document | None:
        """Open a document in the detail view. Purely local."""
        self.selected_id = document_id
        self._changed()
        return self.selected_document

    def deselect(self) -> None:
        self.selected_id = None
        self._changed()

    # === Lifecycle ===

    async def mount(self) -> bool:
        """Load the initial document list."""
        return await self.refresh()

    def close(self) -> None:
        """Detach from the view.

        Calls still in flight finish, but their results no longer touch
        state or produce notices. Scheduled refreshes become no-ops.
        """
        self._closed = True
        logger.debug("Orchestrator closed")
