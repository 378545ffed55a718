from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

PDF_CONTENT_TYPE = "application/pdf"


class DocumentStatus(str, Enum):
    """Server-side processing stages of a document."""

    PENDING_UPLOAD = "pending_upload"
    PROCESSING = "processing"
    EXTRACTED = "extracted"
    SUMMARIZING = "summarizing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({DocumentStatus.COMPLETED.value, DocumentStatus.FAILED.value})


class Summary(BaseModel):
    """Three-phase AI summary attached to a completed document.

    Attributes:
        title: Generated title.
        phase1: Core message.
        phase2: Main concepts.
        phase3: Practical takeaways.
        reading_time_minutes: Estimated reading time of the source document.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title: str
    phase1: str
    phase2: str
    phase3: str
    reading_time_minutes: int = Field(alias="readingTimeMinutes", gt=0)


class Document(BaseModel):
    """One uploaded file and its processing record.

    The status is kept as a plain string so statuses the server adds later
    still parse; compare it against DocumentStatus members.

    Attributes:
        id: Identifier assigned by the API at upload time.
        filename: Display name.
        status: Current processing stage.
        completed_at: When processing completed, if it has.
        summary: Generated summary, once available.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    filename: str
    status: str = DocumentStatus.PENDING_UPLOAD.value
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    summary: Summary | None = None

    @property
    def is_summarizable(self) -> bool:
        return self.status == DocumentStatus.EXTRACTED

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


class UploadTicket(BaseModel):
    """Presigned upload target returned by POST /upload."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    upload_url: str = Field(alias="uploadUrl")
    id: str


class DocumentList(BaseModel):
    """Response body of GET /summaries."""

    model_config = ConfigDict(extra="ignore")

    summaries: list[Document] = Field(default_factory=list)
    count: int | None = None

    @field_validator("summaries", mode="before")
    @classmethod
    def null_summaries_as_empty(cls, v: object) -> object:
        """Treat an explicit null like a missing field."""
        return [] if v is None else v


class PendingUpload(BaseModel):
    """A local file selected for upload but not yet sent.

    Attributes:
        filename: Original file name.
        content_type: MIME type reported by the browser.
        content: Raw file bytes.
    """

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class NoticeLevel(str, Enum):
    """Severity of a user-visible notice (matches NiceGUI notify types)."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    WARNING = "warning"
    INFO = "info"


class Notice(BaseModel):
    """A message surfaced to the user after an action."""

    message: str
    level: NoticeLevel = NoticeLevel.INFO
