"""Pydantic models for API payloads and client state.

Models:
    - Document: one uploaded file and its processing record
    - Summary: three-phase AI summary of a completed document
    - UploadTicket: presigned upload target
    - DocumentList: GET /summaries response body
    - PendingUpload: local file awaiting upload
    - Notice: user-visible message
"""

from docdigest.models.schemas import (
    PDF_CONTENT_TYPE,
    Document,
    DocumentList,
    DocumentStatus,
    Notice,
    NoticeLevel,
    PendingUpload,
    Summary,
    UploadTicket,
)

__all__ = [
    "PDF_CONTENT_TYPE",
    "Document",
    "DocumentList",
    "DocumentStatus",
    "Notice",
    "NoticeLevel",
    "PendingUpload",
    "Summary",
    "UploadTicket",
]
