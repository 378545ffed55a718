"""Unit tests for document and summary models.

Tests parsing of the API's wire format into client models.
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from docdigest.models.schemas import (
    Document,
    DocumentList,
    DocumentStatus,
    Notice,
    NoticeLevel,
    PendingUpload,
    Summary,
    UploadTicket,
)

SUMMARY_WIRE = {
    "title": "A Title",
    "phase1": "Core",
    "phase2": "Concepts",
    "phase3": "Takeaways",
    "readingTimeMinutes": 5,
}


class TestSummary:
    """Tests for Summary validation."""

    def test_parses_wire_names(self) -> None:
        """readingTimeMinutes maps onto reading_time_minutes."""
        summary = Summary.model_validate(SUMMARY_WIRE)

        assert summary.title == "A Title"
        assert summary.reading_time_minutes == 5

    def test_rejects_partial_summary(self) -> None:
        """A summary missing a phase is invalid."""
        partial = {k: v for k, v in SUMMARY_WIRE.items() if k != "phase3"}

        with pytest.raises(ValidationError) as exc_info:
            Summary.model_validate(partial)

        assert "phase3" in str(exc_info.value)

    def test_rejects_non_positive_reading_time(self) -> None:
        """Reading time must be a positive integer."""
        with pytest.raises(ValidationError):
            Summary.model_validate({**SUMMARY_WIRE, "readingTimeMinutes": 0})

    def test_summary_is_immutable(self) -> None:
        """Summaries are frozen once parsed."""
        summary = Summary.model_validate(SUMMARY_WIRE)

        with pytest.raises(ValidationError):
            summary.title = "Changed"


class TestDocument:
    """Tests for Document parsing and status helpers."""

    def test_parses_completed_document(self) -> None:
        """Completed document carries its summary and completion time."""
        document = Document.model_validate(
            {
                "id": "abc123",
                "filename": "report.pdf",
                "status": "completed",
                "completedAt": 1760000000000,
                "summary": SUMMARY_WIRE,
            }
        )

        assert document.status == DocumentStatus.COMPLETED
        assert document.summary is not None
        assert document.completed_at == datetime.fromtimestamp(1760000000, tz=UTC)
        assert document.is_terminal is True

    def test_extracted_is_summarizable(self) -> None:
        """Only extracted documents can be summarized."""
        extracted = Document(id="a", filename="a.pdf", status="extracted")
        processing = Document(id="b", filename="b.pdf", status="processing")

        assert extracted.is_summarizable is True
        assert processing.is_summarizable is False

    def test_failed_is_terminal(self) -> None:
        document = Document(id="a", filename="a.pdf", status="failed")

        assert document.is_terminal is True
        assert document.is_summarizable is False

    def test_unknown_status_survives_parsing(self) -> None:
        """Statuses the client does not know yet are kept as-is."""
        document = Document.model_validate(
            {"id": "a", "filename": "a.pdf", "status": "queued_for_review"}
        )

        assert document.status == "queued_for_review"
        assert document.is_terminal is False

    def test_ignores_unknown_fields(self) -> None:
        document = Document.model_validate(
            {"id": "a", "filename": "a.pdf", "status": "processing", "s3Key": "x/y"}
        )

        assert document.summary is None
        assert document.completed_at is None


class TestDocumentList:
    """Tests for the GET /summaries envelope."""

    def test_missing_summaries_is_empty(self) -> None:
        """An envelope without summaries parses as an empty list."""
        listing = DocumentList.model_validate({"count": 0})

        assert listing.summaries == []

    def test_null_summaries_is_empty(self) -> None:
        listing = DocumentList.model_validate({"summaries": None, "count": 0})

        assert listing.summaries == []

    def test_preserves_server_order(self) -> None:
        listing = DocumentList.model_validate(
            {
                "summaries": [
                    {"id": "z", "filename": "z.pdf", "status": "processing"},
                    {"id": "a", "filename": "a.pdf", "status": "extracted"},
                ]
            }
        )

        assert [d.id for d in listing.summaries] == ["z", "a"]


class TestSmallModels:
    """Tests for UploadTicket, PendingUpload and Notice."""

    def test_upload_ticket_wire_names(self) -> None:
        ticket = UploadTicket.model_validate({"uploadUrl": "https://store/x", "id": "abc123"})

        assert ticket.upload_url == "https://store/x"
        assert ticket.id == "abc123"

    def test_upload_ticket_requires_id(self) -> None:
        with pytest.raises(ValidationError):
            UploadTicket.model_validate({"uploadUrl": "https://store/x"})

    def test_pending_upload_size(self) -> None:
        pending = PendingUpload(filename="a.pdf", content_type="application/pdf", content=b"%PDF-1")

        assert pending.size == 6

    def test_notice_defaults_to_info(self) -> None:
        assert Notice(message="hi").level == NoticeLevel.INFO
