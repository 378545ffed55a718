"""Status badges for the document list."""

from typing import NamedTuple

from docdigest.models.schemas import DocumentStatus


class StatusBadge(NamedTuple):
    text: str
    color: str
    icon: str
    spinning: bool = False


STATUS_BADGES: dict[str, StatusBadge] = {
    DocumentStatus.PENDING_UPLOAD.value: StatusBadge("Pending", "bg-gray-500", "autorenew", True),
    DocumentStatus.PROCESSING.value: StatusBadge("Processing", "bg-blue-500", "autorenew", True),
    DocumentStatus.EXTRACTED.value: StatusBadge("Ready", "bg-green-500", "check_circle"),
    DocumentStatus.SUMMARIZING.value: StatusBadge("Summarizing", "bg-purple-500", "autorenew", True),
    DocumentStatus.COMPLETED.value: StatusBadge("Completed", "bg-emerald-500", "check_circle"),
    DocumentStatus.FAILED.value: StatusBadge("Failed", "bg-red-500", "cancel"),
}


def status_badge(status: str) -> StatusBadge:
    """Badge for a status; unknown statuses render as pending."""
    return STATUS_BADGES.get(status, STATUS_BADGES[DocumentStatus.PENDING_UPLOAD.value])
