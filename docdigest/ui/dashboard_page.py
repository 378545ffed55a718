"""NiceGUI dashboard for uploading PDFs and reading their summaries."""

import logging
import os
from collections.abc import Callable
from functools import partial

from nicegui import app, events, ui

from docdigest.auth.session import (
    SIGNED_OUT_KEY,
    AuthSession,
    SessionGate,
    build_logout_url,
    session_from_storage,
)
from docdigest.config import ClientConfig, get_client_config
from docdigest.lifecycle.orchestrator import LifecycleOrchestrator
from docdigest.models.schemas import Document, Notice, Summary
from docdigest.transport.client import DocumentTransport
from docdigest.ui.badges import status_badge

logger = logging.getLogger(__name__)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .doc-card {
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .doc-card:hover { border-color: #a78bfa; }

    .summary-card {
        background: linear-gradient(135deg, #f5f3ff 0%, #fdf2f8 100%);
        border: 1px solid #ddd6fe;
        border-radius: 12px;
        cursor: pointer;
    }

    .summarize-btn { background: linear-gradient(135deg, #7c3aed 0%, #db2777 100%) !important; }
</style>
"""

PHASES = (
    ("phase1", "Core Message", "lightbulb"),
    ("phase2", "Main Concepts", "menu_book"),
    ("phase3", "Practical Takeaways", "track_changes"),
)


def load_auth_session(config: ClientConfig) -> AuthSession:
    """Read the signed-in user from browser storage, or the dev token."""
    return session_from_storage(app.storage.user, config)


def format_size(size: int) -> str:
    return f"{size / (1024 * 1024):.2f} MB"


def render_sign_in() -> None:
    """Sign-in card shown when there is no authenticated session."""
    with ui.card().classes("w-full max-w-md mx-auto mt-16 p-8 items-center gap-4"):
        ui.icon("auto_awesome").classes("text-6xl text-purple-500")
        ui.label("PDF Summarizer").classes("text-2xl font-semibold")
        ui.label("Please sign in to upload and summarize documents.").classes(
            "text-gray-500 text-center"
        )
        token_field = ui.input("ID token", password=True).classes("w-full")
        email_field = ui.input("Email (optional)").classes("w-full")

        def sign_in() -> None:
            token = (token_field.value or "").strip()
            if not token:
                ui.notify("An ID token is required", type="warning")
                return
            app.storage.user["id_token"] = token
            app.storage.user["email"] = (email_field.value or "").strip() or None
            app.storage.user.pop(SIGNED_OUT_KEY, None)
            ui.navigate.reload()

        ui.button("Sign in", icon="login", on_click=sign_in).classes("w-full")


def render_summary_detail(summary: Summary, on_close: Callable[[], None]) -> None:
    """Full summary: title, reading time and the three phases."""
    with ui.row().classes("w-full items-start justify-between gap-4"):
        with ui.column().classes("gap-2"):
            ui.label("AI Summary").classes("text-xs uppercase tracking-wide text-purple-600")
            ui.label(summary.title).classes("text-xl font-bold")
            with ui.row().classes("items-center gap-1 text-gray-500"):
                ui.icon("schedule").classes("text-sm")
                ui.label(f"{summary.reading_time_minutes} min read").classes("text-xs")
        ui.button(icon="close", on_click=on_close).props("flat round")

    for field, heading, icon in PHASES:
        with ui.column().classes("w-full gap-1 mt-3"):
            with ui.row().classes("items-center gap-2"):
                ui.icon(icon).classes("text-purple-500")
                ui.label(heading).classes("font-semibold")
            ui.label(getattr(summary, field)).classes("text-sm text-gray-700 whitespace-pre-line")


@ui.page("/")
def dashboard_page() -> None:
    """Main dashboard page."""
    ui.add_head_html(CUSTOM_CSS)
    config = get_client_config()
    auth_session = load_auth_session(config)

    if not auth_session.is_authenticated:
        render_sign_in()
        return

    gate = SessionGate(lambda: auth_session)
    transport = DocumentTransport(gate, config)

    documents_container: ui.column
    pending_container: ui.column
    detail_container: ui.column
    detail_dialog: ui.dialog

    def show_notice(notice: Notice) -> None:
        ui.notify(notice.message, type=notice.level.value, multi_line=True)

    def render_badge(document: Document) -> None:
        badge = status_badge(document.status)
        with ui.element("div").classes(
            f"{badge.color} text-white px-3 py-1 rounded-full text-xs font-semibold "
            "flex items-center gap-1"
        ):
            icon = ui.icon(badge.icon).classes("text-sm")
            if badge.spinning:
                icon.classes("animate-spin")
            ui.label(badge.text)

    def render_document(document: Document) -> None:
        with ui.column().classes("w-full doc-card p-5 gap-3"):
            with ui.row().classes("w-full items-start justify-between"):
                with ui.column().classes("gap-1"):
                    ui.label(document.filename).classes("text-lg font-semibold")
                    if document.completed_at is not None:
                        ui.label(
                            f"Completed {document.completed_at:%Y-%m-%d %H:%M}"
                        ).classes("text-xs text-gray-400")
                render_badge(document)

            if document.is_summarizable:
                ui.button(
                    "Generate Summary",
                    icon="auto_awesome",
                    on_click=partial(orchestrator.summarize, document.id),
                ).classes("summarize-btn text-white").bind_enabled_from(
                    orchestrator, "loading", backward=lambda busy: not busy
                )

            if document.summary is not None:
                summary = document.summary
                with ui.column().classes("w-full summary-card p-4 gap-1").on(
                    "click", partial(orchestrator.select, document.id)
                ):
                    ui.label(summary.title).classes("font-bold")
                    ui.label(f"{summary.reading_time_minutes} min read").classes(
                        "text-xs text-purple-600"
                    )
                    ui.label(summary.phase1).classes("text-sm text-gray-600 line-clamp-2")

    def render_documents() -> None:
        documents_container.clear()
        with documents_container:
            if not orchestrator.documents:
                with ui.column().classes("w-full h-48 items-center justify-center gap-3"):
                    ui.icon("description").classes("text-5xl text-gray-300")
                    ui.label("No documents yet").classes("text-lg text-gray-400")
            else:
                for document in orchestrator.documents:
                    render_document(document)

    def render_pending() -> None:
        pending_container.clear()
        candidate = orchestrator.pending
        if candidate is None:
            return
        with pending_container, ui.row().classes("w-full items-center justify-between"):
            with ui.row().classes("items-center gap-2"):
                ui.icon("picture_as_pdf").classes("text-red-500 text-2xl")
                ui.label(candidate.filename).classes("font-medium")
                ui.label(format_size(candidate.size)).classes("text-xs text-gray-400")
            with ui.row().classes("gap-2"):
                ui.button(icon="close", on_click=orchestrator.clear_pending).props(
                    "flat round"
                ).bind_enabled_from(orchestrator, "uploading", backward=lambda busy: not busy)
                ui.button("Upload", icon="cloud_upload", on_click=orchestrator.upload).props(
                    "unelevated"
                ).bind_enabled_from(orchestrator, "uploading", backward=lambda busy: not busy)

    def render_detail() -> None:
        detail_container.clear()
        summary = orchestrator.selected_summary
        if summary is None:
            detail_dialog.close()
            return
        with detail_container:
            render_summary_detail(summary, orchestrator.deselect)
        detail_dialog.open()

    def on_change() -> None:
        render_documents()
        render_pending()
        render_detail()

    orchestrator = LifecycleOrchestrator(transport, notify=show_notice, on_change=on_change)

    async def handle_upload(e: events.UploadEventArguments) -> None:
        orchestrator.offer_file(e.name, e.type, e.content.read())
        uploader.reset()

    def sign_out() -> None:
        app.storage.user.pop("id_token", None)
        app.storage.user.pop("email", None)
        app.storage.user[SIGNED_OUT_KEY] = True
        logout_url = build_logout_url(config)
        if logout_url:
            ui.navigate.to(logout_url)
        else:
            ui.navigate.reload()

    async def teardown() -> None:
        orchestrator.close()
        await transport.aclose()

    ui.context.client.on_disconnect(teardown)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-4xl mx-auto app-container"),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("auto_awesome").classes("text-white text-3xl")
                ui.label("PDF Summarizer").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-2"):
                if auth_session.email:
                    ui.label(auth_session.email).classes("text-xs text-white/80")
                ui.button(icon="refresh", on_click=lambda: orchestrator.refresh()).props(
                    "flat round color=white"
                ).bind_enabled_from(orchestrator, "loading", backward=lambda busy: not busy)
                ui.button(icon="logout", on_click=sign_out).props("flat round color=white")

        # Upload area
        with ui.column().classes("w-full p-5 gap-3 border-b"):
            ui.label("Upload a PDF").classes("font-semibold")
            uploader = (
                ui.upload(on_upload=handle_upload, auto_upload=True, max_files=1)
                .props('accept="application/pdf" flat bordered')
                .classes("w-full")
            )
            pending_container = ui.column().classes("w-full")

        # Documents
        with ui.column().classes("w-full p-5 gap-4"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Your Documents").classes("text-lg font-semibold")
                ui.spinner(size="sm").bind_visibility_from(orchestrator, "loading")
            documents_container = ui.column().classes("w-full gap-4")

    with ui.dialog().on("hide", orchestrator.deselect) as detail_dialog:
        detail_container = ui.column().classes("w-full max-w-2xl bg-white p-6 gap-2")

    on_change()
    ui.timer(0.1, orchestrator.mount, once=True)


def main() -> None:
    ui.run(
        title="PDF Summarizer",
        port=8080,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docdigest-secret"),
    )


if __name__ == "__main__":
    main()
