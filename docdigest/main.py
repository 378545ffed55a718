"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI dashboard mounted on it.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

from docdigest.config import ClientConfig, get_client_config

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def load_startup_config() -> ClientConfig:
    """Validate client settings before anything binds a port.

    Returns:
        The client configuration the dashboard will use.

    Raises:
        ValidationError: If DOCDIGEST_API_URL is missing or blank.
    """
    config = get_client_config()
    logger.info(f"Summarization API: {config.api_base_url}")
    if config.dev_id_token:
        logger.warning("DOCDIGEST_ID_TOKEN is set; new sessions start signed in")
    return config


def run_integrated() -> None:
    """Serve the dashboard at / and /health, /docs from one uvicorn process.

    NiceGUI needs a storage secret to keep the signed-in token per browser.
    """
    import uvicorn
    from nicegui import ui

    from docdigest.api.app import create_app
    from docdigest.ui.dashboard_page import dashboard_page  # noqa: F401 - registers "/"

    load_startup_config()
    host_app = create_app()
    ui.run_with(
        host_app,
        title="PDF Summarizer",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docdigest-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Dashboard on :{port}/, health on :{port}/health, API docs on :{port}/docs")

    uvicorn.run(
        host_app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_standalone() -> None:
    """Run the NiceGUI dashboard on its own server (port 8080)."""
    from docdigest.ui.dashboard_page import main as run_dashboard

    load_startup_config()
    run_dashboard()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=standalone to run the dashboard without the FastAPI host.
    Default is integrated mode.
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting docdigest in {mode} mode")

    if mode == "standalone":
        run_standalone()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
