"""docdigest - PDF upload and AI summary client.

Uploads PDFs through presigned URLs, tracks each document through the remote
extraction and summarization pipeline, and presents the resulting summaries.

Components:
    - auth: session gate and bearer credentials
    - transport: HTTP client for the summarization API
    - lifecycle: document state orchestration and user intents
    - ui: NiceGUI dashboard
    - api: FastAPI host application
    - models: document and summary schemas
"""

__version__ = "0.1.0"
