"""HTTP transport for the summarization API.

Builds and issues the remote operations (request-upload-url, upload-bytes,
notify-summarize, list-documents), normalizes their responses into pydantic
models, and classifies failures into the client error taxonomy.
"""

from docdigest.transport.client import DocumentTransport

__all__ = ["DocumentTransport"]
