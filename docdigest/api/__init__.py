"""FastAPI host for the docdigest client.

Endpoints:
    - GET /health: Service health status

The NiceGUI dashboard is mounted onto this app in integrated mode.
"""

from docdigest.api.app import create_app

__all__ = ["create_app"]
