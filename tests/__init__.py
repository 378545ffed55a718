"""Test package for docdigest.

Unit tests for isolated logic and integration tests for workflows.

Structure:
    - unit/: Models, configuration, session gate, badges
    - integration/: Transport and orchestrator against a fake API

The fake API is a real FastAPI app served over ASGITransport, so no HTTP
calls are mocked.
"""
