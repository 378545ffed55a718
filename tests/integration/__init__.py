"""Integration tests for components working together.

Coverage:
    - Transport requests, headers and failure classification
    - Upload, summarize and refresh flows through the orchestrator
    - Host app health endpoint

Runs against the in-process fake API from conftest. No network required.
"""
