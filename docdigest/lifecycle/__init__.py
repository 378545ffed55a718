"""Document lifecycle orchestration.

Owns the observed document collection and the selected document, drives
uploads, triggers summarization when a document is eligible, and refreshes
state on demand and after writes. The presentation layer only renders this
state and forwards user intents.
"""

from docdigest.lifecycle.orchestrator import LifecycleOrchestrator

__all__ = ["LifecycleOrchestrator"]
