"""NiceGUI interface - thin visualization layer for the document lifecycle.

Responsibilities:
    - Sign-in and sign-out
    - Drag-and-drop / file-picker PDF selection and upload
    - Document list with processing status badges
    - Summary detail view

Contains no lifecycle logic. Forwards user intents to the orchestrator and
re-renders when it reports a change.
"""
