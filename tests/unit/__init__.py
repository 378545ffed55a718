"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation of wire payloads
    - config: Environment-driven client configuration
    - auth/: Session gate and sign-out URL
    - ui/: Status badges
    - lifecycle/: Local preconditions and selection (no network)
"""
