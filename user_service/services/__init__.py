"""Services Layer — user business rules and the read-path fallback boundary.

Invariants:
    - Services depend on core/ protocols, never on a concrete repository
    - Write paths never swallow failures

Design Decisions:
    - Services constructed explicitly per request (no framework singletons)
"""
