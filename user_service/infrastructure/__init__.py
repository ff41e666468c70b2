"""Infrastructure Layer — database access, persistence adapters, and logging.

Invariants:
    - Infrastructure implements core/ protocols; core never imports infrastructure
    - Raw driver exceptions mapped to core/errors.py types at this boundary

Design Decisions:
    - One adapter per store concern (session manager, repository, observability)
"""
