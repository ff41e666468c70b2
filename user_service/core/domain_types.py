"""Domain Types — rich types and fixed values shared across the codebase.

Invariants:
    - UserId wraps int — store-assigned, never set by callers
    - Field bounds are the single source for schemas, ORM columns and migrations
    - Fallback values are fixed sentinels, never derived from stored data

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Field Bounds ────────────────────────────────────────────────

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
AGE_MIN = 0
AGE_MAX = 150


# ─── Fallback Sentinels ──────────────────────────────────────────

FALLBACK_USER_NAME = "Service Temporarily Unavailable"
FALLBACK_USER_EMAIL = "fallback@example.com"
FALLBACK_USER_AGE = 0
FALLBACK_USER_COUNT = 0


# ─── Enums ───────────────────────────────────────────────────────

class LinkRelation(str, Enum):
    """Hypermedia link relations exposed by the HTTP surface."""
    SELF = "self"
    ALL_USERS = "all-users"
    CREATE_USER = "create-user"


class ReadOperation(str, Enum):
    """Read paths guarded by the fallback boundary — used as log/operation names."""
    GET_USER = "get_user"
    LIST_USERS = "list_users"
    COUNT_USERS = "count_users"
    DIAGNOSTIC = "circuit_breaker_test"
