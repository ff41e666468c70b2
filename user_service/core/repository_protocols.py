"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store operations accessed through Protocol types
    - Implementations provided by shell via explicit wiring (services built per request)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO;
      the service orchestrates the async calls around pure mapping/link logic
    - insert/save split: insert is the only path that assigns an id
"""

from datetime import datetime
from typing import Protocol

from user_service.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for stored user records.

    Lets the service and mapping functions work on the ORM model and on
    test fakes alike without coupling to SQLAlchemy.
    """
    id: int | None
    name: str
    email: str
    age: int
    created_at: datetime


class UserRepository(Protocol):
    """Contract for user record persistence — implemented by shell."""
    async def insert(self, user: UserLike) -> UserLike: ...
    async def save(self, user: UserLike) -> UserLike: ...
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def find_all_ordered_by_created_desc(self) -> list[UserLike]: ...
    async def exists_by_id(self, user_id: UserId) -> bool: ...
    async def exists_by_email(self, email: str) -> bool: ...
    async def delete_by_id(self, user_id: UserId) -> None: ...
    async def count(self) -> int: ...
