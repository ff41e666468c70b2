"""User Service — business rules for user records over the UserRepository protocol.

Invariants:
    - create/update reject an email held by another record (EmailConflictError)
    - get/update/delete on an unknown id raise UserNotFoundError; delete issues no store call then
    - update is partial: None fields never overwrite; created_at and id are never touched
    - get_user, list_users, count_users run inside the fallback boundary
      (placeholder user / [] / 0); UserNotFoundError is never converted to a placeholder
    - create/update/delete never swallow failures

Design Decisions:
    - Service takes the repository explicitly: wiring happens in api/dependencies.py
    - Mapping record → UserResponse is a pure module-level function, reused by tests
    - The email pre-check is not atomic; the storage unique constraint backs it
      (repository reports violations as EmailConflictError)
"""

import logging
from datetime import datetime, timezone

from user_service.core.domain_types import (
    FALLBACK_USER_NAME, FALLBACK_USER_EMAIL, FALLBACK_USER_AGE,
    FALLBACK_USER_COUNT, ReadOperation,
)
from user_service.core.errors import (
    EmailConflictError, ErrorContext, UserNotFoundError,
)
from user_service.core.repository_protocols import UserLike, UserRepository
from user_service.models.user import User
from user_service.schemas.user import UserCreate, UserResponse, UserUpdate
from user_service.services.fallback import run_with_fallback

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def to_user_response(user: UserLike) -> UserResponse:
    """Shape a stored record into the public DTO."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        age=user.age,
        created_at=user.created_at,
    )


def fallback_user_response(user_id: int) -> UserResponse:
    """Degraded placeholder returned when the store is unavailable."""
    return UserResponse(
        id=user_id,
        name=FALLBACK_USER_NAME,
        email=FALLBACK_USER_EMAIL,
        age=FALLBACK_USER_AGE,
        created_at=_now(),
    )


class UserService:
    """User CRUD with uniqueness enforcement and read-path fallbacks."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    # ─── Writes ──────────────────────────────────────────────────

    async def create_user(self, request: UserCreate) -> UserResponse:
        if await self.repository.exists_by_email(request.email):
            raise EmailConflictError(
                request.email, ErrorContext(operation="create_user"),
            )

        user = User(
            name=request.name,
            email=request.email,
            age=request.age,
            created_at=_now(),
        )
        saved = await self.repository.insert(user)
        logger.info(
            f"Created user {saved.id}",
            extra={"user_id": saved.id, "operation": "create_user"},
        )
        return to_user_response(saved)

    async def update_user(self, user_id: int, request: UserUpdate) -> UserResponse:
        existing = await self.repository.find_by_id(user_id)
        if existing is None:
            raise UserNotFoundError(user_id, ErrorContext(operation="update_user"))

        if (
            request.email is not None
            and request.email != existing.email
            and await self.repository.exists_by_email(request.email)
        ):
            raise EmailConflictError(
                request.email,
                ErrorContext(user_id=user_id, operation="update_user"),
            )

        if request.name is not None:
            existing.name = request.name
        if request.email is not None:
            existing.email = request.email
        if request.age is not None:
            existing.age = request.age

        updated = await self.repository.save(existing)
        logger.info(
            f"Updated user {user_id}",
            extra={"user_id": user_id, "operation": "update_user"},
        )
        return to_user_response(updated)

    async def delete_user(self, user_id: int) -> None:
        if not await self.repository.exists_by_id(user_id):
            raise UserNotFoundError(user_id, ErrorContext(operation="delete_user"))
        await self.repository.delete_by_id(user_id)
        logger.info(
            f"Deleted user {user_id}",
            extra={"user_id": user_id, "operation": "delete_user"},
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def get_user(self, user_id: int) -> UserResponse:
        """Fetch one user; placeholder on store failure, 404 when absent."""

        async def _load() -> UserResponse:
            user = await self.repository.find_by_id(user_id)
            if user is None:
                raise UserNotFoundError(
                    user_id, ErrorContext(operation=ReadOperation.GET_USER.value),
                )
            return to_user_response(user)

        return await run_with_fallback(
            _load,
            lambda _exc: fallback_user_response(user_id),
            name=ReadOperation.GET_USER.value,
            propagate=(UserNotFoundError,),
        )

    async def list_users(self) -> list[UserResponse]:
        """All users, newest first; empty list on store failure."""

        async def _load() -> list[UserResponse]:
            users = await self.repository.find_all_ordered_by_created_desc()
            return [to_user_response(u) for u in users]

        return await run_with_fallback(
            _load, lambda _exc: [], name=ReadOperation.LIST_USERS.value,
        )

    async def count_users(self) -> int:
        """Total users; zero on store failure."""
        return await run_with_fallback(
            self.repository.count,
            lambda _exc: FALLBACK_USER_COUNT,
            name=ReadOperation.COUNT_USERS.value,
        )

    async def email_exists(self, email: str) -> bool:
        return await self.repository.exists_by_email(email)
