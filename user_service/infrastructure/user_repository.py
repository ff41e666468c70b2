"""User Repository — SQLAlchemy implementation of the UserRepository protocol.

Invariants:
    - Every write commits before returning (single-record atomicity)
    - A unique violation on users.email becomes EmailConflictError, never a raw IntegrityError
    - find_all orders by created_at DESC, then id DESC (stable for equal timestamps)

Design Decisions:
    - One repository per AsyncSession: built per request alongside the service
    - Other SQLAlchemy errors propagate raw: DatabaseSessionManager maps them on the
      way out, and the read-path fallback boundary sees the original exception
"""

import logging

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.core.errors import EmailConflictError, ErrorContext
from user_service.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyUserRepository:
    """UserRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, user: User) -> User:
        self.db.add(user)
        await self._commit(user, "insert")
        await self.db.refresh(user)
        return user

    async def save(self, user: User) -> User:
        await self._commit(user, "update")
        await self.db.refresh(user)
        return user

    async def find_by_id(self, user_id: int) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_all_ordered_by_created_desc(self) -> list[User]:
        result = await self.db.execute(
            select(User).order_by(User.created_at.desc(), User.id.desc()),
        )
        return list(result.scalars().all())

    async def exists_by_id(self, user_id: int) -> bool:
        result = await self.db.execute(
            select(exists().where(User.id == user_id)),
        )
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(
            select(exists().where(User.email == email)),
        )
        return bool(result.scalar())

    async def delete_by_id(self, user_id: int) -> None:
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return int(result.scalar_one())

    async def _commit(self, user: User, operation: str) -> None:
        # Read before commit: rollback expires the instance (no lazy loads in async)
        email = user.email
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Unique constraint rejected {operation} for {email}: {e.orig}",
                extra={"operation": operation},
            )
            raise EmailConflictError(
                email, ErrorContext(operation=operation),
            ) from e
