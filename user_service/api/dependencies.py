"""API Dependencies — explicit wiring of request-scoped components.

Invariants:
    - One UserService per request, bound to that request's AsyncSession
    - Routes receive the service via Depends — never import a module-level instance

Design Decisions:
    - Wiring in one place: tests override get_db and the whole chain follows
    - users_base_url derived from the request: links stay correct behind proxies/test hosts
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.infrastructure.database import get_db
from user_service.infrastructure.user_repository import SqlAlchemyUserRepository
from user_service.services.user_service import UserService

USERS_PREFIX = "/api/v1/users"


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(SqlAlchemyUserRepository(db))


def users_base_url(request: Request) -> str:
    """Absolute URL of the user collection, no trailing slash."""
    return str(request.base_url).rstrip("/") + USERS_PREFIX
