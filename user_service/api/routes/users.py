"""User Routes — CRUD endpoints with HAL-style hypermedia links.

Invariants:
    - Input validated by Pydantic before the service runs (400 on failure)
    - Domain errors propagate to the global handlers (404 / 409)
    - Every single-user payload carries self + all-users links
    - Static paths (/count, /check-email) declared before /{user_id}

Design Decisions:
    - Links attached here, from pure core/hypermedia builders — the service returns plain DTOs
    - DELETE returns 204 with an empty body
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from user_service.api.dependencies import (
    USERS_PREFIX, get_user_service, users_base_url,
)
from user_service.core.hypermedia import (
    collection_links, email_check_links, embedded_user_links, user_links,
)
from user_service.schemas.user import (
    EmailCheckResource, EmbeddedUsers, UserCollection, UserCreate,
    UserResource, UserResponse, UserUpdate,
)
from user_service.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix=USERS_PREFIX, tags=["users"])

_NOT_FOUND = {404: {"description": "User not found"}}
_CONFLICT = {409: {"description": "Email already used by another user"}}
_INVALID = {400: {"description": "Invalid request data"}}


def _resource(user: UserResponse, base: str) -> UserResource:
    return UserResource(**user.model_dump(), links=user_links(base, user.id))


@router.post(
    "", response_model=UserResource,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    responses={**_INVALID, **_CONFLICT},
)
async def create_user(
    body: UserCreate,
    service: UserService = Depends(get_user_service),
    base: str = Depends(users_base_url),
):
    """Create a user; the email must not be in use."""
    user = await service.create_user(body)
    return _resource(user, base)


@router.get(
    "", response_model=UserCollection,
    summary="List all users, newest first",
)
async def list_users(
    service: UserService = Depends(get_user_service),
    base: str = Depends(users_base_url),
):
    """List users ordered by creation time (descending)."""
    users = await service.list_users()
    return UserCollection(
        embedded=EmbeddedUsers(users=[
            UserResource(**u.model_dump(), links=embedded_user_links(base, u.id))
            for u in users
        ]),
        links=collection_links(base),
    )


@router.get("/count", response_model=int, summary="Count users")
async def count_users(service: UserService = Depends(get_user_service)):
    """Total number of users (0 while the store is unavailable)."""
    return await service.count_users()


@router.get(
    "/check-email/{email}", response_model=EmailCheckResource,
    summary="Check whether an email is in use",
)
async def check_email_exists(
    email: str,
    service: UserService = Depends(get_user_service),
    base: str = Depends(users_base_url),
):
    """Report whether any user already has this email."""
    exists = await service.email_exists(email)
    return EmailCheckResource(
        email=email, exists=exists, links=email_check_links(base, email),
    )


@router.get(
    "/{user_id}", response_model=UserResource,
    summary="Get a user by id",
    responses=_NOT_FOUND,
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
    base: str = Depends(users_base_url),
):
    """Get one user by id."""
    user = await service.get_user(user_id)
    return _resource(user, base)


@router.put(
    "/{user_id}", response_model=UserResource,
    summary="Update a user (partial)",
    responses={**_INVALID, **_NOT_FOUND, **_CONFLICT},
)
async def update_user(
    user_id: int,
    body: UserUpdate,
    service: UserService = Depends(get_user_service),
    base: str = Depends(users_base_url),
):
    """Overwrite only the fields present in the body."""
    user = await service.update_user(user_id, body)
    return _resource(user, base)


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a user",
    responses=_NOT_FOUND,
)
async def delete_user(
    user_id: int, service: UserService = Depends(get_user_service),
):
    """Delete one user by id."""
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
