"""UserService — business rules over an in-memory fake repository.

Tests cover:
    - create assigns an id and rejects duplicate emails without inserting
    - get raises UserNotFoundError normally, returns the placeholder on store failure
    - list orders newest first, returns [] on store failure
    - update is partial and only checks email conflicts for a changed email
    - delete on an unknown id raises without a store delete
    - count returns 0 on store failure
    - write paths never swallow store failures
"""

from datetime import datetime, timedelta, timezone

import pytest

from user_service.core.domain_types import (
    FALLBACK_USER_NAME, FALLBACK_USER_EMAIL,
)
from user_service.core.errors import EmailConflictError, UserNotFoundError
from user_service.models.user import User
from user_service.schemas.user import UserCreate, UserUpdate
from user_service.services.user_service import to_user_response

from tests.services.fake_repository import StoreUnavailable


def _john() -> UserCreate:
    return UserCreate(name="John Doe", email="john@example.com", age=30)


async def _seed(repo, name, email, age, created_at):
    return await repo.insert(
        User(name=name, email=email, age=age, created_at=created_at),
    )


# ==============================================================================
# create
# ==============================================================================


async def test_create_returns_record_with_assigned_id(user_service):
    result = await user_service.create_user(_john())

    assert result.id == 1
    assert result.name == "John Doe"
    assert result.email == "john@example.com"
    assert result.age == 30
    assert result.created_at.tzinfo is not None


async def test_create_twice_with_same_email_conflicts(user_service, fake_repo):
    await user_service.create_user(_john())
    fake_repo.calls.clear()

    with pytest.raises(EmailConflictError) as exc_info:
        await user_service.create_user(_john())

    assert exc_info.value.message == "Email already exists: john@example.com"
    assert exc_info.value.http_status == 409
    assert "insert" not in fake_repo.calls


async def test_create_propagates_store_failure(user_service, fake_repo):
    fake_repo.failing = True
    with pytest.raises(StoreUnavailable):
        await user_service.create_user(_john())


# ==============================================================================
# get
# ==============================================================================


async def test_get_returns_existing_user(user_service):
    created = await user_service.create_user(_john())
    result = await user_service.get_user(created.id)
    assert result == created


async def test_get_unknown_id_raises_not_found(user_service):
    with pytest.raises(UserNotFoundError) as exc_info:
        await user_service.get_user(42)
    assert exc_info.value.http_status == 404
    assert exc_info.value.user_id == 42


async def test_get_deleted_id_raises_not_found(user_service):
    created = await user_service.create_user(_john())
    await user_service.delete_user(created.id)
    with pytest.raises(UserNotFoundError):
        await user_service.get_user(created.id)


async def test_get_returns_placeholder_on_store_failure(user_service, fake_repo):
    fake_repo.failing = True

    result = await user_service.get_user(7)

    assert result.id == 7
    assert result.name == FALLBACK_USER_NAME
    assert result.email == FALLBACK_USER_EMAIL
    assert result.age == 0


# ==============================================================================
# list
# ==============================================================================


async def test_list_returns_newest_first(user_service, fake_repo):
    t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
    a = await _seed(fake_repo, "A", "a@example.com", 20, t0)
    b = await _seed(fake_repo, "B", "b@example.com", 21, t0 + timedelta(seconds=1))

    result = await user_service.list_users()

    assert [u.id for u in result] == [b.id, a.id]


async def test_list_returns_empty_on_store_failure(user_service, fake_repo):
    await user_service.create_user(_john())
    fake_repo.failing = True
    assert await user_service.list_users() == []


# ==============================================================================
# update
# ==============================================================================


async def test_update_name_only_keeps_email_and_age(user_service):
    created = await user_service.create_user(_john())

    result = await user_service.update_user(created.id, UserUpdate(name="Johnny"))

    assert result.name == "Johnny"
    assert result.email == "john@example.com"
    assert result.age == 30
    assert result.created_at == created.created_at


async def test_update_to_other_users_email_conflicts(user_service, fake_repo):
    john = await user_service.create_user(_john())
    await user_service.create_user(
        UserCreate(name="Jane Doe", email="jane@example.com", age=25),
    )
    fake_repo.calls.clear()

    with pytest.raises(EmailConflictError):
        await user_service.update_user(
            john.id, UserUpdate(email="jane@example.com"),
        )
    assert "save" not in fake_repo.calls


async def test_update_with_own_email_skips_conflict_check(user_service, fake_repo):
    john = await user_service.create_user(_john())
    fake_repo.calls.clear()

    result = await user_service.update_user(
        john.id, UserUpdate(email="john@example.com", age=31),
    )

    assert result.age == 31
    assert "exists_by_email" not in fake_repo.calls


async def test_update_unknown_id_raises_not_found(user_service, fake_repo):
    with pytest.raises(UserNotFoundError):
        await user_service.update_user(99, UserUpdate(name="Ghost"))
    assert "save" not in fake_repo.calls


async def test_update_propagates_store_failure(user_service, fake_repo):
    john = await user_service.create_user(_john())
    fake_repo.failing = True
    with pytest.raises(StoreUnavailable):
        await user_service.update_user(john.id, UserUpdate(name="X"))


# ==============================================================================
# delete / exists / count
# ==============================================================================


async def test_delete_removes_user(user_service, fake_repo):
    john = await user_service.create_user(_john())
    await user_service.delete_user(john.id)
    assert john.id not in fake_repo.users


async def test_delete_unknown_id_makes_no_delete_call(user_service, fake_repo):
    with pytest.raises(UserNotFoundError):
        await user_service.delete_user(5)
    assert "delete_by_id" not in fake_repo.calls


async def test_delete_propagates_store_failure(user_service, fake_repo):
    fake_repo.failing = True
    with pytest.raises(StoreUnavailable):
        await user_service.delete_user(1)


async def test_email_exists_passes_through(user_service):
    assert await user_service.email_exists("john@example.com") is False
    await user_service.create_user(_john())
    assert await user_service.email_exists("john@example.com") is True


async def test_count_returns_total(user_service):
    await user_service.create_user(_john())
    assert await user_service.count_users() == 1


async def test_count_returns_zero_on_store_failure(user_service, fake_repo):
    await user_service.create_user(_john())
    fake_repo.failing = True
    assert await user_service.count_users() == 0


# ==============================================================================
# mapping
# ==============================================================================


def test_to_user_response_copies_record_fields():
    ts = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
    user = User(id=3, name="Ann", email="ann@example.com", age=40, created_at=ts)

    dto = to_user_response(user)

    assert dto.model_dump() == {
        "id": 3, "name": "Ann", "email": "ann@example.com",
        "age": 40, "created_at": ts,
    }
