"""Domain Types — verifies identity types, fallback sentinels and enums."""

from user_service.core.domain_types import (
    UserId, FALLBACK_USER_AGE, FALLBACK_USER_COUNT, FALLBACK_USER_EMAIL,
    FALLBACK_USER_NAME, LinkRelation, ReadOperation,
)


def test_user_id_wraps_int():
    assert UserId(5) == 5


def test_fallback_sentinels():
    assert FALLBACK_USER_NAME == "Service Temporarily Unavailable"
    assert FALLBACK_USER_EMAIL == "fallback@example.com"
    assert FALLBACK_USER_AGE == 0
    assert FALLBACK_USER_COUNT == 0


def test_link_relations():
    assert {r.value for r in LinkRelation} == {"self", "all-users", "create-user"}


def test_read_operations_cover_guarded_paths():
    assert ReadOperation.GET_USER.value == "get_user"
    assert ReadOperation.LIST_USERS.value == "list_users"
    assert ReadOperation.COUNT_USERS.value == "count_users"
