"""Hypermedia Links — pure HAL-style link builders for user resources.

Invariants:
    - Every function is pure: same base URL + ids → same links
    - Links are {rel: {"href": url}} dicts, attached by the HTTP surface (never by DTO inheritance)
    - base is the absolute collection URL with no trailing slash

Design Decisions:
    - Plain dicts over a Link class hierarchy: Pydantic serializes them as-is
"""

from urllib.parse import quote

from user_service.core.domain_types import LinkRelation


def _href(url: str) -> dict[str, str]:
    return {"href": url}


def user_url(base: str, user_id: int) -> str:
    return f"{base}/{user_id}"


def user_links(base: str, user_id: int) -> dict[str, dict[str, str]]:
    """Links for a single user record: self + all-users."""
    return {
        LinkRelation.SELF.value: _href(user_url(base, user_id)),
        LinkRelation.ALL_USERS.value: _href(base),
    }


def embedded_user_links(base: str, user_id: int) -> dict[str, dict[str, str]]:
    """Links for a user embedded in a collection: self only."""
    return {LinkRelation.SELF.value: _href(user_url(base, user_id))}


def collection_links(base: str) -> dict[str, dict[str, str]]:
    """Links for the user collection: self + create-user."""
    return {
        LinkRelation.SELF.value: _href(base),
        LinkRelation.CREATE_USER.value: _href(base),
    }


def email_check_links(base: str, email: str) -> dict[str, dict[str, str]]:
    """Links for an email-existence check: self + all-users."""
    return {
        LinkRelation.SELF.value: _href(f"{base}/check-email/{quote(email, safe='@')}"),
        LinkRelation.ALL_USERS.value: _href(base),
    }
