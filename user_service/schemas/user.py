"""User Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - UserCreate: name stripped and non-blank (≤100), email well-formed (≤255), age 0–150
    - Emails are validated but kept verbatim (no case or IDNA normalization)
    - UserUpdate: every field optional; a present field obeys the UserCreate rule for it
    - UserResponse is a plain DTO; hypermedia lives only on the *Resource models
    - Resource models read/write links under "_links" (HAL convention); construct with links=

Design Decisions:
    - email-validator over a hand-written regex; the submitted string is stored unchanged
      (EmailStr would normalize it, and lookups by path parameter would then miss)
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from datetime import datetime

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from user_service.core.domain_types import (
    NAME_MAX_LENGTH, EMAIL_MAX_LENGTH, AGE_MIN, AGE_MAX,
)

Links = dict[str, dict[str, str]]


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name cannot be empty or whitespace")
    return v


def _check_email(v: str) -> str:
    """Validate the address but keep it exactly as submitted (no normalization)."""
    if len(v) > EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    return v


# --- Requests -----------------------------------------------------------------

class UserCreate(BaseModel):
    """User creation — all fields required."""
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    email: str
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _check_email(v)


class UserUpdate(BaseModel):
    """Partial update — absent (or null) fields leave the stored value unchanged."""
    name: str | None = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: str | None = None
    age: int | None = Field(None, ge=AGE_MIN, le=AGE_MAX)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return _clean_name(v) if v is not None else None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str | None) -> str | None:
        return _check_email(v) if v is not None else None


# --- Responses ----------------------------------------------------------------

class UserResponse(BaseModel):
    """User response — public-facing record data."""
    id: int
    name: str
    email: str
    age: int
    created_at: datetime


class UserResource(UserResponse):
    """Single user with hypermedia links."""
    model_config = ConfigDict(populate_by_name=True)

    links: Links = Field(default_factory=dict, alias="_links")


class EmbeddedUsers(BaseModel):
    users: list[UserResource] = Field(default_factory=list)


class UserCollection(BaseModel):
    """User collection, newest first, with hypermedia links."""
    model_config = ConfigDict(populate_by_name=True)

    embedded: EmbeddedUsers = Field(
        default_factory=EmbeddedUsers, alias="_embedded",
    )
    links: Links = Field(default_factory=dict, alias="_links")


class EmailCheckResource(BaseModel):
    """Result of an email-existence check."""
    model_config = ConfigDict(populate_by_name=True)

    email: str
    exists: bool
    links: Links = Field(default_factory=dict, alias="_links")


class CircuitBreakerTestResult(BaseModel):
    """Outcome of a simulated operation run through the fallback boundary."""
    result: str
