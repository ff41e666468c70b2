"""User ORM — persists user records.

Invariants:
    - id is an integer primary key assigned by the store on insert
    - email is unique at the storage layer (closes the check-then-insert race)
    - created_at is set once on insert and never updated

Design Decisions:
    - Index on created_at: the collection endpoint always orders by it
    - created_at default mirrors the service stamp so direct inserts (fixtures, scripts) stay valid
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from user_service.core.domain_types import NAME_MAX_LENGTH, EMAIL_MAX_LENGTH
from user_service.db.base import Base


class User(Base):
    """User record."""
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(
        String(EMAIL_MAX_LENGTH), nullable=False,
    )
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
