"""Fake UserRepository — in-memory store for service tests.

Invariants:
    - Satisfies the UserRepository protocol structurally (no inheritance)
    - insert assigns sequential ids starting at 1
    - failing=True makes every call raise StoreUnavailable (simulated outage)
    - calls records every method name invoked, in order

Design Decisions:
    - Flat class with explicit switches: simple, explicit, easy to debug
    - Stores the same objects the service passes in (ORM instances, never attached to a session)
"""


class StoreUnavailable(ConnectionError):
    """Simulated store outage."""


class FakeUserRepository:
    def __init__(self):
        self.users: dict[int, object] = {}
        self.calls: list[str] = []
        self.failing = False
        self._next_id = 1

    def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.failing:
            raise StoreUnavailable(f"store unavailable during {name}")

    async def insert(self, user):
        self._enter("insert")
        user.id = self._next_id
        self._next_id += 1
        self.users[user.id] = user
        return user

    async def save(self, user):
        self._enter("save")
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id):
        self._enter("find_by_id")
        return self.users.get(user_id)

    async def find_all_ordered_by_created_desc(self):
        self._enter("find_all_ordered_by_created_desc")
        return sorted(
            self.users.values(),
            key=lambda u: (u.created_at, u.id),
            reverse=True,
        )

    async def exists_by_id(self, user_id):
        self._enter("exists_by_id")
        return user_id in self.users

    async def exists_by_email(self, email):
        self._enter("exists_by_email")
        return any(u.email == email for u in self.users.values())

    async def delete_by_id(self, user_id):
        self._enter("delete_by_id")
        self.users.pop(user_id, None)

    async def count(self):
        self._enter("count")
        return len(self.users)
