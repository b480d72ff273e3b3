"""In-memory implementation of UserRepository for testing."""

from domain.model.errors import DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> None:
        if any(u.email == user.email for u in self.store.values()):
            raise DuplicateError("Email already registered")
        self.store[user.id] = user

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def list_all(self) -> list[User]:
        return sorted(self.store.values(), key=lambda u: u.created_at)
