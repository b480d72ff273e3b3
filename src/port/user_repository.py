from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise RepositoryError when the underlying store fails
    or times out. "Not found" is never an error on the read path.
    """
    def insert(self, user: User) -> None:
        """Persist a new user. Raise DuplicateError if the email is taken."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID. Return True if a user was removed."""
        ...

    def list_all(self) -> list[User]:
        """Return every stored user, oldest first."""
        ...
