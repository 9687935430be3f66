from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def list_all(self) -> list[User]:
        """Return all users, newest first. Database errors propagate."""
        ...

    def create(self, email: str, password_hash: str, name: str) -> User | None:
        """Create a new user. Return User, or None if the database failed.

        Raises EmailAlreadyTakenError if the email is already stored.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(self, user_id: str, name: str, email: str) -> bool:
        """Set name and email on a user. Return True if a user matched.

        Raises EmailAlreadyTakenError if another user owns the email.
        """
        ...

    def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the stored password hash. Return True if a user matched."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a user was deleted."""
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...
