"""User service — CRUD and password-change business logic.

Each operation runs its validation checks, issues exactly one repository
write, and raises a domain error on the first failure.
"""

import logging

from domain.model.errors import (
    EmailAlreadyTakenError,
    InvalidPasswordError,
    NotFoundError,
    UnprocessableEntityError,
)
from domain.model.user import User, normalize_email
from port.user_repository import UserRepository
from services.auth_service import (
    LENGTH_MESSAGE,
    STRENGTH_MESSAGE,
    check_password_strength,
    hash_password,
    password_too_long,
    verify_password,
)

logger = logging.getLogger(__name__)


def _check_new_password(password: str) -> None:
    if not check_password_strength(password):
        raise InvalidPasswordError(STRENGTH_MESSAGE)
    if password_too_long(password):
        raise InvalidPasswordError(LENGTH_MESSAGE)


def list_users(repo: UserRepository) -> list[User]:
    return repo.list_all()


def get_user(repo: UserRepository, user_id: str) -> User:
    """Return a user.

    Raises:
        NotFoundError: no user with this id
    """
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("Unknown user")
    return user


def create_user(
    repo: UserRepository,
    name: str,
    email: str,
    password: str,
    password_confirm: str,
) -> User:
    """Create a user after checking password strength, confirmation and email uniqueness.

    Raises:
        InvalidPasswordError: weak or over-long password, or confirmation mismatch
        EmailAlreadyTakenError: email already registered, including a lost
            race against the unique index
        UnprocessableEntityError: the database did not store the user
    """
    _check_new_password(password)

    if password != password_confirm:
        raise InvalidPasswordError("Password do not match")

    email = normalize_email(email)
    if repo.get_by_email(email):
        raise EmailAlreadyTakenError("This email already taken")

    user = repo.create(email=email, password_hash=hash_password(password), name=name)
    if not user:
        raise UnprocessableEntityError("Failed to create user")
    return user


def update_user(repo: UserRepository, user_id: str, name: str, email: str) -> None:
    """Set a user's name and email.

    Keeping one's own email is allowed; taking another user's is not.

    Raises:
        EmailAlreadyTakenError: email belongs to a different user
        UnprocessableEntityError: no user was updated
    """
    email = normalize_email(email)
    owner = repo.get_by_email(email)
    if owner and owner.id != user_id:
        raise EmailAlreadyTakenError("This email already taken")

    if not repo.update(user_id, name=name, email=email):
        raise UnprocessableEntityError("Failed to update user")


def delete_user(repo: UserRepository, user_id: str) -> None:
    """Raises UnprocessableEntityError if no user was deleted."""
    if not repo.delete(user_id):
        raise UnprocessableEntityError("Failed to delete user")


def change_password(
    repo: UserRepository,
    user_id: str,
    old_password: str,
    new_password: str,
    confirm_new_password: str,
) -> None:
    """Replace a user's password.

    Raises:
        InvalidPasswordError: weak or over-long new password, wrong old password,
            or confirmation mismatch
        NotFoundError: no user with this id
        UnprocessableEntityError: the database did not store the new hash
    """
    _check_new_password(new_password)

    user = get_user(repo, user_id)

    if not verify_password(old_password, user.password_hash) or new_password != confirm_new_password:
        logger.info("Password change rejected", extra={"userId": user_id})
        raise InvalidPasswordError("Old password or new passwords do not match")

    if not repo.update_password(user_id, hash_password(new_password)):
        raise UnprocessableEntityError("Failed to update password")
