"""Auth service — password hashing, strength checks and authentication.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API error handlers map to HTTP responses.
"""

import os
import re

import bcrypt

from domain.model.errors import InvalidCredentialsError
from domain.model.user import User, normalize_email
from port.user_repository import UserRepository

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# bcrypt only accepts this many bytes of input
MAX_PASSWORD_BYTES = 72
LENGTH_MESSAGE = f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"

STRENGTH_MESSAGE = (
    "New password must contain at least one uppercase letter, one lowercase letter, "
    "one symbol, one digit, and be at least 8 characters long"
)


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """bcrypt-hash a password. Callers reject over-long passwords first."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed or password_too_long(plain):
        return False
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def check_password_strength(password: str) -> bool:
    """Return True if the password is at least 8 characters long and mixes
    uppercase, lowercase, digit and symbol characters."""
    if len(password) < 8:
        return False
    if not re.search(r"[A-Z]", password):
        return False
    if not re.search(r"[a-z]", password):
        return False
    if not re.search(r"[0-9]", password):
        return False
    if not re.search(r"[^A-Za-z0-9]", password):
        return False
    return True


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Returns the authenticated User domain object.
    Doesn't reveal whether the email exists.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = repo.get_by_email(normalize_email(email))
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Wrong email or password")

    repo.update_last_login(user.id)
    return user
