"""Bearer-token authentication for the user routes.

Tokens are HS256 JWTs whose `sub` is the user id. Any failure (no header,
bad signature, expired, or a user deleted since the token was issued) is a
401 with a `WWW-Authenticate: Bearer` challenge.
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from api.dependencies import get_user_repo
from api.models import UserResponse
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION = timedelta(days=int(os.getenv("JWT_EXPIRATION_DAYS", "7")))

bearer_scheme = HTTPBearer(auto_error=False)


def to_response(user: User) -> UserResponse:
    """Public view of a user; drops password_hash."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_login=user.last_login,
    )


def create_access_token(user_id: str, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {"sub": user_id, "iat": issued_at, "exp": issued_at + JWT_EXPIRATION}
    return jwt.encode(claims, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid token, else None."""
    try:
        claims = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.debug("Rejected bearer token", extra={"error": str(e)})
        return None
    return claims.get("sub")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserResponse:
    """Resolve the caller from the bearer token or raise 401."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    user_id = verify_token(credentials.credentials)
    if not user_id:
        raise _unauthorized("Invalid authentication credentials")

    user = user_repo.get_by_id(user_id)
    if not user:
        raise _unauthorized("User not found")

    return to_response(user)
