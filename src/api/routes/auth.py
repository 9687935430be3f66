"""Authentication routes (login, current user)."""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import LoginRequest, LoginResponse, UserResponse
from api.security import create_access_token, get_current_user_required
from port.user_repository import UserRepository
from services.auth_service import authenticate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authentication", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, repo: UserRepository = Depends(get_user_repo)):
    """Login user and return JWT token.

    Raises:
        InvalidCredentialsError: 403 if email or password is wrong
    """
    user = authenticate(repo, request.email, request.password)
    token = create_access_token(user.id)

    logger.info("User logged in", extra={"userId": user.id, "email": user.email})

    return LoginResponse(email=user.email, token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserResponse = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return current_user
