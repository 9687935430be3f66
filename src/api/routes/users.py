"""User API routes.

Endpoints:
- GET /users: List users
- GET /users/{user_id}: Get one user
- POST /users: Create a user (sign-up, no token required)
- PUT /users/{user_id}: Update name and email
- DELETE /users/{user_id}: Delete a user
- PATCH /users/{user_id}/change-password: Replace a user's password

Handlers don't catch domain errors; api.errors formats them.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_user_repo
from api.models import (
    ChangePasswordRequest,
    CreateUserRequest,
    CreateUserResponse,
    UpdateUserRequest,
    UserIdResponse,
    UserResponse,
)
from api.security import get_current_user_required, to_response
from port.user_repository import UserRepository
from services import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: UserResponse = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get list of users."""
    users = user_service.list_users(repo)
    return [to_response(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get user detail."""
    return to_response(user_service.get_user(repo, user_id))


@router.post("", response_model=CreateUserResponse)
async def create_user(
    request: CreateUserRequest,
    repo: UserRepository = Depends(get_user_repo),
):
    """Create a new user."""
    user = user_service.create_user(
        repo,
        name=request.name,
        email=request.email,
        password=request.password,
        password_confirm=request.password_confirm,
    )

    logger.info("User registered", extra={"userId": user.id, "email": user.email})

    return CreateUserResponse(name=user.name, email=user.email)


@router.put("/{user_id}", response_model=UserIdResponse)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update a user's name and email."""
    user_service.update_user(repo, user_id, name=request.name, email=request.email)

    logger.info("User updated", extra={"userId": user_id, "by": current_user.id})

    return UserIdResponse(id=user_id)


@router.delete("/{user_id}", response_model=UserIdResponse)
async def delete_user(
    user_id: str,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Delete a user."""
    user_service.delete_user(repo, user_id)

    logger.info("User deleted", extra={"userId": user_id, "by": current_user.id})

    return UserIdResponse(id=user_id)


@router.patch("/{user_id}/change-password", response_model=UserIdResponse)
async def change_password(
    user_id: str,
    request: ChangePasswordRequest,
    current_user: UserResponse = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Change a user's password."""
    user_service.change_password(
        repo,
        user_id,
        old_password=request.old_password,
        new_password=request.new_password,
        confirm_new_password=request.confirm_new_password,
    )

    logger.info("Password changed", extra={"userId": user_id, "by": current_user.id})

    return UserIdResponse(id=user_id)
