"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""
    id: str = Field(..., description="User ID (MongoDB _id)")
    email: str = Field(..., description="User email")
    name: str = Field(..., description="Display name")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    last_login: Optional[datetime] = Field(None, description="Last login timestamp")


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=256)
    password_confirm: str = Field(..., max_length=256)


class CreateUserResponse(BaseModel):
    name: str
    email: str


class UpdateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., max_length=256)
    new_password: str = Field(..., min_length=1, max_length=256)
    confirm_new_password: str = Field(..., max_length=256)


class UserIdResponse(BaseModel):
    """Response echoing the id of the user that was changed."""
    id: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=256)


class LoginResponse(BaseModel):
    email: str
    token: str
