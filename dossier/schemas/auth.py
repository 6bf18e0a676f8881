"""Request/response schemas for auth endpoints and stored user accounts."""

from datetime import datetime

from pydantic import BaseModel, Field


class User(BaseModel):
    """Platform account as returned by storage (password hash never serialized)."""

    id: int
    username: str
    password_hash: str = Field(exclude=True)
    is_admin: bool = False
    created_at: datetime
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class RegisterRequest(LoginRequest):
    """New account; same constraints as login."""


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class CurrentUser(BaseModel):
    """Authenticated user (id, username, role) for dependency injection."""

    id: int
    username: str
    role: str

    class Config:
        from_attributes = True


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    id: int
    username: str
    is_admin: bool
    created_at: datetime
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]
