"""Account registration, JWT login and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from dossier.api.deps import StorageDep
from dossier.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    role_for,
    verify_password,
)
from dossier.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(body: RegisterRequest, storage: StorageDep) -> TokenResponse:
    """Create a player account and return an access token for it."""
    if storage.get_user_by_username(body.username) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )
    user = storage.create_user(body.username, hash_password(body.password))
    token = create_access_token(sub=user.id, role=role_for(user.is_admin))
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, storage: StorageDep) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = storage.get_user_by_username(body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )
    storage.update_user_last_login(user.id)
    token = create_access_token(sub=user.id, role=role_for(user.is_admin))
    return TokenResponse(access_token=token, token_type="bearer")


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    storage: StorageDep,
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthenticated("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthenticated("Invalid or expired token")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise _unauthenticated("Invalid token payload")
    user = storage.get_user(user_id)
    if user is None:
        raise _unauthenticated("User not found")
    return CurrentUser(id=user.id, username=user.username, role=role_for(user.is_admin))


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


def require_admin(current_user: CurrentUserDep) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden - Admin access required",
        )
    return current_user


@router.get("/me", response_model=CurrentUser)
def me(current_user: CurrentUserDep) -> CurrentUser:
    return current_user


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    storage: StorageDep,
) -> UsersListResponse:
    """List all accounts (admin only)."""
    return UsersListResponse(
        users=[UserListItem.model_validate(u, from_attributes=True) for u in storage.list_users()]
    )
