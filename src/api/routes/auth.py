"""Authentication routes - login, logout, profile."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from src.api.deps import (
    get_app_settings,
    get_current_user,
    get_identity_service,
    issue_token,
)
from src.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeResponse,
    TokenResponse,
    UserResponse,
)
from src.core.config import Settings
from src.domain import User
from src.domain.services import IdentityService, InvalidCredentialsError

logger = structlog.get_logger()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="User login",
    description="Authenticate by email and return a JWT access token.",
)
async def login(
    payload: LoginRequest,
    identity: IdentityService = Depends(get_identity_service),
    settings: Settings = Depends(get_app_settings),
) -> LoginResponse:
    """Authenticate user and return a token."""
    try:
        user = await identity.authenticate(payload.email, payload.password)
    except InvalidCredentialsError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc

    return LoginResponse(
        user=UserResponse.from_user(user),
        tokens=TokenResponse(
            access_token=issue_token(user),
            expires_in=settings.access_token_ttl_seconds,
        ),
    )


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="End the current session",
)
async def logout(
    user: User = Depends(get_current_user),
    identity: IdentityService = Depends(get_identity_service),
) -> None:
    await identity.logout()


@router.get(
    "/me",
    response_model=MeResponse,
    summary="Get current user",
)
async def get_me(user: User = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserResponse.from_user(user))
