from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from src.core.auth import TokenError, create_access_token, decode_access_token
from src.core.config import Settings, get_settings
from src.domain import Role, User
from src.domain.services import IdentityService, ProjectService
from src.libs.posts_client import PostsClientProtocol

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_service(request: Request) -> IdentityService:
    """Identity service constructed at startup."""
    return request.app.state.identity


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.projects


def get_posts_client(request: Request) -> PostsClientProtocol:
    return request.app.state.posts_client


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    identity: IdentityService = Depends(get_identity_service),  # noqa: B008
) -> User:
    """Resolve the authenticated user from a bearer token."""
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise _unauthorized(str(exc)) from exc

    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Token missing subject")

    user = identity.find_user(user_id)
    if user is None:
        raise _unauthorized("Unknown user")
    if user.role.value != payload.get("role"):
        raise _forbidden("Token role does not match user")
    return user


def require_roles(*required_roles: Role) -> Callable[[User], User]:
    """Dependency factory enforcing that the authenticated user has one of the required roles."""
    required = set(required_roles)

    def dependency(user: User = Depends(get_current_user)) -> User:  # noqa: B008
        if user.role not in required:
            raise _forbidden("Insufficient role privileges")
        return user

    return dependency


def issue_token(user: User) -> str:
    return create_access_token(user.id, role=user.role, email=user.email)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
