"""
FastAPI dependencies for the application.
"""

from typing import Optional

from fastapi import Depends, Query
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from backoffice.core.jwt import decode_access_token
from backoffice.core.permissions import Roles, check_role_permission
from backoffice.errors import AuthError, ValidationError

# Security scheme for JWT bearer tokens; missing headers are reported as 403
security = HTTPBearer(auto_error=False)


class CurrentUser:
    """Represents the authenticated caller, built from token claims."""

    def __init__(self, user_id: int, name: str, email: str, role: str):
        self.id = user_id
        self.name = name
        self.email = email
        self.role = role

    @property
    def is_client(self) -> bool:
        return self.role == Roles.CLIENT

    @property
    def is_client_manager(self) -> bool:
        return self.role == Roles.CLIENT_MANAGER


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    """
    Get the current authenticated user from the bearer token.

    Raises:
        AuthError: If the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")

    verification = decode_access_token(credentials.credentials)
    if not verification.valid:
        raise AuthError(verification.error or "Invalid token")

    claims = verification.claims
    try:
        user_id = int(claims.get("id"))
    except (TypeError, ValueError):
        raise AuthError("Invalid token payload")

    return CurrentUser(
        user_id=user_id,
        name=claims.get("name") or "",
        email=claims.get("email") or "",
        role=verification.role,
    )


def require_role(*allowed_roles: str):
    """
    Dependency factory to require specific roles.

    Usage:
        @router.post("/process")
        async def create_process(
            current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
        ):
            ...

    With no roles given, any authenticated user passes.
    """
    async def check_role(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if allowed_roles and not check_role_permission(user.role, allowed_roles):
            raise AuthError(f"Requires one of roles: {', '.join(allowed_roles)}")
        return user

    return check_role


async def get_page(page: int = Query(1, description="1-based page number")) -> int:
    """Validate the ``page`` query parameter of paginated listings."""
    if page < 1:
        raise ValidationError("page must be a positive integer")
    return page
