"""
Authentication router - login and current-user endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.db.session import get_db
from backoffice.errors import AuthError
from backoffice.schemas.user import LoginRequest, LoginResponse, TokenClaims
from backoffice.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password.

    Returns a bearer token carrying the user's id, name, email and role.
    """
    service = AuthService(db)
    result = await service.login(credentials)

    if not result:
        raise AuthError("Invalid email or password")

    return result


@router.get("/me", response_model=TokenClaims)
async def me(current_user: CurrentUser = Depends(require_role())):
    """Return the identity carried by the caller's token."""
    return TokenClaims(
        id=current_user.id,
        name=current_user.name,
        email=current_user.email,
        role=current_user.role,
    )
