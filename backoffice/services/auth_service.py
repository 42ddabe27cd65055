"""
Login: credential check and token issuance.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.jwt import create_access_token
from backoffice.core.security import verify_password
from backoffice.models.user import User
from backoffice.repositories.user_repository import UserRepository
from backoffice.schemas.user import LoginRequest, LoginResponse, UserWithRole

logger = logging.getLogger(__name__)


def token_claims_for(user: User) -> dict:
    """Identity claims embedded in every access token."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.name,
    }


class AuthService:
    def __init__(self, db: AsyncSession):
        self.user_repository = UserRepository(db)

    async def check_credentials(self, email: str, password: str) -> Optional[User]:
        """
        Return the active user matching ``email``/``password``.

        Unknown email, inactive account and wrong password all give None so
        the caller cannot tell them apart.
        """
        user = await self.user_repository.get_by_email(email)
        if user is None or not user.is_active or not user.hashed_password:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def login(self, credentials: LoginRequest) -> Optional[LoginResponse]:
        user = await self.check_credentials(credentials.email, credentials.password)
        if user is None:
            logger.info("Rejected login for %s", credentials.email)
            return None

        return LoginResponse(
            access_token=create_access_token(token_claims_for(user)),
            user=UserWithRole.model_validate(user),
        )
