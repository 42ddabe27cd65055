"""
User, role and login Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, ConfigDict

from backoffice.schemas.base import ORMRead
from backoffice.schemas.company import CompanyRead, ManagementRead


class RoleRead(ORMRead):
    name: str


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    name: str
    email: EmailStr
    role_id: int
    position: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool = True
    password: Optional[str] = None


class UserUpdate(BaseModel):
    """
    Schema for updating a user.

    ``company_id`` / ``management_id`` are used when the role moves
    between client_manager and client.
    """

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role_id: Optional[int] = None
    position: Optional[str] = None
    avatar: Optional[str] = None
    is_active: Optional[bool] = None
    password: Optional[str] = None
    company_id: Optional[int] = None
    management_id: Optional[int] = None


class UserRead(ORMRead):
    """Schema for reading user data (API response)."""

    name: str
    email: str
    position: Optional[str] = None
    avatar: Optional[str] = None
    is_active: bool
    role_id: int


class UserWithRole(UserRead):
    role: Optional[RoleRead] = None


class UserCompanyCreate(BaseModel):
    user_id: int
    company_id: int


class UserCompanyRead(ORMRead):
    user_id: int
    company_id: int


class UserManagementCreate(BaseModel):
    user_id: int
    management_id: int


class UserManagementUpdate(BaseModel):
    user_id: Optional[int] = None
    management_id: Optional[int] = None


class UserManagementRead(ORMRead):
    user_id: int
    management_id: int


class UserCompanyLink(BaseModel):
    """A company a user is linked to."""

    link_id: int
    company: CompanyRead


class UserManagementLink(BaseModel):
    link_id: int
    management: ManagementRead


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Schema for login response."""

    access_token: str
    token_type: str = "bearer"
    user: UserWithRole


class TokenClaims(BaseModel):
    """Schema for token payload data."""

    id: int
    name: str
    email: str
    role: str
    exp: Optional[int] = None

    model_config = ConfigDict(extra="ignore")
