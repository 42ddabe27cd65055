"""
Users router - accounts, roles and user scoping links.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, get_page, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse, Page
from backoffice.schemas.user import (
    RoleRead,
    UserCompanyCreate,
    UserCompanyLink,
    UserCompanyRead,
    UserCreate,
    UserManagementCreate,
    UserManagementLink,
    UserManagementRead,
    UserManagementUpdate,
    UserRead,
    UserUpdate,
    UserWithRole,
)
from backoffice.services.company_service import ManagementService
from backoffice.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])
roles_router = APIRouter(prefix="/roles", tags=["roles"])
links_router = APIRouter(tags=["user-links"])


@roles_router.get("", response_model=List[RoleRead])
async def list_roles(
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.list_roles()


@router.get("", response_model=Page[UserWithRole])
async def list_users(
    page: int = Depends(get_page),
    query: Optional[str] = None,
    role_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """List users, 15 per page. Filters: ``query`` (name/email), ``role_id``."""
    service = UserService(db)
    total, users = await service.list_users(page, search=query, role_id=role_id)
    return Page[UserWithRole](
        total=total,
        batch=[UserWithRole.model_validate(user) for user in users],
    )


@router.post("", response_model=UserWithRole, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    user = await service.create_user(data)
    await db.commit()
    return user


@router.get("/by-email/{email}", response_model=UserWithRole)
async def get_user_by_email(
    email: str,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.get_user_by_email(email)


@router.get("/{user_id}", response_model=UserWithRole)
async def get_user(
    user_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserWithRole)
async def update_user(
    user_id: int,
    data: UserUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a user.

    Moving between client_manager and client swaps company links for a
    management link (``management_id``) or the reverse (``company_id``).
    """
    service = UserService(db)
    user = await service.update_user(user_id, data)
    await db.commit()
    return user


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    await service.delete_user(user_id)
    await db.commit()
    return MessageResponse(message=f"User {user_id} deleted")


@router.get("/{user_id}/companies", response_model=List[UserCompanyLink])
async def list_user_companies(
    user_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.list_user_companies(user_id)


@router.get("/{user_id}/managements", response_model=List[UserManagementLink])
async def list_user_managements(
    user_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.list_user_managements(user_id)


@links_router.post("/user-company", response_model=UserCompanyRead, status_code=status.HTTP_201_CREATED)
async def link_user_company(
    data: UserCompanyCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    link = await service.link_company(data)
    await db.commit()
    return link


@links_router.get("/user-management", response_model=List[UserManagementRead])
async def list_user_management_links(
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    return await service.list_management_links()


@links_router.post("/user-management", response_model=UserManagementRead, status_code=status.HTTP_201_CREATED)
async def link_user_management(
    data: UserManagementCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    link = await service.link_management(data)
    await db.commit()
    return link


@links_router.put("/user-management/{link_id}", response_model=UserManagementRead)
async def update_user_management_link(
    link_id: int,
    data: UserManagementUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    link = await service.update_management_link(link_id, data)
    await db.commit()
    return link


@links_router.delete("/user-management/{link_id}", response_model=MessageResponse)
async def delete_user_management_link(
    link_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = UserService(db)
    await service.delete_management_link(link_id)
    await db.commit()
    return MessageResponse(message=f"User-management link {link_id} deleted")


@links_router.get("/management/{management_id}/users", response_model=List[UserRead])
async def list_management_users(
    management_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = ManagementService(db)
    return await service.list_users(management_id)
