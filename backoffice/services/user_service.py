"""
User business logic service: accounts, roles and scoping links.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.core.permissions import Roles
from backoffice.core.security import hash_password
from backoffice.errors import ConflictError, NotFoundError
from backoffice.models.role import Role
from backoffice.models.user import User, UserCompany, UserManagement
from backoffice.repositories.company_repository import CompanyRepository
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.repositories.role_repository import RoleRepository
from backoffice.repositories.user_repository import UserRepository
from backoffice.schemas.company import CompanyRead, ManagementRead
from backoffice.schemas.user import (
    UserCompanyCreate,
    UserCompanyLink,
    UserCreate,
    UserManagementCreate,
    UserManagementLink,
    UserManagementUpdate,
    UserUpdate,
)

logger = logging.getLogger(__name__)


class UserService:
    """Service for user business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = UserRepository(db)
        self.role_repository = RoleRepository(db)
        self.company_repository = CompanyRepository(db)
        self.management_repository = ManagementRepository(db)

    async def list_roles(self) -> List[Role]:
        return await self.role_repository.list()

    async def list_users(
        self,
        page: int,
        search: Optional[str] = None,
        role_id: Optional[int] = None,
    ) -> Tuple[int, List[User]]:
        total = await self.repository.count(search=search, role_id=role_id)
        users = await self.repository.list(
            limit=settings.PAGE_SIZE,
            offset=(page - 1) * settings.PAGE_SIZE,
            search=search,
            role_id=role_id,
        )
        return total, users

    async def get_user(self, user_id: int) -> User:
        user = await self.repository.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def get_user_by_email(self, email: str) -> User:
        user = await self.repository.get_by_email(email)
        if not user:
            raise NotFoundError(f"User {email} not found")
        return user

    async def create_user(self, data: UserCreate) -> User:
        if await self.repository.get_by_email(data.email):
            raise ConflictError(f"A user with email {data.email} already exists")
        await self._get_role(data.role_id)

        fields = data.model_dump(exclude={"password"})
        if data.password:
            fields["hashed_password"] = hash_password(data.password)
        user = await self.repository.create(**fields)
        logger.info("Created user %s with role %s", user.id, user.role.name)
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        """
        Update a user.

        When the role moves from client_manager to client the company links
        are dropped and ``management_id`` is linked; the reverse move drops
        the management links and links ``company_id``.
        """
        user = await self.get_user(user_id)
        previous_role = user.role.name

        if data.email is not None and data.email.lower() != user.email.lower():
            if await self.repository.get_by_email(data.email):
                raise ConflictError(f"A user with email {data.email} already exists")

        new_role = previous_role
        if data.role_id is not None:
            new_role = (await self._get_role(data.role_id)).name

        values = data.model_dump(exclude_unset=True, exclude={"password", "company_id", "management_id"})
        if data.password:
            values["hashed_password"] = hash_password(data.password)

        if previous_role == Roles.CLIENT_MANAGER and new_role == Roles.CLIENT:
            await self.repository.unlink_companies(user_id)
            if data.management_id is not None:
                await self._get_management(data.management_id)
                await self.repository.link_management(user_id, data.management_id)
            logger.info("User %s moved from client_manager to client", user_id)
        elif previous_role == Roles.CLIENT and new_role == Roles.CLIENT_MANAGER:
            await self.repository.unlink_managements(user_id)
            if data.company_id is not None:
                await self._get_company(data.company_id)
                await self.repository.link_company(user_id, data.company_id)
            logger.info("User %s moved from client to client_manager", user_id)

        return await self.repository.update_fields(user, values)

    async def delete_user(self, user_id: int) -> None:
        user = await self.get_user(user_id)
        await self.repository.delete(user)
        logger.info("Deleted user %s", user_id)

    # Links

    async def list_user_companies(self, user_id: int) -> List[UserCompanyLink]:
        await self.get_user(user_id)
        rows = await self.repository.list_companies(user_id)
        return [
            UserCompanyLink(link_id=link_id, company=CompanyRead.model_validate(company))
            for link_id, company in rows
        ]

    async def list_user_managements(self, user_id: int) -> List[UserManagementLink]:
        await self.get_user(user_id)
        rows = await self.repository.list_managements(user_id)
        return [
            UserManagementLink(link_id=link_id, management=ManagementRead.model_validate(management))
            for link_id, management in rows
        ]

    async def link_company(self, data: UserCompanyCreate) -> UserCompany:
        await self.get_user(data.user_id)
        await self._get_company(data.company_id)
        if await self.repository.get_company_link(data.user_id, data.company_id):
            raise ConflictError(f"User {data.user_id} is already linked to company {data.company_id}")
        return await self.repository.link_company(data.user_id, data.company_id)

    async def list_management_links(self) -> List[UserManagement]:
        return await self.repository.list_management_links()

    async def link_management(self, data: UserManagementCreate) -> UserManagement:
        await self.get_user(data.user_id)
        await self._get_management(data.management_id)
        if await self.repository.find_management_link(data.user_id, data.management_id):
            raise ConflictError(
                f"User {data.user_id} is already linked to management {data.management_id}"
            )
        return await self.repository.link_management(data.user_id, data.management_id)

    async def update_management_link(self, link_id: int, data: UserManagementUpdate) -> UserManagement:
        link = await self._get_management_link(link_id)
        values = data.model_dump(exclude_unset=True)
        if values.get("user_id") is not None:
            await self.get_user(values["user_id"])
        if values.get("management_id") is not None:
            await self._get_management(values["management_id"])
        return await self.repository.update_management_link(link, values)

    async def delete_management_link(self, link_id: int) -> None:
        link = await self._get_management_link(link_id)
        await self.repository.delete_management_link(link)

    async def _get_role(self, role_id: int) -> Role:
        role = await self.role_repository.get_by_id(role_id)
        if not role:
            raise NotFoundError(f"Role {role_id} not found")
        return role

    async def _get_company(self, company_id: int):
        company = await self.company_repository.get_by_id(company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    async def _get_management(self, management_id: int):
        management = await self.management_repository.get_by_id(management_id)
        if not management:
            raise NotFoundError(f"Management {management_id} not found")
        return management

    async def _get_management_link(self, link_id: int) -> UserManagement:
        link = await self.repository.get_management_link(link_id)
        if not link:
            raise NotFoundError(f"User-management link {link_id} not found")
        return link
