"""
User repository - database operations for User and its scoping links.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import func

from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.user import User, UserCompany, UserManagement


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _apply_filters(self, query, search: Optional[str] = None, role_id: Optional[int] = None):
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
        if role_id is not None:
            query = query.where(User.role_id == role_id)
        return query

    async def list(
        self,
        limit: int,
        offset: int = 0,
        search: Optional[str] = None,
        role_id: Optional[int] = None,
    ) -> List[User]:
        """List users with their role loaded."""
        query = self._apply_filters(select(User).options(selectinload(User.role)), search, role_id)
        query = query.order_by(User.name.asc(), User.id.asc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, search: Optional[str] = None, role_id: Optional[int] = None) -> int:
        query = self._apply_filters(select(func.count(User.id)), search, role_id)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by ID with the role loaded."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .options(selectinload(User.role))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive) with the role loaded."""
        result = await self.db.execute(
            select(User)
            .where(func.lower(User.email) == email.lower())
            .options(selectinload(User.role))
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> User:
        user = User(**fields)
        self.db.add(user)
        await self.db.flush()
        return await self.get_by_id(user.id)

    async def update_fields(self, user: User, values: Dict[str, Any]) -> User:
        for field, value in values.items():
            setattr(user, field, value)

        user.updated_at = func.now()
        await self.db.flush()
        return await self.get_by_id(user.id)

    async def delete(self, user: User) -> None:
        """Delete a user and its company / management links."""
        await self.db.execute(delete(UserCompany).where(UserCompany.user_id == user.id))
        await self.db.execute(delete(UserManagement).where(UserManagement.user_id == user.id))
        await self.db.execute(delete(User).where(User.id == user.id))
        await self.db.flush()

    # Scoping links

    async def company_ids(self, user_id: int) -> List[int]:
        result = await self.db.execute(
            select(UserCompany.company_id).where(UserCompany.user_id == user_id)
        )
        return list(result.scalars().all())

    async def management_ids(self, user_id: int) -> List[int]:
        result = await self.db.execute(
            select(UserManagement.management_id).where(UserManagement.user_id == user_id)
        )
        return list(result.scalars().all())

    async def list_companies(self, user_id: int) -> List[Tuple[int, Company]]:
        """(link id, company) for every company the user is linked to."""
        result = await self.db.execute(
            select(UserCompany.id, Company)
            .join(Company, UserCompany.company_id == Company.id)
            .where(UserCompany.user_id == user_id)
            .order_by(Company.name.asc())
        )
        return [tuple(row) for row in result.all()]

    async def list_managements(self, user_id: int) -> List[Tuple[int, Management]]:
        """(link id, management) for every management the user is linked to."""
        result = await self.db.execute(
            select(UserManagement.id, Management)
            .join(Management, UserManagement.management_id == Management.id)
            .where(UserManagement.user_id == user_id)
            .order_by(Management.name.asc())
        )
        return [tuple(row) for row in result.all()]

    async def get_company_link(self, user_id: int, company_id: int) -> Optional[UserCompany]:
        result = await self.db.execute(
            select(UserCompany).where(
                UserCompany.user_id == user_id,
                UserCompany.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def link_company(self, user_id: int, company_id: int) -> UserCompany:
        link = UserCompany(user_id=user_id, company_id=company_id)
        self.db.add(link)
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def unlink_companies(self, user_id: int) -> None:
        await self.db.execute(delete(UserCompany).where(UserCompany.user_id == user_id))
        await self.db.flush()

    async def list_management_links(self) -> List[UserManagement]:
        result = await self.db.execute(select(UserManagement).order_by(UserManagement.id.asc()))
        return list(result.scalars().all())

    async def get_management_link(self, link_id: int) -> Optional[UserManagement]:
        result = await self.db.execute(
            select(UserManagement).where(UserManagement.id == link_id)
        )
        return result.scalar_one_or_none()

    async def find_management_link(self, user_id: int, management_id: int) -> Optional[UserManagement]:
        result = await self.db.execute(
            select(UserManagement).where(
                UserManagement.user_id == user_id,
                UserManagement.management_id == management_id,
            )
        )
        return result.scalar_one_or_none()

    async def link_management(self, user_id: int, management_id: int) -> UserManagement:
        link = UserManagement(user_id=user_id, management_id=management_id)
        self.db.add(link)
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def update_management_link(self, link: UserManagement, values: Dict[str, Any]) -> UserManagement:
        for field, value in values.items():
            setattr(link, field, value)

        link.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def delete_management_link(self, link: UserManagement) -> None:
        await self.db.delete(link)
        await self.db.flush()

    async def unlink_managements(self, user_id: int) -> None:
        await self.db.execute(delete(UserManagement).where(UserManagement.user_id == user_id))
        await self.db.flush()
