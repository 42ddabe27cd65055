"""
Role repository - database operations for Role.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.models.role import Role


class RoleRepository:
    """Repository for Role database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self) -> List[Role]:
        result = await self.db.execute(select(Role).order_by(Role.id.asc()))
        return list(result.scalars().all())

    async def get_by_id(self, role_id: int) -> Optional[Role]:
        result = await self.db.execute(select(Role).where(Role.id == role_id))
        return result.scalar_one_or_none()
