"""
Management repository - database operations for Management.
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate_management import CandidateManagement
from backoffice.models.candidate_process import CandidateProcess
from backoffice.models.management import Management
from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.models.process import Process
from backoffice.models.user import User, UserManagement
from backoffice.schemas.company import ManagementCreate, ManagementUpdate


class ManagementRepository:
    """Repository for Management database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        company_id: Optional[int] = None,
        management_ids: Optional[List[int]] = None,
        company_ids: Optional[List[int]] = None,
    ) -> List[Management]:
        """List managements with optional company filter and visibility scope."""
        query = select(Management)

        if company_id is not None:
            query = query.where(Management.company_id == company_id)
        if management_ids is not None:
            query = query.where(Management.id.in_(management_ids))
        if company_ids is not None:
            query = query.where(Management.company_id.in_(company_ids))

        query = query.order_by(Management.name.asc(), Management.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, management_id: int) -> Optional[Management]:
        result = await self.db.execute(
            select(Management).where(Management.id == management_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: ManagementCreate) -> Management:
        management = Management(**data.model_dump())
        self.db.add(management)
        await self.db.flush()
        await self.db.refresh(management)
        return management

    async def update(self, management_id: int, data: ManagementUpdate) -> Optional[Management]:
        management = await self.get_by_id(management_id)
        if not management:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(management, field, value)

        management.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(management)
        return management

    async def delete_with_dependents(self, management: Management) -> None:
        """Delete a management unit with its processes, engagements and user links."""
        process_ids = select(Process.id).where(Process.management_id == management.id)
        engagement_ids = select(CandidateManagement.id).where(
            CandidateManagement.management_id == management.id
        )

        await self.db.execute(
            delete(CandidateProcess).where(CandidateProcess.process_id.in_(process_ids))
        )
        await self.db.execute(
            delete(PostSalesActivity).where(
                PostSalesActivity.candidate_management_id.in_(engagement_ids)
            )
        )
        await self.db.execute(
            delete(CandidateManagement).where(CandidateManagement.management_id == management.id)
        )
        await self.db.execute(
            delete(UserManagement).where(UserManagement.management_id == management.id)
        )
        await self.db.execute(delete(Process).where(Process.management_id == management.id))
        await self.db.execute(delete(Management).where(Management.id == management.id))
        await self.db.flush()

    async def list_users(self, management_id: int) -> List[User]:
        """Users linked to a management unit."""
        result = await self.db.execute(
            select(User)
            .join(UserManagement, UserManagement.user_id == User.id)
            .where(UserManagement.management_id == management_id)
            .order_by(User.name.asc())
        )
        return list(result.scalars().all())
