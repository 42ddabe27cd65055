"""
CandidateManagement repository - database operations for engagements.
"""

from decimal import Decimal
from typing import Any, List, Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate import Candidate
from backoffice.models.candidate_management import CandidateManagement
from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.post_sales_activity import PostSalesActivity


class CandidateManagementRepository:
    """Repository for CandidateManagement database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        company_id: Optional[int] = None,
        management_ids: Optional[List[int]] = None,
        company_ids: Optional[List[int]] = None,
    ) -> List[CandidateManagement]:
        """List engagements, optionally filtered by company and visibility scope."""
        query = select(CandidateManagement).join(
            Management, CandidateManagement.management_id == Management.id
        )
        if company_id is not None:
            query = query.where(Management.company_id == company_id)
        if management_ids is not None:
            query = query.where(CandidateManagement.management_id.in_(management_ids))
        if company_ids is not None:
            query = query.where(Management.company_id.in_(company_ids))
        query = query.order_by(CandidateManagement.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_rows(
        self,
        management_ids: Optional[List[int]] = None,
        company_ids: Optional[List[int]] = None,
    ) -> List[Tuple[CandidateManagement, str, str, str]]:
        """Engagements with candidate, company and management names."""
        query = (
            select(CandidateManagement, Candidate.name, Company.name, Management.name)
            .join(Candidate, CandidateManagement.candidate_id == Candidate.id)
            .join(Management, CandidateManagement.management_id == Management.id)
            .join(Company, Management.company_id == Company.id)
        )
        if management_ids is not None:
            query = query.where(CandidateManagement.management_id.in_(management_ids))
        if company_ids is not None:
            query = query.where(Management.company_id.in_(company_ids))
        query = query.order_by(Candidate.name.asc(), CandidateManagement.id.asc())

        result = await self.db.execute(query)
        return [tuple(row) for row in result.all()]

    async def get_by_id(self, engagement_id: int) -> Optional[CandidateManagement]:
        result = await self.db.execute(
            select(CandidateManagement).where(CandidateManagement.id == engagement_id)
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> CandidateManagement:
        engagement = CandidateManagement(**fields)
        self.db.add(engagement)
        await self.db.flush()
        await self.db.refresh(engagement)
        return engagement

    async def update_fields(self, engagement: CandidateManagement, values: dict) -> CandidateManagement:
        for field, value in values.items():
            setattr(engagement, field, value)

        engagement.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(engagement)
        return engagement

    async def set_rate(self, engagement: CandidateManagement, rate: Decimal) -> CandidateManagement:
        return await self.update_fields(engagement, {"rate": rate})

    async def delete(self, engagement: CandidateManagement) -> None:
        """Delete an engagement and its evaluations."""
        await self.db.execute(
            delete(PostSalesActivity).where(
                PostSalesActivity.candidate_management_id == engagement.id
            )
        )
        await self.db.execute(
            delete(CandidateManagement).where(CandidateManagement.id == engagement.id)
        )
        await self.db.flush()
