"""
Dashboard repository - read-only aggregate queries.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate_management import CandidateManagement, ENGAGEMENT_ACTIVE
from backoffice.models.management import Management
from backoffice.models.process import Process


class DashboardRepository:
    """Aggregate queries over processes and engagements, scoped by company/management."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _scope_processes(self, query, company_id: Optional[int], management_id: Optional[int]):
        if company_id is not None:
            query = query.join(Management, Process.management_id == Management.id).where(
                Management.company_id == company_id
            )
        if management_id is not None:
            query = query.where(Process.management_id == management_id)
        return query

    async def count_processes(
        self,
        status: str,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
        closed_only: bool = False,
        closed_since: Optional[datetime] = None,
    ) -> int:
        """Count processes whose status equals ``status`` case-insensitively."""
        query = select(func.count(Process.id)).select_from(Process).where(
            func.lower(Process.status) == status.lower()
        )
        if closed_only:
            query = query.where(Process.closed_at.is_not(None))
        if closed_since is not None:
            query = query.where(Process.closed_at >= closed_since)
        query = self._scope_processes(query, company_id, management_id)

        result = await self.db.execute(query)
        return result.scalar_one()

    async def count_active_professionals(
        self,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
    ) -> int:
        """Distinct candidates holding at least one active engagement."""
        query = select(func.count(func.distinct(CandidateManagement.candidate_id))).select_from(
            CandidateManagement
        ).where(
            func.lower(CandidateManagement.status) == ENGAGEMENT_ACTIVE
        )
        if company_id is not None:
            query = query.join(Management, CandidateManagement.management_id == Management.id).where(
                Management.company_id == company_id
            )
        if management_id is not None:
            query = query.where(CandidateManagement.management_id == management_id)

        result = await self.db.execute(query)
        return result.scalar_one()

    async def closed_periods(
        self,
        status: str,
        limit: Optional[int] = None,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
    ) -> List[Tuple[datetime, datetime]]:
        """(opened_at, closed_at) of closed processes, most recently closed first."""
        query = select(Process.opened_at, Process.closed_at).where(
            func.lower(Process.status) == status.lower(),
            Process.opened_at.is_not(None),
            Process.closed_at.is_not(None),
        )
        query = self._scope_processes(query, company_id, management_id)
        query = query.order_by(Process.closed_at.desc(), Process.id.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return [tuple(row) for row in result.all()]

    async def latest_opened_at(
        self,
        status: str,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
    ) -> Optional[datetime]:
        """Most recent ``opened_at`` among processes with ``status``."""
        query = select(func.max(Process.opened_at)).select_from(Process).where(
            func.lower(Process.status) == status.lower()
        )
        query = self._scope_processes(query, company_id, management_id)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()
