"""
Candidate repository - database operations for Candidate.
"""

from typing import Any, List, Optional, Tuple

from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate import Candidate
from backoffice.models.candidate_management import CandidateManagement
from backoffice.models.candidate_process import CandidateProcess
from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.models.pre_invoice import PreInvoiceItem
from backoffice.models.process import Process
from backoffice.schemas.candidate import CandidateUpdate


class CandidateRepository:
    """Repository for Candidate database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _apply_search(self, query, search: Optional[str]):
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Candidate.name.ilike(pattern),
                    Candidate.email.ilike(pattern),
                    Candidate.phone.ilike(pattern),
                )
            )
        return query

    async def list(
        self,
        limit: int,
        offset: int = 0,
        search: Optional[str] = None,
    ) -> List[Candidate]:
        """List candidates alphabetically with an optional name/email/phone search."""
        query = self._apply_search(select(Candidate), search)
        query = query.order_by(Candidate.name.asc(), Candidate.id.asc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, search: Optional[str] = None) -> int:
        query = self._apply_search(select(func.count(Candidate.id)), search)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_by_id(self, candidate_id: int) -> Optional[Candidate]:
        result = await self.db.execute(
            select(Candidate).where(Candidate.id == candidate_id)
        )
        return result.scalar_one_or_none()

    async def find_duplicate(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[Candidate]:
        """Find a candidate sharing the email or the phone, if any."""
        conditions = []
        if email:
            conditions.append(func.lower(Candidate.email) == email.lower())
        if phone:
            conditions.append(Candidate.phone == phone)
        if not conditions:
            return None

        result = await self.db.execute(
            select(Candidate).where(or_(*conditions)).order_by(Candidate.id.asc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def find_in_process(
        self,
        process_id: int,
        email: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Optional[Candidate]:
        """Find a candidate of ``process_id`` with the given email or phone."""
        conditions = []
        if email:
            conditions.append(func.lower(Candidate.email) == email.lower())
        if phone:
            conditions.append(Candidate.phone == phone)
        if not conditions:
            return None

        result = await self.db.execute(
            select(Candidate)
            .join(CandidateProcess, CandidateProcess.candidate_id == Candidate.id)
            .where(CandidateProcess.process_id == process_id, or_(*conditions))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_processes(
        self, candidate_id: int
    ) -> List[Tuple[CandidateProcess, str, Optional[str]]]:
        """Pipeline rows of a candidate with the process title and status."""
        result = await self.db.execute(
            select(CandidateProcess, Process.job_offer, Process.status)
            .join(Process, CandidateProcess.process_id == Process.id)
            .where(CandidateProcess.candidate_id == candidate_id)
            .order_by(CandidateProcess.id.asc())
        )
        return [tuple(row) for row in result.all()]

    async def create(self, **fields: Any) -> Candidate:
        """Create a new candidate."""
        candidate = Candidate(**fields)
        self.db.add(candidate)
        await self.db.flush()
        await self.db.refresh(candidate)
        return candidate

    async def update(self, candidate_id: int, data: CandidateUpdate) -> Optional[Candidate]:
        """Update a candidate."""
        candidate = await self.get_by_id(candidate_id)
        if not candidate:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(candidate, field, value)

        candidate.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(candidate)
        return candidate

    async def delete(self, candidate: Candidate) -> None:
        """Delete a candidate with its pipeline rows, engagements and billed items."""
        engagement_ids = select(CandidateManagement.id).where(
            CandidateManagement.candidate_id == candidate.id
        )

        await self.db.execute(
            delete(PostSalesActivity).where(
                PostSalesActivity.candidate_management_id.in_(engagement_ids)
            )
        )
        await self.db.execute(
            delete(CandidateManagement).where(CandidateManagement.candidate_id == candidate.id)
        )
        await self.db.execute(
            delete(CandidateProcess).where(CandidateProcess.candidate_id == candidate.id)
        )
        await self.db.execute(
            delete(PreInvoiceItem).where(PreInvoiceItem.candidate_id == candidate.id)
        )
        await self.db.execute(delete(Candidate).where(Candidate.id == candidate.id))
        await self.db.flush()
