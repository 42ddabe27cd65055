"""
Process repository - database operations for Process.
"""

from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import select, delete, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate import Candidate
from backoffice.models.candidate_process import CandidateProcess
from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.process import Process
from backoffice.schemas.process import ProcessCreate, ProcessUpdate


class ProcessRepository:
    """Repository for Process database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _apply_filters(
        self,
        query,
        search: Optional[str] = None,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
        status: Optional[str] = None,
        management_ids: Optional[List[int]] = None,
        company_ids: Optional[List[int]] = None,
    ):
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    Process.job_offer.ilike(pattern),
                    Process.job_offer_description.ilike(pattern),
                )
            )
        if company_id is not None:
            query = query.where(Management.company_id == company_id)
        if management_id is not None:
            query = query.where(Process.management_id == management_id)
        if status is not None:
            query = query.where(func.lower(Process.status) == status.lower())
        if management_ids is not None:
            query = query.where(Process.management_id.in_(management_ids))
        if company_ids is not None:
            query = query.where(Management.company_id.in_(company_ids))
        return query

    async def list(
        self,
        limit: int,
        offset: int = 0,
        **filters: Any,
    ) -> List[Tuple[Process, str, int, str, int]]:
        """
        List processes, newest first.

        Returns rows of (process, management name, company id, company name,
        candidate count).
        """
        candidate_count = (
            select(func.count(CandidateProcess.id))
            .where(CandidateProcess.process_id == Process.id)
            .correlate(Process)
            .scalar_subquery()
        )
        query = (
            select(Process, Management.name, Company.id, Company.name, candidate_count)
            .join(Management, Process.management_id == Management.id)
            .join(Company, Management.company_id == Company.id)
        )
        query = self._apply_filters(query, **filters)
        query = query.order_by(Process.created_at.desc(), Process.id.desc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return [tuple(row) for row in result.all()]

    async def count(self, **filters: Any) -> int:
        """Count processes matching the same filters as ``list``."""
        query = (
            select(func.count(Process.id))
            .select_from(Process)
            .join(Management, Process.management_id == Management.id)
        )
        query = self._apply_filters(query, **filters)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def get_by_id(self, process_id: int) -> Optional[Process]:
        result = await self.db.execute(
            select(Process).where(Process.id == process_id)
        )
        return result.scalar_one_or_none()

    async def get_with_owner(self, process_id: int) -> Optional[Tuple[Process, str, int, str]]:
        """Process with its management name, company id and company name."""
        result = await self.db.execute(
            select(Process, Management.name, Company.id, Company.name)
            .join(Management, Process.management_id == Management.id)
            .join(Company, Management.company_id == Company.id)
            .where(Process.id == process_id)
        )
        row = result.first()
        return tuple(row) if row else None

    async def list_candidates(self, process_id: int) -> List[Tuple[CandidateProcess, Candidate]]:
        """Pipeline rows of a process with their candidates, in insertion order."""
        result = await self.db.execute(
            select(CandidateProcess, Candidate)
            .join(Candidate, CandidateProcess.candidate_id == Candidate.id)
            .where(CandidateProcess.process_id == process_id)
            .order_by(CandidateProcess.id.asc())
        )
        return [tuple(row) for row in result.all()]

    async def create(self, data: ProcessCreate) -> Process:
        """Open a new process."""
        process = Process(**data.model_dump())
        self.db.add(process)
        await self.db.flush()
        await self.db.refresh(process)
        return process

    async def update(self, process_id: int, data: ProcessUpdate) -> Optional[Process]:
        process = await self.get_by_id(process_id)
        if not process:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(process, field, value)

        process.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(process)
        return process

    async def mark_closed(self, process: Process, status: str, closed_at: datetime) -> Process:
        process.status = status
        process.closed_at = closed_at
        process.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(process)
        return process

    async def delete(self, process: Process) -> None:
        """Delete a process and its pipeline rows."""
        await self.db.execute(
            delete(CandidateProcess).where(CandidateProcess.process_id == process.id)
        )
        await self.db.execute(delete(Process).where(Process.id == process.id))
        await self.db.flush()
