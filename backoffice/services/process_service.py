"""
Process business logic service.

Besides CRUD this owns process closure: every candidate selected in the
process becomes an active professional of the process' management unit,
and the process is marked closed, all in the caller's transaction.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.errors import NotFoundError
from backoffice.models.candidate_management import ENGAGEMENT_ACTIVE
from backoffice.models.candidate_process import STAGE_INTERVIEWS, STAGE_SELECTED
from backoffice.models.process import Process, PROCESS_CLOSED_STATUS
from backoffice.repositories.candidate_management_repository import CandidateManagementRepository
from backoffice.repositories.candidate_process_repository import CandidateProcessRepository
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.repositories.process_repository import ProcessRepository
from backoffice.schemas.candidate_process import PipelineCandidate, PipelineView
from backoffice.schemas.process import (
    ProcessCandidate,
    ProcessCreate,
    ProcessDetail,
    ProcessListItem,
    ProcessRead,
    ProcessUpdate,
)
from backoffice.services.scope import Scope
from backoffice.utils.time import utc_now, utc_today

logger = logging.getLogger(__name__)


def _list_item(row: Tuple[Process, str, int, str, int]) -> ProcessListItem:
    process, management_name, company_id, company_name, candidate_count = row
    return ProcessListItem(
        **ProcessRead.model_validate(process).model_dump(),
        management_name=management_name,
        company_id=company_id,
        company_name=company_name,
        candidate_count=candidate_count or 0,
    )


class ProcessService:
    """Service for process business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = ProcessRepository(db)
        self.management_repository = ManagementRepository(db)
        self.candidate_process_repository = CandidateProcessRepository(db)
        self.candidate_management_repository = CandidateManagementRepository(db)

    async def list_processes(
        self,
        page: int,
        scope: Scope,
        search: Optional[str] = None,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Tuple[int, List[ProcessListItem]]:
        """Return (total, page of processes) visible to the caller."""
        filters = dict(
            search=search,
            company_id=company_id,
            management_id=management_id,
            status=status,
            management_ids=scope.management_ids,
            company_ids=scope.company_ids,
        )
        total = await self.repository.count(**filters)
        rows = await self.repository.list(
            limit=settings.PAGE_SIZE,
            offset=(page - 1) * settings.PAGE_SIZE,
            **filters,
        )
        return total, [_list_item(row) for row in rows]

    async def count_processes(self, scope: Scope) -> int:
        return await self.repository.count(
            management_ids=scope.management_ids,
            company_ids=scope.company_ids,
        )

    async def get_process(self, process_id: int) -> Process:
        process = await self.repository.get_by_id(process_id)
        if not process:
            raise NotFoundError(f"Process {process_id} not found")
        return process

    async def get_process_detail(self, process_id: int) -> ProcessDetail:
        """Process with owner names and every candidate's pipeline data."""
        row = await self.repository.get_with_owner(process_id)
        if not row:
            raise NotFoundError(f"Process {process_id} not found")
        process, management_name, company_id, company_name = row
        pipeline = await self.repository.list_candidates(process_id)

        candidates = [
            ProcessCandidate(
                id=candidate.id,
                candidate_process_id=link.id,
                name=candidate.name,
                email=candidate.email,
                phone=candidate.phone,
                match=link.match_percent or 0,
                stage=link.stage or STAGE_INTERVIEWS,
                technical_skills=link.technical_skills,
                soft_skills=link.soft_skills,
                client_comments=link.client_comments,
                interview_questions=link.interview_questions,
            )
            for link, candidate in pipeline
        ]
        return ProcessDetail(
            **ProcessRead.model_validate(process).model_dump(),
            management_name=management_name,
            company_id=company_id,
            company_name=company_name,
            candidate_count=len(candidates),
            candidates=candidates,
        )

    async def get_pipeline(self, process_id: int) -> PipelineView:
        """Recruiting-board view of a process."""
        process = await self.get_process(process_id)
        pipeline = await self.repository.list_candidates(process_id)
        return PipelineView(
            id=process.id,
            name=process.job_offer,
            start_at=process.opened_at,
            end_at=process.closed_at,
            pre_filtered=1 if process.pre_filtered else 0,
            candidates=[
                PipelineCandidate(
                    id=candidate.id,
                    name=candidate.name,
                    phone=candidate.phone,
                    email=candidate.email,
                    address=candidate.address,
                    match=link.match_percent or 0,
                    stage=link.stage or STAGE_INTERVIEWS,
                )
                for link, candidate in pipeline
            ],
            state=process.status or "pending",
        )

    async def create_process(self, data: ProcessCreate) -> Process:
        if not await self.management_repository.get_by_id(data.management_id):
            raise NotFoundError(f"Management {data.management_id} not found")
        if data.opened_at is None:
            data = data.model_copy(update={"opened_at": utc_now()})
        return await self.repository.create(data)

    async def update_process(self, process_id: int, data: ProcessUpdate) -> Process:
        if data.management_id is not None and not await self.management_repository.get_by_id(data.management_id):
            raise NotFoundError(f"Management {data.management_id} not found")
        process = await self.repository.update(process_id, data)
        if not process:
            raise NotFoundError(f"Process {process_id} not found")
        return process

    async def close_process(self, process_id: int) -> Tuple[Process, int]:
        """
        Close a process and promote its selected candidates.

        Creates one active engagement per selected candidate (position is the
        job title, starting today) and marks the process closed. Nothing is
        committed here; the caller commits or rolls back the whole unit.

        Returns:
            (closed process, number of engagements created)
        """
        process = await self.get_process(process_id)
        selected = await self.candidate_process_repository.list_by_stage(process_id, STAGE_SELECTED)

        start_date = utc_today()
        for link in selected:
            await self.candidate_management_repository.create(
                candidate_id=link.candidate_id,
                management_id=process.management_id,
                position=process.job_offer,
                status=ENGAGEMENT_ACTIVE,
                start_date=start_date,
            )

        process = await self.repository.mark_closed(process, PROCESS_CLOSED_STATUS, utc_now())
        logger.info(
            "Closed process %s: promoted %d selected candidate(s) to management %s",
            process_id,
            len(selected),
            process.management_id,
        )
        return process, len(selected)

    async def delete_process(self, process_id: int) -> None:
        process = await self.get_process(process_id)
        await self.repository.delete(process)
        logger.info("Deleted process %s", process_id)
