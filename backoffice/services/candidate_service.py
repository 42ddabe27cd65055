"""
Candidate business logic service.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.errors import ConflictError, NotFoundError, ValidationError
from backoffice.models.candidate import Candidate
from backoffice.models.candidate_process import STAGE_INTERVIEWS
from backoffice.repositories.candidate_management_repository import CandidateManagementRepository
from backoffice.repositories.candidate_process_repository import CandidateProcessRepository
from backoffice.repositories.candidate_repository import CandidateRepository
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.repositories.process_repository import ProcessRepository
from backoffice.schemas.candidate import (
    CandidateCheck,
    CandidateCheckResult,
    CandidateCreate,
    CandidateCreated,
    CandidateDetail,
    CandidateProcessSummary,
    CandidateRead,
    CandidateUpdate,
)
from backoffice.schemas.candidate_management import CandidateManagementRead
from backoffice.schemas.candidate_process import CandidateProcessRead
from backoffice.services.candidate_management_service import engagement_status
from backoffice.services.candidate_process_service import serialize_client_note

logger = logging.getLogger(__name__)

CANDIDATE_FIELDS = ("name", "email", "phone", "address", "profile_summary", "total_experience")
PIPELINE_FIELDS = ("match_percent", "stage", "technical_skills", "soft_skills", "interview_questions")


class CandidateService:
    """Service for candidate business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = CandidateRepository(db)
        self.process_repository = ProcessRepository(db)
        self.management_repository = ManagementRepository(db)
        self.candidate_process_repository = CandidateProcessRepository(db)
        self.candidate_management_repository = CandidateManagementRepository(db)

    async def list_candidates(
        self,
        page: int,
        search: Optional[str] = None,
    ) -> Tuple[int, List[Candidate]]:
        total = await self.repository.count(search=search)
        candidates = await self.repository.list(
            limit=settings.PAGE_SIZE,
            offset=(page - 1) * settings.PAGE_SIZE,
            search=search,
        )
        return total, candidates

    async def get_candidate(self, candidate_id: int) -> Candidate:
        candidate = await self.repository.get_by_id(candidate_id)
        if not candidate:
            raise NotFoundError(f"Candidate {candidate_id} not found")
        return candidate

    async def get_candidate_detail(self, candidate_id: int) -> CandidateDetail:
        """Candidate with every process it takes part in."""
        candidate = await self.get_candidate(candidate_id)
        rows = await self.repository.list_processes(candidate_id)
        return CandidateDetail(
            **CandidateRead.model_validate(candidate).model_dump(),
            processes=[
                CandidateProcessSummary(
                    candidate_process_id=link.id,
                    process_id=link.process_id,
                    job_offer=job_offer,
                    status=status,
                    stage=link.stage or STAGE_INTERVIEWS,
                    match=link.match_percent or 0,
                    technical_skills=link.technical_skills,
                    soft_skills=link.soft_skills,
                    client_comments=link.client_comments,
                    interview_questions=link.interview_questions,
                )
                for link, job_offer, status in rows
            ],
        )

    async def create_candidate(self, data: CandidateCreate) -> CandidateCreated:
        """
        Create a candidate and, optionally, its process link and engagement.

        Raises:
            ConflictError: a candidate with the same email or phone exists
            NotFoundError: the given process / management does not exist
            ValidationError: engagement requested without position or rate
        """
        if await self.repository.find_duplicate(email=data.email, phone=data.phone):
            raise ConflictError("A candidate with the same email or phone already exists")

        if data.process_id is not None and not await self.process_repository.get_by_id(data.process_id):
            raise NotFoundError(f"Process {data.process_id} not found")
        if data.management_id is not None:
            if not await self.management_repository.get_by_id(data.management_id):
                raise NotFoundError(f"Management {data.management_id} not found")
            if not data.position or data.rate is None:
                raise ValidationError("position and rate are required to register the candidate in a management")

        candidate = await self.repository.create(
            **data.model_dump(include=set(CANDIDATE_FIELDS))
        )

        candidate_process = None
        if data.process_id is not None:
            candidate_process = await self.candidate_process_repository.create(
                candidate_id=candidate.id,
                process_id=data.process_id,
                client_comments=serialize_client_note(data.client_comments),
                **data.model_dump(include=set(PIPELINE_FIELDS)),
            )

        candidate_management = None
        if data.management_id is not None:
            candidate_management = await self.candidate_management_repository.create(
                candidate_id=candidate.id,
                management_id=data.management_id,
                position=data.position,
                rate=data.rate,
                status=engagement_status(None),
            )

        logger.info(
            "Created candidate %s (process=%s, management=%s)",
            candidate.id,
            data.process_id,
            data.management_id,
        )
        message = "Candidate created"
        if candidate_process is not None:
            message = "Candidate created and linked to the process"
        return CandidateCreated(
            message=message,
            candidate=CandidateRead.model_validate(candidate),
            candidate_process=(
                CandidateProcessRead.model_validate(candidate_process) if candidate_process else None
            ),
            candidate_management=(
                CandidateManagementRead.model_validate(candidate_management)
                if candidate_management
                else None
            ),
        )

    async def check_candidate(self, data: CandidateCheck) -> CandidateCheckResult:
        """Tell whether a candidate with this email/phone is already in the process."""
        if not data.email and not data.phone:
            raise ValidationError("email or phone is required")

        candidate = await self.repository.find_in_process(data.process_id, email=data.email, phone=data.phone)
        if candidate:
            return CandidateCheckResult(exists=True, message="The candidate is already in this process")
        return CandidateCheckResult(exists=False, message="The candidate is not in this process")

    async def update_candidate(self, candidate_id: int, data: CandidateUpdate) -> Candidate:
        if data.email is not None or data.phone is not None:
            duplicate = await self.repository.find_duplicate(email=data.email, phone=data.phone)
            if duplicate and duplicate.id != candidate_id:
                raise ConflictError("A candidate with the same email or phone already exists")

        candidate = await self.repository.update(candidate_id, data)
        if not candidate:
            raise NotFoundError(f"Candidate {candidate_id} not found")
        return candidate

    async def delete_candidate(self, candidate_id: int) -> None:
        candidate = await self.get_candidate(candidate_id)
        await self.repository.delete(candidate)
        logger.info("Deleted candidate %s with its associations", candidate_id)
