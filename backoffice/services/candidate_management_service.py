"""
CandidateManagement (engagement) business logic service.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import NotFoundError, ValidationError
from backoffice.models.candidate_management import (
    CandidateManagement,
    ENGAGEMENT_ACTIVE,
    ENGAGEMENT_ENDED,
)
from backoffice.repositories.candidate_management_repository import CandidateManagementRepository
from backoffice.repositories.candidate_repository import CandidateRepository
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.repositories.post_sales_repository import PostSalesRepository
from backoffice.schemas.candidate_management import (
    CandidateManagementCreate,
    CandidateManagementDetail,
    CandidateManagementRead,
    CandidateManagementUpdate,
    EngagementCandidate,
    PostSalesActivityRead,
    ProfessionalRow,
)
from backoffice.services.scope import Scope
from backoffice.utils.time import utc_today

logger = logging.getLogger(__name__)


def engagement_status(end_date: Optional[date], today: Optional[date] = None) -> str:
    """An engagement whose end date has passed is ended; otherwise it is active."""
    today = today or utc_today()
    if end_date is not None and end_date < today:
        return ENGAGEMENT_ENDED
    return ENGAGEMENT_ACTIVE


class CandidateManagementService:
    """Service for engagement business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = CandidateManagementRepository(db)
        self.candidate_repository = CandidateRepository(db)
        self.management_repository = ManagementRepository(db)
        self.post_sales_repository = PostSalesRepository(db)

    async def list_engagements(
        self,
        scope: Scope,
        company_id: Optional[int] = None,
    ) -> List[CandidateManagement]:
        return await self.repository.list(
            company_id=company_id,
            management_ids=scope.management_ids,
            company_ids=scope.company_ids,
        )

    async def list_professionals(self, scope: Scope) -> List[ProfessionalRow]:
        """Flattened listing of every engagement."""
        rows = await self.repository.list_rows(
            management_ids=scope.management_ids,
            company_ids=scope.company_ids,
        )
        return [
            ProfessionalRow(
                id=engagement.id,
                candidate_id=engagement.candidate_id,
                name=candidate_name,
                role=engagement.position,
                client=company_name,
                management=management_name,
                start=engagement.start_date,
                end=engagement.end_date,
                status=engagement.status,
                rate=engagement.rate,
            )
            for engagement, candidate_name, company_name, management_name in rows
        ]

    async def get_engagement(self, engagement_id: int) -> CandidateManagement:
        engagement = await self.repository.get_by_id(engagement_id)
        if not engagement:
            raise NotFoundError(f"Candidate-management {engagement_id} not found")
        return engagement

    async def get_engagement_detail(self, engagement_id: int) -> CandidateManagementDetail:
        engagement = await self.get_engagement(engagement_id)
        candidate = await self.candidate_repository.get_by_id(engagement.candidate_id)
        activities = await self.post_sales_repository.list(candidate_management_id=engagement_id)
        return CandidateManagementDetail(
            **CandidateManagementRead.model_validate(engagement).model_dump(),
            candidate=EngagementCandidate(
                name=candidate.name,
                email=candidate.email,
                phone=candidate.phone,
                address=candidate.address,
            ),
            post_sales_activities=[PostSalesActivityRead.model_validate(item) for item in activities],
        )

    async def create_engagement(self, data: CandidateManagementCreate) -> CandidateManagement:
        """
        Register a professional in a management unit.

        Raises:
            ValidationError: position or rate missing
            NotFoundError: unknown candidate or management
        """
        if not data.position or data.rate is None:
            raise ValidationError("position and rate are required")
        if not await self.candidate_repository.get_by_id(data.candidate_id):
            raise NotFoundError(f"Candidate {data.candidate_id} not found")
        if not await self.management_repository.get_by_id(data.management_id):
            raise NotFoundError(f"Management {data.management_id} not found")

        return await self.repository.create(
            **data.model_dump(),
            status=engagement_status(data.end_date),
        )

    async def update_engagement(
        self,
        engagement_id: int,
        data: CandidateManagementUpdate,
    ) -> CandidateManagement:
        engagement = await self.get_engagement(engagement_id)
        if data.management_id is not None and not await self.management_repository.get_by_id(data.management_id):
            raise NotFoundError(f"Management {data.management_id} not found")

        values = data.model_dump(exclude_unset=True)
        if "end_date" in values and "status" not in values:
            values["status"] = engagement_status(values["end_date"])
        return await self.repository.update_fields(engagement, values)

    async def delete_engagement(self, engagement_id: int) -> None:
        engagement = await self.get_engagement(engagement_id)
        await self.repository.delete(engagement)
        logger.info("Deleted candidate-management %s", engagement_id)
