"""
CandidateManagement router - professionals placed in a management unit.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse
from backoffice.schemas.candidate_management import (
    CandidateManagementCreate,
    CandidateManagementDetail,
    CandidateManagementRead,
    CandidateManagementUpdate,
    ProfessionalRow,
)
from backoffice.services.candidate_management_service import CandidateManagementService
from backoffice.services.scope import resolve_scope

router = APIRouter(prefix="/candidate-management", tags=["candidate-management"])


@router.get("", response_model=List[CandidateManagementRead])
async def list_candidate_managements(
    company_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    scope = await resolve_scope(db, current_user)
    service = CandidateManagementService(db)
    return await service.list_engagements(scope, company_id=company_id)


@router.get("/all", response_model=List[ProfessionalRow])
async def list_professionals(
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Every engagement flattened with candidate, company and management names."""
    scope = await resolve_scope(db, current_user)
    service = CandidateManagementService(db)
    return await service.list_professionals(scope)


@router.post("", response_model=CandidateManagementRead, status_code=status.HTTP_201_CREATED)
async def create_candidate_management(
    data: CandidateManagementCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateManagementService(db)
    engagement = await service.create_engagement(data)
    await db.commit()
    return engagement


@router.get("/{engagement_id}", response_model=CandidateManagementDetail)
async def get_candidate_management(
    engagement_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Engagement with its candidate and post-sales evaluations."""
    service = CandidateManagementService(db)
    return await service.get_engagement_detail(engagement_id)


@router.put("/{engagement_id}", response_model=CandidateManagementRead)
async def update_candidate_management(
    engagement_id: int,
    data: CandidateManagementUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateManagementService(db)
    engagement = await service.update_engagement(engagement_id, data)
    await db.commit()
    return engagement


@router.delete("/{engagement_id}", response_model=MessageResponse)
async def delete_candidate_management(
    engagement_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateManagementService(db)
    await service.delete_engagement(engagement_id)
    await db.commit()
    return MessageResponse(message=f"Candidate-management {engagement_id} deleted")
