"""
Candidates router - API endpoints for candidates.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, get_page, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse, Page
from backoffice.schemas.candidate import (
    CandidateCheck,
    CandidateCheckResult,
    CandidateCreate,
    CandidateCreated,
    CandidateDetail,
    CandidateRead,
    CandidateUpdate,
)
from backoffice.services.candidate_service import CandidateService

router = APIRouter(prefix="/candidates", tags=["candidates"])


@router.get("", response_model=Page[CandidateRead])
async def list_candidates(
    page: int = Depends(get_page),
    query: Optional[str] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """List candidates, 15 per page. ``query`` searches name, email and phone."""
    service = CandidateService(db)
    total, candidates = await service.list_candidates(page, search=query)
    return Page[CandidateRead](
        total=total,
        batch=[CandidateRead.model_validate(candidate) for candidate in candidates],
    )


@router.post("", response_model=CandidateCreated, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    data: CandidateCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a candidate.

    With ``process_id`` the candidate is also added to that process; with
    ``management_id`` (plus ``position`` and ``rate``) it is registered as a
    professional of that management. All in one transaction.
    """
    service = CandidateService(db)
    created = await service.create_candidate(data)
    await db.commit()
    return created


@router.post("/check", response_model=CandidateCheckResult)
async def check_candidate(
    data: CandidateCheck,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Check whether a candidate with this email/phone is already in the process."""
    service = CandidateService(db)
    return await service.check_candidate(data)


@router.get("/{candidate_id}", response_model=CandidateDetail)
async def get_candidate(
    candidate_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateService(db)
    return await service.get_candidate_detail(candidate_id)


@router.put("/{candidate_id}", response_model=CandidateRead)
async def update_candidate(
    candidate_id: int,
    data: CandidateUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateService(db)
    candidate = await service.update_candidate(candidate_id, data)
    await db.commit()
    return candidate


@router.delete("/{candidate_id}", response_model=MessageResponse)
async def delete_candidate(
    candidate_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a candidate together with its process links and engagements."""
    service = CandidateService(db)
    await service.delete_candidate(candidate_id)
    await db.commit()
    return MessageResponse(message=f"Candidate {candidate_id} deleted")
