"""
CandidateProcess router - pipeline rows and the stage dispatcher.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse
from backoffice.schemas.candidate_process import (
    CandidateProcessCreate,
    CandidateProcessRead,
    CandidateProcessUpdate,
    NotesUpdate,
    PipelineView,
    StageCommandResult,
)
from backoffice.services.candidate_process_service import CandidateProcessService
from backoffice.services.process_service import ProcessService

router = APIRouter(prefix="/candidate-process", tags=["candidate-process"])


@router.get("", response_model=List[CandidateProcessRead])
async def list_candidate_processes(
    process_id: Optional[int] = None,
    candidate_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateProcessService(db)
    return await service.list_links(process_id=process_id, candidate_id=candidate_id)


@router.post("", response_model=CandidateProcessRead, status_code=status.HTTP_201_CREATED)
async def create_candidate_process(
    data: CandidateProcessCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """Add a candidate to a process (409 if it is already there)."""
    service = CandidateProcessService(db)
    row = await service.create_link(data)
    await db.commit()
    return row


@router.get("/process/{process_id}", response_model=PipelineView)
async def get_pipeline(
    process_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Process with its candidates, match and stage."""
    service = ProcessService(db)
    return await service.get_pipeline(process_id)


@router.put("/process/{process_id}", response_model=StageCommandResult)
async def apply_stage_command(
    process_id: int,
    body: Any = Body(...),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """
    Apply a pipeline action to a candidate of the process.

    Body: ``{"action", "candidateId", "data"?}`` where action is one of
    ``edit``, ``disqualify``, ``back-interview``, ``select``. For ``edit``
    ``candidateId`` is the candidate-process row id and ``data`` carries the
    fields to overwrite plus optional ``candidate_ids`` to add.
    """
    service = CandidateProcessService(db)
    result = await service.apply_stage_command(process_id, body)
    await db.commit()
    return result


@router.delete("/process/{process_id}", response_model=MessageResponse)
async def delete_process_candidates(
    process_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """Remove every candidate from a process."""
    service = CandidateProcessService(db)
    removed = await service.delete_process_links(process_id)
    await db.commit()
    return MessageResponse(message=f"Removed {removed} candidate(s) from process {process_id}")


@router.get("/{row_id}", response_model=CandidateProcessRead)
async def get_candidate_process(
    row_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateProcessService(db)
    return await service.get_link(row_id)


@router.put("/{row_id}", response_model=CandidateProcessRead)
async def update_candidate_process(
    row_id: int,
    data: CandidateProcessUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateProcessService(db)
    row = await service.update_link(row_id, data)
    await db.commit()
    return row


@router.put("/{row_id}/notes", response_model=CandidateProcessRead)
async def update_candidate_process_notes(
    row_id: int,
    data: NotesUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """Merge ``techSkills`` / ``softSkills`` / ``comment`` into the client note."""
    service = CandidateProcessService(db)
    row = await service.update_notes(row_id, data)
    await db.commit()
    return row


@router.delete("/{row_id}", response_model=MessageResponse)
async def delete_candidate_process(
    row_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = CandidateProcessService(db)
    await service.delete_link(row_id)
    await db.commit()
    return MessageResponse(message=f"Candidate-process {row_id} deleted")
