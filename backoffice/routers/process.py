"""
Process router - API endpoints for job processes.
"""

from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Body, Depends, status
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, get_page, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.errors import UnrecognizedActionError, ValidationError, describe_validation_errors
from backoffice.schemas.base import MessageResponse, Page
from backoffice.schemas.process import (
    ProcessCloseResult,
    ProcessCount,
    ProcessCreate,
    ProcessDetail,
    ProcessListItem,
    ProcessRead,
    ProcessUpdate,
)
from backoffice.services.process_service import ProcessService
from backoffice.services.scope import resolve_scope

router = APIRouter(prefix="/process", tags=["process"])


@router.get("", response_model=Page[ProcessListItem])
async def list_processes(
    page: int = Depends(get_page),
    query: Optional[str] = None,
    company_id: Optional[int] = None,
    management_id: Optional[int] = None,
    status: Optional[str] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """
    List processes, 15 per page.

    Filters: ``query`` (title/description), ``company_id``, ``management_id``,
    ``status``. Client users only see their own managements / companies.
    """
    scope = await resolve_scope(db, current_user)
    service = ProcessService(db)
    total, batch = await service.list_processes(
        page,
        scope,
        search=query,
        company_id=company_id,
        management_id=management_id,
        status=status,
    )
    return Page[ProcessListItem](total=total, batch=batch)


@router.get("/count", response_model=ProcessCount)
async def count_processes(
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    scope = await resolve_scope(db, current_user)
    service = ProcessService(db)
    return ProcessCount(total=await service.count_processes(scope))


@router.post("", response_model=ProcessRead, status_code=status.HTTP_201_CREATED)
async def create_process(
    data: ProcessCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = ProcessService(db)
    process = await service.create_process(data)
    await db.commit()
    return process


@router.get("/{process_id}", response_model=ProcessDetail)
async def get_process(
    process_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Process with its owner and every candidate's pipeline data."""
    service = ProcessService(db)
    return await service.get_process_detail(process_id)


@router.put("/{process_id}", response_model=Union[ProcessCloseResult, ProcessRead])
async def update_process(
    process_id: int,
    body: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a process, or close it with ``{"action": "close"}``.

    Closing promotes every selected candidate to an active professional of
    the process' management and marks the process closed; either all of it
    is stored or none of it.
    """
    service = ProcessService(db)

    if "action" in body:
        if body["action"] != "close":
            raise UnrecognizedActionError(body["action"])
        process, promoted = await service.close_process(process_id)
        await db.commit()
        return ProcessCloseResult(
            message="Process closed",
            process=ProcessRead.model_validate(process),
            promoted=promoted,
        )

    try:
        data = ProcessUpdate.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors()))

    process = await service.update_process(process_id, data)
    await db.commit()
    return ProcessRead.model_validate(process)


@router.delete("/{process_id}", response_model=MessageResponse)
async def delete_process(
    process_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = ProcessService(db)
    await service.delete_process(process_id)
    await db.commit()
    return MessageResponse(message=f"Process {process_id} deleted")
