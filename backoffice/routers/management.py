"""
Management router - API endpoints for management units.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse
from backoffice.schemas.company import ManagementCreate, ManagementRead, ManagementUpdate
from backoffice.services.company_service import ManagementService
from backoffice.services.scope import resolve_scope

router = APIRouter(prefix="/management", tags=["management"])


@router.get("", response_model=List[ManagementRead])
async def list_managements(
    company_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """List management units, optionally of one company."""
    scope = await resolve_scope(db, current_user)
    service = ManagementService(db)
    return await service.list_managements(
        company_id=company_id,
        management_ids=scope.management_ids,
        company_ids=scope.company_ids,
    )


@router.post("", response_model=ManagementRead, status_code=status.HTTP_201_CREATED)
async def create_management(
    data: ManagementCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = ManagementService(db)
    management = await service.create_management(data)
    await db.commit()
    return management


@router.get("/{management_id}", response_model=ManagementRead)
async def get_management(
    management_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = ManagementService(db)
    return await service.get_management(management_id)


@router.put("/{management_id}", response_model=ManagementRead)
async def update_management(
    management_id: int,
    data: ManagementUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = ManagementService(db)
    management = await service.update_management(management_id, data)
    await db.commit()
    return management


@router.delete("/{management_id}", response_model=MessageResponse)
async def delete_management(
    management_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = ManagementService(db)
    await service.delete_management(management_id)
    await db.commit()
    return MessageResponse(message=f"Management {management_id} deleted")
