"""
Company router - API endpoints for client companies.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse
from backoffice.schemas.company import CompanyCreate, CompanyRead, CompanyUpdate
from backoffice.services.company_service import CompanyService
from backoffice.services.scope import visible_company_ids

router = APIRouter(prefix="/company", tags=["company"])


@router.get("", response_model=List[CompanyRead])
async def list_companies(
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """List companies visible to the caller, alphabetically."""
    service = CompanyService(db)
    return await service.list_companies(company_ids=await visible_company_ids(db, current_user))


@router.get("/first", response_model=CompanyRead)
async def get_first_company(
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """Get the alphabetically first company."""
    service = CompanyService(db)
    return await service.get_first_company()


@router.post("", response_model=CompanyRead, status_code=status.HTTP_201_CREATED)
async def create_company(
    data: CompanyCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = CompanyService(db)
    company = await service.create_company(data)
    await db.commit()
    return company


@router.get("/{company_id}", response_model=CompanyRead)
async def get_company(
    company_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = CompanyService(db)
    return await service.get_company(company_id)


@router.put("/{company_id}", response_model=CompanyRead)
async def update_company(
    company_id: int,
    data: CompanyUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    service = CompanyService(db)
    company = await service.update_company(company_id, data)
    await db.commit()
    return company


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Delete a company and, in the same transaction, everything that belongs to it."""
    service = CompanyService(db)
    await service.delete_company(company_id)
    await db.commit()
    return MessageResponse(message=f"Company {company_id} deleted")
