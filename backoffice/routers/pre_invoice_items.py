"""
Pre-invoice items router.

Amounts are recomputed on every write; the parent's ``total_value`` is left
as stored.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.base import MessageResponse
from backoffice.schemas.pre_invoice import (
    PreInvoiceItemCreate,
    PreInvoiceItemRead,
    PreInvoiceItemUpdate,
)
from backoffice.services.pre_invoice_service import PreInvoiceService

router = APIRouter(prefix="/pre-invoice-items", tags=["pre-invoices"])


@router.get("", response_model=List[PreInvoiceItemRead])
async def list_pre_invoice_items(
    pre_invoice_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    return await service.list_items(pre_invoice_id=pre_invoice_id)


@router.post("", response_model=PreInvoiceItemRead, status_code=status.HTTP_201_CREATED)
async def create_pre_invoice_item(
    data: PreInvoiceItemCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    item = await service.create_item(data)
    await db.commit()
    return item


@router.get("/{item_id}", response_model=PreInvoiceItemRead)
async def get_pre_invoice_item(
    item_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    return await service.get_item(item_id)


@router.put("/{item_id}", response_model=PreInvoiceItemRead)
async def update_pre_invoice_item(
    item_id: int,
    data: PreInvoiceItemUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    item = await service.update_item(item_id, data)
    await db.commit()
    return item


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_pre_invoice_item(
    item_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    await service.delete_item(item_id)
    await db.commit()
    return MessageResponse(message=f"Pre-invoice item {item_id} deleted")
