"""
Pre-invoices router - draft invoices and their approval.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, get_page, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.errors import AuthError
from backoffice.schemas.base import MessageResponse, Page
from backoffice.schemas.pre_invoice import (
    PreInvoiceCreate,
    PreInvoiceDetail,
    PreInvoiceListItem,
    PreInvoiceRead,
    PreInvoiceStatusChange,
    PreInvoiceUpdate,
    PreInvoiceWithItems,
)
from backoffice.services.pre_invoice_service import PreInvoiceService
from backoffice.services.scope import visible_company_ids

router = APIRouter(prefix="/pre-invoices", tags=["pre-invoices"])


@router.get("", response_model=Page[PreInvoiceListItem])
async def list_pre_invoices(
    company_id: int = Query(...),
    page: int = Depends(get_page),
    status: Optional[str] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    """
    List a company's pre-invoices, newest first, 15 per page.

    Client users may only list companies they are linked to.
    """
    company_ids = await visible_company_ids(db, current_user)
    if company_ids is not None and company_id not in company_ids:
        raise AuthError("Not allowed to see pre-invoices of this company")

    service = PreInvoiceService(db)
    total, batch = await service.list_pre_invoices(company_id, page, status=status)
    return Page[PreInvoiceListItem](total=total, batch=batch)


@router.post("", response_model=PreInvoiceWithItems, status_code=status.HTTP_201_CREATED)
async def create_pre_invoice(
    data: PreInvoiceCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """Create a pre-invoice; one item per entry of ``professionals``."""
    service = PreInvoiceService(db)
    invoice = await service.create_pre_invoice(data)
    await db.commit()
    return invoice


@router.get("/{invoice_id}", response_model=PreInvoiceDetail)
async def get_pre_invoice(
    invoice_id: int,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    company_ids = await visible_company_ids(db, current_user)
    service = PreInvoiceService(db)
    return await service.get_pre_invoice_detail(invoice_id, company_ids)


@router.put("/{invoice_id}", response_model=PreInvoiceWithItems)
async def replace_pre_invoice(
    invoice_id: int,
    data: PreInvoiceUpdate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """
    Update a pre-invoice.

    The item set is replaced by ``professionals`` (an empty list leaves the
    invoice without items).
    """
    service = PreInvoiceService(db)
    invoice = await service.replace_pre_invoice(invoice_id, data)
    await db.commit()
    return invoice


@router.patch("/{invoice_id}", response_model=PreInvoiceStatusChange)
async def change_pre_invoice_status(
    invoice_id: int,
    body: Dict[str, Any] = Body(...),
    current_user: CurrentUser = Depends(require_role(*Roles.INVOICE_APPROVERS)),
    db: AsyncSession = Depends(get_db),
):
    """Approve or reject: ``{"action": "approve" | "reject"}``."""
    company_ids = await visible_company_ids(db, current_user)
    service = PreInvoiceService(db)
    invoice = await service.change_status(invoice_id, body.get("action"), company_ids)
    await db.commit()
    return PreInvoiceStatusChange(
        message=f"Pre-invoice {invoice_id} is now {invoice.status}",
        updated_invoice=PreInvoiceRead.model_validate(invoice),
    )


@router.delete("/{invoice_id}", response_model=MessageResponse)
async def delete_pre_invoice(
    invoice_id: int,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    service = PreInvoiceService(db)
    await service.delete_pre_invoice(invoice_id)
    await db.commit()
    return MessageResponse(message=f"Pre-invoice {invoice_id} deleted")
