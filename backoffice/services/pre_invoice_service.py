"""
Pre-invoice business logic service.

Line items bill one professional each:

    subtotal = given subtotal, else hours * rate
    total    = subtotal + subtotal * vat / 100

Amounts are exact Decimals: inputs carry a bounded scale (see the
pre-invoice schemas) and the item columns are wide enough to hold the
resulting total without rounding. Updating a pre-invoice replaces its whole
item set.
"""

import logging
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.errors import NotFoundError, UnrecognizedActionError
from backoffice.models.pre_invoice import (
    INVOICE_APPROVED,
    INVOICE_REJECTED,
    PreInvoice,
    PreInvoiceItem,
)
from backoffice.repositories.candidate_repository import CandidateRepository
from backoffice.repositories.company_repository import CompanyRepository
from backoffice.repositories.pre_invoice_repository import (
    PreInvoiceItemRepository,
    PreInvoiceRepository,
)
from backoffice.schemas.candidate import CandidateRead
from backoffice.schemas.pre_invoice import (
    PreInvoiceCreate,
    PreInvoiceDetail,
    PreInvoiceItemCreate,
    PreInvoiceItemUpdate,
    PreInvoiceListItem,
    PreInvoiceRead,
    PreInvoiceUpdate,
    PreInvoiceWithItems,
    Professional,
)

logger = logging.getLogger(__name__)

# PATCH action -> resulting status
STATUS_BY_ACTION = {
    "approve": INVOICE_APPROVED,
    "reject": INVOICE_REJECTED,
}

SUMMARY_NAMES = 3


@dataclass
class LineAmounts:
    hours: Decimal
    rate: Decimal
    subtotal: Decimal
    vat: Decimal
    total: Decimal


def compute_line_item(
    hours: Decimal,
    rate: Decimal,
    subtotal: Optional[Decimal] = None,
    vat: Optional[Decimal] = None,
) -> LineAmounts:
    """
    Compute the amounts of one line item.

    >>> compute_line_item(Decimal("10"), Decimal("50"), Decimal("500"), Decimal("19")).total
    Decimal('595')
    """
    hours = Decimal(hours)
    rate = Decimal(rate)
    base = Decimal(subtotal) if subtotal is not None else hours * rate
    vat = Decimal(vat) if vat is not None else Decimal("0")
    total = base + base * vat / Decimal(100)
    return LineAmounts(
        hours=hours,
        rate=rate,
        subtotal=base,
        vat=vat,
        total=total,
    )


def build_items(professionals: List[Professional]) -> List[Dict]:
    """Item rows (without the parent id) for a list of billed professionals."""
    items = []
    for professional in professionals:
        amounts = compute_line_item(
            professional.hours_worked,
            professional.hour_value,
            professional.subtotal,
            professional.vat,
        )
        items.append(
            dict(
                candidate_id=professional.id,
                service=professional.service or "",
                description=professional.notes or "",
                **asdict(amounts),
            )
        )
    return items


def summarize_names(names: List[str]) -> str:
    """'Ana, Luis, Eva y otros 2' style summary of billed professionals."""
    shown = ", ".join(names[:SUMMARY_NAMES])
    remaining = len(names) - SUMMARY_NAMES
    if remaining > 0:
        return f"{shown} y otros {remaining}"
    return shown


class PreInvoiceService:
    """Service for pre-invoice business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = PreInvoiceRepository(db)
        self.item_repository = PreInvoiceItemRepository(db)
        self.company_repository = CompanyRepository(db)
        self.candidate_repository = CandidateRepository(db)

    async def list_pre_invoices(
        self,
        company_id: int,
        page: int,
        status: Optional[str] = None,
    ) -> Tuple[int, List[PreInvoiceListItem]]:
        total = await self.repository.count(company_id, status=status)
        invoices = await self.repository.list(
            company_id,
            limit=settings.PAGE_SIZE,
            offset=(page - 1) * settings.PAGE_SIZE,
            status=status,
        )

        names: Dict[int, List[str]] = {invoice.id: [] for invoice in invoices}
        for invoice_id, name in await self.repository.item_candidate_names(list(names)):
            names[invoice_id].append(name)

        batch = [
            PreInvoiceListItem(
                **PreInvoiceRead.model_validate(invoice).model_dump(),
                professionals=summarize_names(names[invoice.id]),
                item_count=len(names[invoice.id]),
            )
            for invoice in invoices
        ]
        return total, batch

    async def get_pre_invoice(self, invoice_id: int, company_ids: Optional[List[int]] = None) -> PreInvoice:
        invoice = await self.repository.get_with_items(invoice_id)
        if not invoice or (company_ids is not None and invoice.company_id not in company_ids):
            raise NotFoundError(f"Pre-invoice {invoice_id} not found")
        return invoice

    async def get_pre_invoice_detail(
        self,
        invoice_id: int,
        company_ids: Optional[List[int]] = None,
    ) -> PreInvoiceDetail:
        """Pre-invoice with its items and the distinct billed candidates."""
        invoice = await self.get_pre_invoice(invoice_id, company_ids)
        candidates = {}
        for item in invoice.items:
            candidates.setdefault(item.candidate_id, item.candidate)
        return PreInvoiceDetail(
            pre_invoice=PreInvoiceWithItems.model_validate(invoice),
            candidates=[CandidateRead.model_validate(candidate) for candidate in candidates.values()],
        )

    async def create_pre_invoice(self, data: PreInvoiceCreate) -> PreInvoice:
        """Create a pre-invoice and its computed items."""
        await self._check_references(data.company_id, data.professionals)
        items = build_items(data.professionals)

        invoice = await self.repository.create(
            **data.model_dump(exclude={"professionals", "total_value"}),
            total_value=self._total_value(data.total_value, items),
        )
        await self.repository.add_items(invoice.id, items)
        logger.info("Created pre-invoice %s with %d item(s)", invoice.id, len(items))
        return await self.get_pre_invoice(invoice.id)

    async def replace_pre_invoice(self, invoice_id: int, data: PreInvoiceUpdate) -> PreInvoice:
        """
        Update a pre-invoice and replace its items with ``data.professionals``.

        Deleting the old items, inserting the new ones and updating the
        parent happen in the caller's single transaction.
        """
        invoice = await self.repository.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError(f"Pre-invoice {invoice_id} not found")
        await self._check_references(data.company_id, data.professionals)
        items = build_items(data.professionals)

        values = data.model_dump(exclude_unset=True, exclude={"professionals", "total_value"})
        values["total_value"] = self._total_value(data.total_value, items)

        removed = await self.repository.delete_items(invoice_id)
        await self.repository.add_items(invoice_id, items)
        await self.repository.update_fields(invoice, values)
        logger.info(
            "Replaced items of pre-invoice %s: %d removed, %d inserted",
            invoice_id,
            removed,
            len(items),
        )
        return await self.get_pre_invoice(invoice_id)

    async def change_status(
        self,
        invoice_id: int,
        action: object,
        company_ids: Optional[List[int]] = None,
    ) -> PreInvoice:
        """
        Approve or reject a pre-invoice.

        A caller limited to ``company_ids`` cannot see, and so cannot change,
        invoices of other companies.

        Raises:
            UnrecognizedActionError: action other than approve/reject
            NotFoundError: unknown invoice, or one outside ``company_ids``
        """
        if not isinstance(action, str) or action not in STATUS_BY_ACTION:
            raise UnrecognizedActionError(action)

        invoice = await self.get_pre_invoice(invoice_id, company_ids)
        invoice = await self.repository.update_fields(invoice, {"status": STATUS_BY_ACTION[action]})
        logger.info("Pre-invoice %s is now %s", invoice_id, invoice.status)
        return invoice

    async def delete_pre_invoice(self, invoice_id: int) -> None:
        invoice = await self.repository.get_by_id(invoice_id)
        if not invoice:
            raise NotFoundError(f"Pre-invoice {invoice_id} not found")
        await self.repository.delete(invoice)
        logger.info("Deleted pre-invoice %s", invoice_id)

    # Items

    async def list_items(self, pre_invoice_id: Optional[int] = None) -> List[PreInvoiceItem]:
        return await self.item_repository.list(pre_invoice_id=pre_invoice_id)

    async def get_item(self, item_id: int) -> PreInvoiceItem:
        item = await self.item_repository.get_by_id(item_id)
        if not item:
            raise NotFoundError(f"Pre-invoice item {item_id} not found")
        return item

    async def create_item(self, data: PreInvoiceItemCreate) -> PreInvoiceItem:
        if not await self.repository.get_by_id(data.pre_invoice_id):
            raise NotFoundError(f"Pre-invoice {data.pre_invoice_id} not found")
        if not await self.candidate_repository.get_by_id(data.candidate_id):
            raise NotFoundError(f"Candidate {data.candidate_id} not found")

        amounts = compute_line_item(data.hours, data.rate, data.subtotal, data.vat)
        return await self.item_repository.create(
            pre_invoice_id=data.pre_invoice_id,
            candidate_id=data.candidate_id,
            service=data.service,
            description=data.description,
            **asdict(amounts),
        )

    async def update_item(self, item_id: int, data: PreInvoiceItemUpdate) -> PreInvoiceItem:
        """Update an item; amounts are recomputed from the merged values."""
        item = await self.get_item(item_id)
        if data.candidate_id is not None and not await self.candidate_repository.get_by_id(data.candidate_id):
            raise NotFoundError(f"Candidate {data.candidate_id} not found")

        values = data.model_dump(exclude_unset=True, exclude={"hours", "rate", "subtotal", "vat"})
        hours = data.hours if data.hours is not None else item.hours
        rate = data.rate if data.rate is not None else item.rate
        vat = data.vat if data.vat is not None else item.vat
        # A changed hours/rate re-derives the subtotal unless one is given
        if data.subtotal is not None:
            subtotal = data.subtotal
        elif data.hours is not None or data.rate is not None:
            subtotal = None
        else:
            subtotal = item.subtotal

        values.update(asdict(compute_line_item(hours, rate, subtotal, vat)))
        return await self.item_repository.update_fields(item, values)

    async def delete_item(self, item_id: int) -> None:
        item = await self.get_item(item_id)
        await self.item_repository.delete(item)

    async def _check_references(self, company_id: Optional[int], professionals: List[Professional]) -> None:
        if company_id is not None and not await self.company_repository.get_by_id(company_id):
            raise NotFoundError(f"Company {company_id} not found")
        for professional in professionals:
            if not await self.candidate_repository.get_by_id(professional.id):
                raise NotFoundError(f"Candidate {professional.id} not found")

    @staticmethod
    def _total_value(given: Optional[Decimal], items: List[Dict]) -> Decimal:
        if given is not None:
            return given
        return sum((item["total"] for item in items), Decimal("0"))
