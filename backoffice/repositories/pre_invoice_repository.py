"""
PreInvoice repository - database operations for pre-invoices and their items.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import func

from backoffice.models.candidate import Candidate
from backoffice.models.pre_invoice import PreInvoice, PreInvoiceItem


class PreInvoiceRepository:
    """Repository for PreInvoice database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _apply_filters(self, query, company_id: int, status: Optional[str] = None):
        query = query.where(PreInvoice.company_id == company_id)
        if status is not None:
            query = query.where(PreInvoice.status == status)
        return query

    async def list(
        self,
        company_id: int,
        limit: int,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> List[PreInvoice]:
        """List a company's pre-invoices, newest first."""
        query = self._apply_filters(select(PreInvoice), company_id, status)
        query = query.order_by(PreInvoice.created_at.desc(), PreInvoice.id.desc()).limit(limit).offset(offset)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count(self, company_id: int, status: Optional[str] = None) -> int:
        query = self._apply_filters(select(func.count(PreInvoice.id)), company_id, status)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def item_candidate_names(self, invoice_ids: List[int]) -> List[Tuple[int, str]]:
        """(pre_invoice_id, candidate name) for every item of the given invoices."""
        if not invoice_ids:
            return []
        result = await self.db.execute(
            select(PreInvoiceItem.pre_invoice_id, Candidate.name)
            .join(Candidate, PreInvoiceItem.candidate_id == Candidate.id)
            .where(PreInvoiceItem.pre_invoice_id.in_(invoice_ids))
            .order_by(PreInvoiceItem.id.asc())
        )
        return [tuple(row) for row in result.all()]

    async def get_by_id(self, invoice_id: int) -> Optional[PreInvoice]:
        result = await self.db.execute(
            select(PreInvoice).where(PreInvoice.id == invoice_id)
        )
        return result.scalar_one_or_none()

    async def get_with_items(self, invoice_id: int) -> Optional[PreInvoice]:
        """Get a pre-invoice with its items (and their candidates) loaded."""
        result = await self.db.execute(
            select(PreInvoice)
            .where(PreInvoice.id == invoice_id)
            .options(selectinload(PreInvoice.items).selectinload(PreInvoiceItem.candidate))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> PreInvoice:
        invoice = PreInvoice(**fields)
        self.db.add(invoice)
        await self.db.flush()
        await self.db.refresh(invoice)
        return invoice

    async def update_fields(self, invoice: PreInvoice, values: Dict[str, Any]) -> PreInvoice:
        for field, value in values.items():
            setattr(invoice, field, value)

        invoice.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(invoice)
        return invoice

    async def delete_items(self, invoice_id: int) -> int:
        """Remove every item of a pre-invoice. Returns how many were removed."""
        result = await self.db.execute(
            delete(PreInvoiceItem)
            .where(PreInvoiceItem.pre_invoice_id == invoice_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount

    async def add_items(self, invoice_id: int, items: List[Dict[str, Any]]) -> List[PreInvoiceItem]:
        rows = [PreInvoiceItem(pre_invoice_id=invoice_id, **item) for item in items]
        self.db.add_all(rows)
        await self.db.flush()
        return rows

    async def delete(self, invoice: PreInvoice) -> None:
        """Delete a pre-invoice and its items."""
        await self.delete_items(invoice.id)
        await self.db.execute(delete(PreInvoice).where(PreInvoice.id == invoice.id))
        await self.db.flush()


class PreInvoiceItemRepository:
    """Repository for PreInvoiceItem database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, pre_invoice_id: Optional[int] = None) -> List[PreInvoiceItem]:
        query = select(PreInvoiceItem)
        if pre_invoice_id is not None:
            query = query.where(PreInvoiceItem.pre_invoice_id == pre_invoice_id)
        query = query.order_by(PreInvoiceItem.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, item_id: int) -> Optional[PreInvoiceItem]:
        result = await self.db.execute(
            select(PreInvoiceItem).where(PreInvoiceItem.id == item_id)
        )
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> PreInvoiceItem:
        item = PreInvoiceItem(**fields)
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def update_fields(self, item: PreInvoiceItem, values: Dict[str, Any]) -> PreInvoiceItem:
        for field, value in values.items():
            setattr(item, field, value)

        item.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(item)
        return item

    async def delete(self, item: PreInvoiceItem) -> None:
        await self.db.delete(item)
        await self.db.flush()
