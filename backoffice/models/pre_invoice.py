"""
PreInvoice and PreInvoiceItem models.

A pre-invoice is a billing draft for a company; each item bills the hours
of one professional.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Text, Date, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.candidate import Candidate
    from backoffice.models.company import Company


INVOICE_DRAFT = "borrador"
INVOICE_APPROVED = "aprobado"
INVOICE_REJECTED = "rechazado"


class PreInvoice(TimestampedModel):
    """PreInvoice table - deleting it deletes its items."""

    __tablename__ = "pre_invoices"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    estimated_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    expiration_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    total_value: Mapped[Decimal] = mapped_column(
        Numeric(30, 10),
        nullable=False,
        default=Decimal("0"),
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=INVOICE_DRAFT,
    )

    company: Mapped["Company"] = relationship("Company")

    items: Mapped[List["PreInvoiceItem"]] = relationship(
        "PreInvoiceItem",
        back_populates="pre_invoice",
        cascade="all, delete-orphan",
        order_by="PreInvoiceItem.id",
    )


class PreInvoiceItem(TimestampedModel):
    """
    PreInvoiceItem table - one billed professional.

    total = subtotal + subtotal * vat / 100
    """

    __tablename__ = "pre_invoice_items"

    pre_invoice_id: Mapped[int] = mapped_column(
        ForeignKey("pre_invoices.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    service: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    hours: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=Decimal("0"))
    rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    subtotal: Mapped[Decimal] = mapped_column(Numeric(20, 4), nullable=False, default=Decimal("0"))
    vat: Mapped[Decimal] = mapped_column(Numeric(7, 4), nullable=False, default=Decimal("0"))
    total: Mapped[Decimal] = mapped_column(Numeric(28, 10), nullable=False, default=Decimal("0"))

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    pre_invoice: Mapped["PreInvoice"] = relationship(
        "PreInvoice",
        back_populates="items",
    )

    candidate: Mapped["Candidate"] = relationship("Candidate")
