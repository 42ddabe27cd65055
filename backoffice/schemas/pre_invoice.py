"""
PreInvoice and PreInvoiceItem Pydantic schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backoffice.schemas.base import ORMRead, Money
from backoffice.schemas.candidate import CandidateRead

# Input scales; line totals are stored exactly at TOTAL_PLACES.
HOURS = dict(ge=0, max_digits=8, decimal_places=2)
HOUR_RATE = dict(ge=0, max_digits=12, decimal_places=2)
SUBTOTAL = dict(ge=0, max_digits=20, decimal_places=4)
VAT = dict(ge=0, max_digits=7, decimal_places=4)
TOTAL_PLACES = 10


class Professional(BaseModel):
    """
    One professional billed on a pre-invoice.

    ``id`` is the candidate id. When ``subtotal`` is missing it is derived
    from ``hoursWorked * hourValue``.
    """

    id: int = Field(gt=0)
    hours_worked: Decimal = Field(default=Decimal("0"), alias="hoursWorked", **HOURS)
    hour_value: Decimal = Field(default=Decimal("0"), alias="hourValue", **HOUR_RATE)
    subtotal: Optional[Decimal] = Field(default=None, **SUBTOTAL)
    vat: Optional[Decimal] = Field(default=None, **VAT)
    notes: Optional[str] = None
    service: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class PreInvoiceCreate(BaseModel):
    """
    Schema for creating a pre-invoice with its items.

    ``total_value`` defaults to the sum of the computed item totals.
    """

    company_id: int
    estimated_date: Optional[date_type] = None
    expiration_date: Optional[date_type] = None
    total_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=30, decimal_places=TOTAL_PLACES)
    description: Optional[str] = None
    status: Literal["borrador", "aprobado", "rechazado"] = "borrador"
    professionals: List[Professional] = Field(default_factory=list)


class PreInvoiceUpdate(BaseModel):
    """
    Schema for replacing a pre-invoice.

    The item set is always replaced by ``professionals``.
    """

    company_id: Optional[int] = None
    estimated_date: Optional[date_type] = None
    expiration_date: Optional[date_type] = None
    total_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=30, decimal_places=TOTAL_PLACES)
    description: Optional[str] = None
    status: Optional[Literal["borrador", "aprobado", "rechazado"]] = None
    professionals: List[Professional] = Field(default_factory=list)


class PreInvoiceItemCreate(BaseModel):
    pre_invoice_id: int
    candidate_id: int
    service: Optional[str] = None
    hours: Decimal = Field(default=Decimal("0"), **HOURS)
    rate: Decimal = Field(default=Decimal("0"), **HOUR_RATE)
    subtotal: Optional[Decimal] = Field(default=None, **SUBTOTAL)
    vat: Optional[Decimal] = Field(default=None, **VAT)
    description: Optional[str] = None


class PreInvoiceItemUpdate(BaseModel):
    """Any of hours/rate/subtotal/vat changing recomputes the total."""

    candidate_id: Optional[int] = None
    service: Optional[str] = None
    hours: Optional[Decimal] = Field(default=None, **HOURS)
    rate: Optional[Decimal] = Field(default=None, **HOUR_RATE)
    subtotal: Optional[Decimal] = Field(default=None, **SUBTOTAL)
    vat: Optional[Decimal] = Field(default=None, **VAT)
    description: Optional[str] = None


class PreInvoiceItemRead(ORMRead):
    pre_invoice_id: int
    candidate_id: int
    service: Optional[str] = None
    hours: Money
    rate: Money
    subtotal: Money
    vat: Money
    total: Money
    description: Optional[str] = None


class PreInvoiceRead(ORMRead):
    company_id: int
    estimated_date: Optional[date_type] = None
    expiration_date: Optional[date_type] = None
    total_value: Money
    description: Optional[str] = None
    status: str


class PreInvoiceWithItems(PreInvoiceRead):
    items: List[PreInvoiceItemRead] = Field(default_factory=list)


class PreInvoiceListItem(PreInvoiceRead):
    """Listing row: up to three professional names plus the item count."""

    professionals: str = ""
    item_count: int = 0


class PreInvoiceDetail(BaseModel):
    pre_invoice: PreInvoiceWithItems = Field(serialization_alias="preInvoice")
    candidates: List[CandidateRead] = Field(default_factory=list)


class PreInvoiceStatusChange(BaseModel):
    """``PATCH /pre-invoices/{id}`` result."""

    message: str
    updated_invoice: PreInvoiceRead = Field(serialization_alias="updatedInvoice")
