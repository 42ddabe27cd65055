"""
CandidateManagement (engagement) and post-sales Pydantic schemas.
"""

from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from backoffice.schemas.base import ORMRead, Money

# Engagement rates are stored at six decimal places
RATE = dict(ge=0, max_digits=16, decimal_places=6)


class CandidateManagementCreate(BaseModel):
    """Schema for registering a professional in a management unit."""

    candidate_id: int
    management_id: int
    position: Optional[str] = None
    rate: Optional[Decimal] = Field(default=None, **RATE)
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None


class CandidateManagementUpdate(BaseModel):
    """Schema for updating an engagement. All fields optional."""

    management_id: Optional[int] = None
    position: Optional[str] = None
    rate: Optional[Decimal] = Field(default=None, **RATE)
    status: Optional[str] = None
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None


class CandidateManagementRead(ORMRead):
    candidate_id: int
    management_id: int
    status: str
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None
    position: Optional[str] = None
    rate: Optional[Money] = None


class ProfessionalRow(BaseModel):
    """Flattened engagement listing (``GET /candidate-management/all``)."""

    id: int
    candidate_id: int
    name: str
    role: Optional[str] = None
    client: Optional[str] = None
    management: Optional[str] = None
    start: Optional[date_type] = None
    end: Optional[date_type] = None
    status: str
    rate: Optional[Money] = None


class PostSalesActivityCreate(BaseModel):
    """Schema for appending an evaluation to an engagement."""

    candidate_management_id: int
    date: Optional[date_type] = None
    eval_stack: int = Field(default=0, ge=0)
    eval_communication: int = Field(default=0, ge=0)
    eval_motivation: int = Field(default=0, ge=0)
    eval_compliance: int = Field(default=0, ge=0)
    benefit: Optional[str] = None
    client_comment: Optional[str] = None
    actions: Optional[str] = None
    projection: Optional[str] = None


class PostSalesActivityRead(ORMRead):
    candidate_management_id: int
    date: Optional[date_type] = None
    eval_stack: int
    eval_communication: int
    eval_motivation: int
    eval_compliance: int
    benefit: Optional[str] = None
    client_comment: Optional[str] = None
    actions: Optional[str] = None
    projection: Optional[str] = None


class PostSalesActivityCreated(PostSalesActivityRead):
    """The stored evaluation plus the engagement's recomputed rate."""

    rate: Money


class EngagementCandidate(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class CandidateManagementDetail(CandidateManagementRead):
    """Engagement with its candidate and evaluation history."""

    candidate: EngagementCandidate
    post_sales_activities: List[PostSalesActivityRead] = Field(default_factory=list)
