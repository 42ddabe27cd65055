"""
Process Pydantic schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from backoffice.schemas.base import ORMRead
from backoffice.schemas.candidate_process import ClientNote


class ProcessCreate(BaseModel):
    """Schema for opening a new process."""

    job_offer: str
    management_id: int
    job_offer_description: Optional[str] = None
    opened_at: Optional[datetime] = None
    pre_filtered: bool = False
    status: Optional[str] = "activo"


class ProcessUpdate(BaseModel):
    """Schema for updating a process. All fields optional."""

    job_offer: Optional[str] = None
    job_offer_description: Optional[str] = None
    management_id: Optional[int] = None
    opened_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    pre_filtered: Optional[bool] = None
    status: Optional[str] = None


class ProcessRead(ORMRead):
    job_offer: str
    job_offer_description: Optional[str] = None
    management_id: int
    opened_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None
    pre_filtered: bool
    status: Optional[str] = None


class ProcessListItem(ProcessRead):
    """Listing row with the owning management and company names."""

    management_name: Optional[str] = None
    company_id: Optional[int] = None
    company_name: Optional[str] = None
    candidate_count: int = 0


class ProcessCandidate(BaseModel):
    """A candidate as shown on the process detail page."""

    id: int
    candidate_process_id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    match: int = 0
    stage: str
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None


class ProcessDetail(ProcessListItem):
    candidates: List[ProcessCandidate] = Field(default_factory=list)


class ProcessCloseResult(BaseModel):
    message: str
    process: ProcessRead
    promoted: int


class ProcessCount(BaseModel):
    total: int
