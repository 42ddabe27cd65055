"""
Candidate Pydantic schemas.
"""

from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, EmailStr, Field

from backoffice.schemas.base import ORMRead
from backoffice.schemas.candidate_process import ClientNote, CandidateProcessRead
from backoffice.schemas.candidate_management import RATE, CandidateManagementRead


class CandidateCreate(BaseModel):
    """
    Schema for creating a new candidate.

    ``process_id`` attaches the candidate to a process with the pipeline
    fields given; ``management_id`` registers the engagement
    (``position`` and ``rate`` are then required).
    """

    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_summary: Optional[str] = None
    total_experience: Optional[str] = None

    # Process association
    process_id: Optional[int] = None
    match_percent: Optional[int] = Field(default=None, ge=0, le=100)
    stage: Literal["entrevistas", "seleccionado", "descartado"] = "entrevistas"
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None

    # Engagement
    management_id: Optional[int] = None
    position: Optional[str] = None
    rate: Optional[Decimal] = Field(default=None, **RATE)


class CandidateUpdate(BaseModel):
    """Schema for updating a candidate. All fields optional."""

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_summary: Optional[str] = None
    total_experience: Optional[str] = None


class CandidateRead(ORMRead):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    profile_summary: Optional[str] = None
    total_experience: Optional[str] = None


class CandidateCreated(BaseModel):
    message: str
    candidate: CandidateRead
    candidate_process: Optional[CandidateProcessRead] = None
    candidate_management: Optional[CandidateManagementRead] = None


class CandidateProcessSummary(BaseModel):
    """One process the candidate takes part in."""

    candidate_process_id: int
    process_id: int
    job_offer: str
    status: Optional[str] = None
    stage: str
    match: int = 0
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    client_comments: Optional[ClientNote] = None
    interview_questions: Optional[str] = None


class CandidateDetail(CandidateRead):
    processes: List[CandidateProcessSummary] = Field(default_factory=list)


class CandidateCheck(BaseModel):
    """Duplicate check before adding a candidate to a process."""

    process_id: int
    email: Optional[str] = None
    phone: Optional[str] = None


class CandidateCheckResult(BaseModel):
    exists: bool
    message: str
