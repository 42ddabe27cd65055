"""
Company and Management Pydantic schemas.
"""

from typing import Optional

from pydantic import BaseModel

from backoffice.schemas.base import ORMRead


class CompanyCreate(BaseModel):
    """Schema for creating a new company."""

    name: str
    logo: Optional[str] = None
    description: Optional[str] = None


class CompanyUpdate(BaseModel):
    """Schema for updating a company. All fields optional."""

    name: Optional[str] = None
    logo: Optional[str] = None
    description: Optional[str] = None


class CompanyRead(ORMRead):
    name: str
    logo: Optional[str] = None
    description: Optional[str] = None


class ManagementCreate(BaseModel):
    """Schema for creating a management unit."""

    name: str
    company_id: int
    description: Optional[str] = None


class ManagementUpdate(BaseModel):
    name: Optional[str] = None
    company_id: Optional[int] = None
    description: Optional[str] = None


class ManagementRead(ORMRead):
    name: str
    company_id: int
    description: Optional[str] = None
