"""
Company repository - database operations for Company.
"""

from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate_management import CandidateManagement
from backoffice.models.candidate_process import CandidateProcess
from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.models.pre_invoice import PreInvoice, PreInvoiceItem
from backoffice.models.process import Process
from backoffice.models.user import UserCompany, UserManagement
from backoffice.schemas.company import CompanyCreate, CompanyUpdate


class CompanyRepository:
    """Repository for Company database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, company_ids: Optional[List[int]] = None) -> List[Company]:
        """List companies alphabetically, optionally restricted to ``company_ids``."""
        query = select(Company)
        if company_ids is not None:
            query = query.where(Company.id.in_(company_ids))
        query = query.order_by(Company.name.asc(), Company.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_first(self) -> Optional[Company]:
        """Get the alphabetically first company."""
        result = await self.db.execute(
            select(Company).order_by(Company.name.asc(), Company.id.asc()).limit(1)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, company_id: int) -> Optional[Company]:
        result = await self.db.execute(
            select(Company).where(Company.id == company_id)
        )
        return result.scalar_one_or_none()

    async def create(self, data: CompanyCreate) -> Company:
        """Create a new company."""
        company = Company(**data.model_dump())
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def update(self, company_id: int, data: CompanyUpdate) -> Optional[Company]:
        """Update a company."""
        company = await self.get_by_id(company_id)
        if not company:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(company, field, value)

        company.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(company)
        return company

    async def delete_with_dependents(self, company: Company) -> None:
        """
        Delete a company and everything hanging off it.

        Managements, their processes and pipeline rows, engagements and their
        evaluations, pre-invoices and their items, and user links go with it.
        Candidates are kept.
        """
        management_ids = select(Management.id).where(Management.company_id == company.id)
        process_ids = select(Process.id).where(Process.management_id.in_(management_ids))
        engagement_ids = select(CandidateManagement.id).where(
            CandidateManagement.management_id.in_(management_ids)
        )
        invoice_ids = select(PreInvoice.id).where(PreInvoice.company_id == company.id)

        await self.db.execute(
            delete(CandidateProcess).where(CandidateProcess.process_id.in_(process_ids))
        )
        await self.db.execute(
            delete(PostSalesActivity).where(
                PostSalesActivity.candidate_management_id.in_(engagement_ids)
            )
        )
        await self.db.execute(
            delete(CandidateManagement).where(CandidateManagement.management_id.in_(management_ids))
        )
        await self.db.execute(
            delete(UserManagement).where(UserManagement.management_id.in_(management_ids))
        )
        await self.db.execute(
            delete(Process).where(Process.management_id.in_(management_ids))
        )
        await self.db.execute(
            delete(PreInvoiceItem).where(PreInvoiceItem.pre_invoice_id.in_(invoice_ids))
        )
        await self.db.execute(delete(PreInvoice).where(PreInvoice.company_id == company.id))
        await self.db.execute(delete(Management).where(Management.company_id == company.id))
        await self.db.execute(delete(UserCompany).where(UserCompany.company_id == company.id))
        await self.db.execute(delete(Company).where(Company.id == company.id))
        await self.db.flush()
