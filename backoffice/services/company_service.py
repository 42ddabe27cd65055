"""
Company and Management business logic services.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import NotFoundError
from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.user import User
from backoffice.repositories.company_repository import CompanyRepository
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    ManagementCreate,
    ManagementUpdate,
)

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for company business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = CompanyRepository(db)

    async def list_companies(self, company_ids: Optional[List[int]] = None) -> List[Company]:
        return await self.repository.list(company_ids=company_ids)

    async def get_first_company(self) -> Company:
        company = await self.repository.get_first()
        if not company:
            raise NotFoundError("No companies found")
        return company

    async def get_company(self, company_id: int) -> Company:
        company = await self.repository.get_by_id(company_id)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    async def create_company(self, data: CompanyCreate) -> Company:
        return await self.repository.create(data)

    async def update_company(self, company_id: int, data: CompanyUpdate) -> Company:
        company = await self.repository.update(company_id, data)
        if not company:
            raise NotFoundError(f"Company {company_id} not found")
        return company

    async def delete_company(self, company_id: int) -> None:
        """Delete a company with its managements, processes, engagements and invoices."""
        company = await self.get_company(company_id)
        await self.repository.delete_with_dependents(company)
        logger.info("Deleted company %s with its dependents", company_id)


class ManagementService:
    """Service for management-unit business logic."""

    def __init__(self, db: AsyncSession):
        self.repository = ManagementRepository(db)
        self.company_repository = CompanyRepository(db)

    async def list_managements(
        self,
        company_id: Optional[int] = None,
        management_ids: Optional[List[int]] = None,
        company_ids: Optional[List[int]] = None,
    ) -> List[Management]:
        return await self.repository.list(
            company_id=company_id,
            management_ids=management_ids,
            company_ids=company_ids,
        )

    async def get_management(self, management_id: int) -> Management:
        management = await self.repository.get_by_id(management_id)
        if not management:
            raise NotFoundError(f"Management {management_id} not found")
        return management

    async def create_management(self, data: ManagementCreate) -> Management:
        if not await self.company_repository.get_by_id(data.company_id):
            raise NotFoundError(f"Company {data.company_id} not found")
        return await self.repository.create(data)

    async def update_management(self, management_id: int, data: ManagementUpdate) -> Management:
        if data.company_id is not None and not await self.company_repository.get_by_id(data.company_id):
            raise NotFoundError(f"Company {data.company_id} not found")
        management = await self.repository.update(management_id, data)
        if not management:
            raise NotFoundError(f"Management {management_id} not found")
        return management

    async def delete_management(self, management_id: int) -> None:
        management = await self.get_management(management_id)
        await self.repository.delete_with_dependents(management)
        logger.info("Deleted management %s with its dependents", management_id)

    async def list_users(self, management_id: int) -> List[User]:
        await self.get_management(management_id)
        return await self.repository.list_users(management_id)
