"""
Dashboard router - aggregate counters for the landing page.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.db.session import get_db
from backoffice.schemas.dashboard import DashboardStats
from backoffice.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    company_id: Optional[int] = None,
    management_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = DashboardService(db)
    return await service.get_stats(company_id=company_id, management_id=management_id)
