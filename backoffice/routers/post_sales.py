"""
Post-sales router - evaluations of placed professionals.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser, require_role
from backoffice.core.permissions import Roles
from backoffice.db.session import get_db
from backoffice.schemas.candidate_management import (
    PostSalesActivityCreate,
    PostSalesActivityCreated,
    PostSalesActivityRead,
)
from backoffice.services.post_sales_service import PostSalesService

router = APIRouter(prefix="/post-sales-activities", tags=["post-sales"])


@router.get("", response_model=List[PostSalesActivityRead])
async def list_post_sales_activities(
    candidate_management_id: Optional[int] = None,
    current_user: CurrentUser = Depends(require_role()),
    db: AsyncSession = Depends(get_db),
):
    service = PostSalesService(db)
    return await service.list_activities(candidate_management_id=candidate_management_id)


@router.post("", response_model=PostSalesActivityCreated, status_code=status.HTTP_201_CREATED)
async def create_post_sales_activity(
    data: PostSalesActivityCreate,
    current_user: CurrentUser = Depends(require_role(Roles.ADMIN, Roles.RECRUITER)),
    db: AsyncSession = Depends(get_db),
):
    """
    Record an evaluation.

    The engagement's ``rate`` becomes the average, over all its evaluations,
    of each evaluation's mean score; it is stored with the new row.
    """
    service = PostSalesService(db)
    created = await service.add_activity(data)
    await db.commit()
    return created
