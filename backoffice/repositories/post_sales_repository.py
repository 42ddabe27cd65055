"""
PostSalesActivity repository - database operations for evaluations.
"""

from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.schemas.candidate_management import PostSalesActivityCreate


class PostSalesRepository:
    """Repository for PostSalesActivity database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, candidate_management_id: Optional[int] = None) -> List[PostSalesActivity]:
        query = select(PostSalesActivity)
        if candidate_management_id is not None:
            query = query.where(PostSalesActivity.candidate_management_id == candidate_management_id)
        query = query.order_by(PostSalesActivity.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create(self, data: PostSalesActivityCreate) -> PostSalesActivity:
        activity = PostSalesActivity(**data.model_dump())
        self.db.add(activity)
        await self.db.flush()
        await self.db.refresh(activity)
        return activity

    async def list_scores(self, candidate_management_id: int) -> List[Tuple[int, int, int, int]]:
        """The four scores of every evaluation of an engagement."""
        result = await self.db.execute(
            select(
                PostSalesActivity.eval_stack,
                PostSalesActivity.eval_communication,
                PostSalesActivity.eval_motivation,
                PostSalesActivity.eval_compliance,
            )
            .where(PostSalesActivity.candidate_management_id == candidate_management_id)
            .order_by(PostSalesActivity.id.asc())
        )
        return [tuple(row) for row in result.all()]
