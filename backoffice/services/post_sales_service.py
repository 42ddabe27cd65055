"""
Post-sales evaluation business logic service.

Each evaluation scores a placed professional on four axes. The engagement's
``rate`` is the mean of the per-evaluation means, recomputed from every
stored evaluation whenever a new one is appended.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.errors import NotFoundError
from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.repositories.candidate_management_repository import CandidateManagementRepository
from backoffice.repositories.post_sales_repository import PostSalesRepository
from backoffice.schemas.candidate_management import (
    PostSalesActivityCreate,
    PostSalesActivityCreated,
    PostSalesActivityRead,
)

logger = logging.getLogger(__name__)

# scale of candidate_management.rate
RATE_QUANTUM = Decimal("0.000001")


def evaluation_mean(scores: Sequence[int]) -> Decimal:
    """Mean of one evaluation's scores."""
    if not scores:
        return Decimal("0")
    return Decimal(sum(scores)) / Decimal(len(scores))


def rolling_rate(evaluations: Iterable[Sequence[int]]) -> Decimal:
    """
    Mean of the per-evaluation means (0 when there are none).

    Exact whenever the mean terminates within six decimal places; otherwise
    rounded half-up to the stored scale.
    """
    means = [evaluation_mean(scores) for scores in evaluations]
    if not means:
        return Decimal("0")
    average = sum(means, Decimal("0")) / Decimal(len(means))
    return average.quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP)


class PostSalesService:
    """Service for post-sales evaluations."""

    def __init__(self, db: AsyncSession):
        self.repository = PostSalesRepository(db)
        self.candidate_management_repository = CandidateManagementRepository(db)

    async def list_activities(self, candidate_management_id: Optional[int] = None) -> List[PostSalesActivity]:
        return await self.repository.list(candidate_management_id=candidate_management_id)

    async def add_activity(self, data: PostSalesActivityCreate) -> PostSalesActivityCreated:
        """
        Store an evaluation and refresh the engagement's rolling rate.

        Raises:
            NotFoundError: unknown engagement
        """
        engagement = await self.candidate_management_repository.get_by_id(data.candidate_management_id)
        if not engagement:
            raise NotFoundError(f"Candidate-management {data.candidate_management_id} not found")

        activity = await self.repository.create(data)
        scores = await self.repository.list_scores(engagement.id)
        rate = rolling_rate(scores)
        await self.candidate_management_repository.set_rate(engagement, rate)

        logger.info(
            "Recomputed rate of candidate-management %s over %d evaluation(s): %s",
            engagement.id,
            len(scores),
            rate,
        )
        return PostSalesActivityCreated(
            **PostSalesActivityRead.model_validate(activity).model_dump(),
            rate=rate,
        )
