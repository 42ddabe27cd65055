"""
Dashboard aggregation service.

Read-only. Durations are measured from ``opened_at`` to ``closed_at`` in
whole days, never less than one day per process.
"""

import logging
from collections import OrderedDict
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.config import settings
from backoffice.repositories.dashboard_repository import DashboardRepository
from backoffice.schemas.dashboard import CloseTimeHistory, DashboardStats
from backoffice.utils.time import as_utc, months_ago, utc_now

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "activo"
CLOSED_STATUS = "cerrado"

SECONDS_PER_DAY = 24 * 60 * 60


def close_days(opened_at: datetime, closed_at: datetime) -> int:
    """Whole days a process stayed open, clamped to at least one."""
    elapsed = (as_utc(closed_at) - as_utc(opened_at)).total_seconds()
    return max(1, round(elapsed / SECONDS_PER_DAY))


def average_close_days(periods: Iterable[Tuple[datetime, datetime]]) -> int:
    durations = [close_days(opened_at, closed_at) for opened_at, closed_at in periods]
    if not durations:
        return 0
    return round(sum(durations) / len(durations))


def close_time_history(periods: Iterable[Tuple[datetime, datetime]]) -> CloseTimeHistory:
    """Average close time per closing month, oldest month first."""
    by_month: "OrderedDict[str, List[int]]" = OrderedDict()
    for opened_at, closed_at in sorted(periods, key=lambda period: as_utc(period[1])):
        label = as_utc(closed_at).strftime("%Y-%m")
        by_month.setdefault(label, []).append(close_days(opened_at, closed_at))

    return CloseTimeHistory(
        labels=list(by_month),
        values=[round(sum(days) / len(days)) for days in by_month.values()],
    )


class DashboardService:
    """Service computing the dashboard counters."""

    def __init__(self, db: AsyncSession):
        self.repository = DashboardRepository(db)

    async def get_stats(
        self,
        company_id: Optional[int] = None,
        management_id: Optional[int] = None,
    ) -> DashboardStats:
        scope = dict(company_id=company_id, management_id=management_id)
        now = utc_now()

        active = await self.repository.count_processes(ACTIVE_STATUS, **scope)
        closed = await self.repository.count_processes(CLOSED_STATUS, closed_only=True, **scope)
        closed_quarter = await self.repository.count_processes(
            CLOSED_STATUS,
            closed_since=months_ago(now, 3),
            **scope,
        )
        professionals = await self.repository.count_active_professionals(**scope)

        recent = await self.repository.closed_periods(
            CLOSED_STATUS,
            limit=settings.DASHBOARD_CLOSE_SAMPLE,
            **scope,
        )
        history = await self.repository.closed_periods(CLOSED_STATUS, **scope)

        last_opened = await self.repository.latest_opened_at(ACTIVE_STATUS, **scope)
        days_since_last = 0
        if last_opened is not None:
            days_since_last = max(0, (now - as_utc(last_opened)).days)

        logger.debug(
            "Dashboard stats computed (company=%s, management=%s)", company_id, management_id
        )
        return DashboardStats(
            active_processes=active,
            closed_processes=closed,
            closed_this_quarter=closed_quarter,
            active_professionals=professionals,
            average_close_days=average_close_days(recent),
            close_time_history=close_time_history(history),
            days_since_last_active_process=days_since_last,
        )
