"""
CandidateProcess repository - database operations for pipeline rows.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func

from backoffice.models.candidate_process import CandidateProcess


class CandidateProcessRepository:
    """Repository for CandidateProcess database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(
        self,
        process_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
    ) -> List[CandidateProcess]:
        query = select(CandidateProcess)
        if process_id is not None:
            query = query.where(CandidateProcess.process_id == process_id)
        if candidate_id is not None:
            query = query.where(CandidateProcess.candidate_id == candidate_id)
        query = query.order_by(CandidateProcess.id.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, row_id: int) -> Optional[CandidateProcess]:
        result = await self.db.execute(
            select(CandidateProcess).where(CandidateProcess.id == row_id)
        )
        return result.scalar_one_or_none()

    async def get_in_process(self, row_id: int, process_id: int) -> Optional[CandidateProcess]:
        """Get a pipeline row by id, only if it belongs to ``process_id``."""
        result = await self.db.execute(
            select(CandidateProcess).where(
                CandidateProcess.id == row_id,
                CandidateProcess.process_id == process_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_pair(self, candidate_id: int, process_id: int) -> Optional[CandidateProcess]:
        """Get the row linking ``candidate_id`` to ``process_id``."""
        result = await self.db.execute(
            select(CandidateProcess)
            .where(
                CandidateProcess.candidate_id == candidate_id,
                CandidateProcess.process_id == process_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_by_stage(self, process_id: int, stage: str) -> List[CandidateProcess]:
        result = await self.db.execute(
            select(CandidateProcess)
            .where(
                CandidateProcess.process_id == process_id,
                CandidateProcess.stage == stage,
            )
            .order_by(CandidateProcess.id.asc())
        )
        return list(result.scalars().all())

    async def create(self, **fields: Any) -> CandidateProcess:
        row = CandidateProcess(**fields)
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def update_fields(self, row: CandidateProcess, values: Dict[str, Any]) -> CandidateProcess:
        for field, value in values.items():
            setattr(row, field, value)

        row.updated_at = func.now()
        await self.db.flush()
        await self.db.refresh(row)
        return row

    async def set_stage(self, candidate_id: int, process_id: int, stage: str) -> int:
        """
        Set the stage of the (candidate, process) row.

        Returns the number of rows matched.
        """
        result = await self.db.execute(
            update(CandidateProcess)
            .where(
                CandidateProcess.candidate_id == candidate_id,
                CandidateProcess.process_id == process_id,
            )
            .values(stage=stage, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete(self, row: CandidateProcess) -> None:
        await self.db.delete(row)
        await self.db.flush()

    async def delete_for_process(self, process_id: int) -> int:
        """Delete every pipeline row of a process. Returns how many were removed."""
        result = await self.db.execute(
            delete(CandidateProcess)
            .where(CandidateProcess.process_id == process_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.flush()
        return result.rowcount
