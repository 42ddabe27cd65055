"""
Health router - liveness plus database and migration state.
"""

import logging
from pathlib import Path
from typing import Optional

from alembic.config import Config
from alembic.script import ScriptDirectory
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backoffice import __version__
from backoffice.core.config import settings
from backoffice.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class HealthStatus(BaseModel):
    app: str
    version: str
    api_ok: bool = True
    db_ok: bool
    alembic_head_ok: bool
    alembic_current: Optional[str] = None
    alembic_head: Optional[str] = None


def migration_head() -> Optional[str]:
    """Newest revision shipped in ``alembic/versions``, if the tree is present."""
    ini_path = PROJECT_ROOT / "alembic.ini"
    scripts_path = PROJECT_ROOT / "alembic"
    if not ini_path.exists() or not scripts_path.exists():
        return None

    config = Config(str(ini_path))
    config.set_main_option("script_location", str(scripts_path))
    return ScriptDirectory.from_config(config).get_current_head()


async def applied_revision(db: AsyncSession) -> Optional[str]:
    """Revision recorded in the database; ``None`` for schemas built without alembic."""
    try:
        result = await db.execute(text("SELECT version_num FROM alembic_version"))
    except SQLAlchemyError:
        await db.rollback()
        return None
    return result.scalar_one_or_none()


@router.get("/health", response_model=HealthStatus)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Unauthenticated. ``db_ok`` is false when the database cannot be reached."""
    db_ok = True
    current = None
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed: %s", exc)
        db_ok = False

    if db_ok:
        current = await applied_revision(db)

    head = migration_head()
    return HealthStatus(
        app=settings.APP_NAME,
        version=__version__,
        db_ok=db_ok,
        alembic_head_ok=bool(current and head and current == head),
        alembic_current=current,
        alembic_head=head,
    )
