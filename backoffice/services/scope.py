"""
Visibility scope of the caller.

Staff roles see everything. A ``client`` sees the managements it is linked
to; a ``client_manager`` sees the companies it is linked to.
"""

from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from backoffice.core.dependencies import CurrentUser
from backoffice.repositories.management_repository import ManagementRepository
from backoffice.repositories.user_repository import UserRepository


@dataclass
class Scope:
    """``None`` means unrestricted."""

    management_ids: Optional[List[int]] = None
    company_ids: Optional[List[int]] = None


async def resolve_scope(db: AsyncSession, current_user: CurrentUser) -> Scope:
    users = UserRepository(db)
    if current_user.is_client:
        return Scope(management_ids=await users.management_ids(current_user.id))
    if current_user.is_client_manager:
        return Scope(company_ids=await users.company_ids(current_user.id))
    return Scope()


async def visible_company_ids(db: AsyncSession, current_user: CurrentUser) -> Optional[List[int]]:
    """Companies the caller may see, or ``None`` for staff."""
    scope = await resolve_scope(db, current_user)
    if scope.company_ids is not None:
        return scope.company_ids
    if scope.management_ids is not None:
        managements = await ManagementRepository(db).list(management_ids=scope.management_ids)
        return sorted({management.company_id for management in managements})
    return None
