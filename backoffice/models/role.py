"""
Role model.

Named access level assigned to users (admin, recruiter, client,
client_manager).
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from backoffice.models.base_model import TimestampedModel


class Role(TimestampedModel):
    """Role table."""

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
    )
