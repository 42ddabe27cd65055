"""
Management model.

An organizational sub-division of a client company. Owns processes and
the engagements (candidate_management rows) staffed into it.
"""

from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.company import Company


class Management(TimestampedModel):
    """Management table - a unit inside a company."""

    __tablename__ = "management"

    company_id: Mapped[int] = mapped_column(
        ForeignKey("company.id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="managements",
    )
