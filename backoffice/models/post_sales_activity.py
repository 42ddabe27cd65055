"""
PostSalesActivity model.

A periodic evaluation of a placed professional.
"""

from datetime import date as date_type
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Integer, Text, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.candidate_management import CandidateManagement


class PostSalesActivity(TimestampedModel):
    """PostSalesActivity table - four scores plus free-text follow-up notes."""

    __tablename__ = "post_sales_activities"

    candidate_management_id: Mapped[int] = mapped_column(
        ForeignKey("candidate_management.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    date: Mapped[Optional[date_type]] = mapped_column(
        Date,
        nullable=True,
    )

    eval_stack: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    eval_communication: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    eval_motivation: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    eval_compliance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    benefit: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    client_comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    actions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    projection: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    candidate_management: Mapped["CandidateManagement"] = relationship(
        "CandidateManagement",
        back_populates="post_sales_activities",
    )
