"""
CandidateManagement model.

An engagement: a candidate placed in a management unit after a process
closes (or registered directly).
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Date, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.candidate import Candidate
    from backoffice.models.management import Management
    from backoffice.models.post_sales_activity import PostSalesActivity


ENGAGEMENT_ACTIVE = "activo"
ENGAGEMENT_ENDED = "desvinculado"


class CandidateManagement(TimestampedModel):
    """
    CandidateManagement table - a placed professional.

    ``rate`` holds the rolling average of the post-sale evaluations.
    """

    __tablename__ = "candidate_management"

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    management_id: Mapped[int] = mapped_column(
        ForeignKey("management.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=ENGAGEMENT_ACTIVE,
    )

    start_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    end_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    position: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(16, 6),
        nullable=True,
    )

    candidate: Mapped["Candidate"] = relationship(
        "Candidate",
        back_populates="candidate_managements",
    )

    management: Mapped["Management"] = relationship("Management")

    post_sales_activities: Mapped[List["PostSalesActivity"]] = relationship(
        "PostSalesActivity",
        back_populates="candidate_management",
        cascade="all, delete-orphan",
    )
