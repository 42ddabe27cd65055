"""
Process model.

Represents a job requisition opened by a management unit.
"""

from datetime import datetime
from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.management import Management
    from backoffice.models.candidate_process import CandidateProcess


# Status written when a process is closed
PROCESS_CLOSED_STATUS = "Cerrado"


class Process(TimestampedModel):
    """
    Process table - a job opening candidates are recruited for.

    Deleting a process removes its candidate_process associations.
    """

    __tablename__ = "process"

    # Job title (e.g., "Backend Developer")
    job_offer: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    job_offer_description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    management_id: Mapped[int] = mapped_column(
        ForeignKey("management.id"),
        nullable=False,
        index=True,
    )

    opened_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    closed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    pre_filtered: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Free text: "activo", "pendiente", "Cerrado", ...
    status: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )

    management: Mapped["Management"] = relationship("Management")

    candidate_processes: Mapped[List["CandidateProcess"]] = relationship(
        "CandidateProcess",
        back_populates="process",
        cascade="all, delete-orphan",
    )
