"""
Candidate model.

Represents a person who can be placed in processes and engaged by
management units.
"""

from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.candidate_process import CandidateProcess
    from backoffice.models.candidate_management import CandidateManagement


class Candidate(TimestampedModel):
    """
    Candidate table - a job seeker.

    Email and phone are used as a duplicate check on creation.
    """

    __tablename__ = "candidates"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )

    phone: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        index=True,
    )

    address: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    # Free-text profile summary (usually generated from the CV)
    profile_summary: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    total_experience: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    candidate_processes: Mapped[List["CandidateProcess"]] = relationship(
        "CandidateProcess",
        back_populates="candidate",
        cascade="all, delete-orphan",
    )

    candidate_managements: Mapped[List["CandidateManagement"]] = relationship(
        "CandidateManagement",
        back_populates="candidate",
        cascade="all, delete-orphan",
    )
