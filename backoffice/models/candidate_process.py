"""
CandidateProcess model.

Association of a candidate with a process, carrying the pipeline stage and
the recruiter's evaluation of the candidate for that process.
"""

from typing import Optional, Any, TYPE_CHECKING

from sqlalchemy import Integer, String, Text, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.candidate import Candidate
    from backoffice.models.process import Process


# Pipeline stages
STAGE_INTERVIEWS = "entrevistas"
STAGE_SELECTED = "seleccionado"
STAGE_DISCARDED = "descartado"


class CandidateProcess(TimestampedModel):
    """
    CandidateProcess table - one candidate inside one process.

    A candidate appears at most once per process.
    """

    __tablename__ = "candidate_process"

    __table_args__ = (
        UniqueConstraint("candidate_id", "process_id", name="uq_candidate_process_pair"),
    )

    candidate_id: Mapped[int] = mapped_column(
        ForeignKey("candidates.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    process_id: Mapped[int] = mapped_column(
        ForeignKey("process.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # 0-100
    match_percent: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    stage: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=STAGE_INTERVIEWS,
    )

    technical_skills: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    soft_skills: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # {"comment": ..., "techSkills": ..., "softSkills": ...}
    client_comments: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )

    interview_questions: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    candidate: Mapped["Candidate"] = relationship(
        "Candidate",
        back_populates="candidate_processes",
    )

    process: Mapped["Process"] = relationship(
        "Process",
        back_populates="candidate_processes",
    )
