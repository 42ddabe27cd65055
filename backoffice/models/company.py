"""
Company model.

Represents a client company that staffs its management units through us.
"""

from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.management import Management


class Company(TimestampedModel):
    """
    Company table - represents a client company.

    A company is split into management units, which own the processes.
    """

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Logo as a URL or base64 data URI
    logo: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    managements: Mapped[List["Management"]] = relationship(
        "Management",
        back_populates="company",
    )
