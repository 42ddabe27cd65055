"""
User model and user scoping links.

Users log in with email/password. Client-side users only see the
companies / managements they are linked to.
"""

from typing import Optional, TYPE_CHECKING

from sqlalchemy import String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backoffice.models.base_model import TimestampedModel

if TYPE_CHECKING:
    from backoffice.models.role import Role
    from backoffice.models.company import Company
    from backoffice.models.management import Management


class User(TimestampedModel):
    """User table - authentication and authorization."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    position: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    avatar: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    role_id: Mapped[int] = mapped_column(
        ForeignKey("roles.id"),
        nullable=False,
    )

    # Optional: users invited by email may not have a password yet
    hashed_password: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    role: Mapped["Role"] = relationship("Role")


class UserCompany(TimestampedModel):
    """Links a client_manager user to a company."""

    __tablename__ = "users_company"

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", name="uq_users_company_pair"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company_id: Mapped[int] = mapped_column(
        ForeignKey("company.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    company: Mapped["Company"] = relationship("Company")


class UserManagement(TimestampedModel):
    """Links a client user to a management unit."""

    __tablename__ = "users_management"

    __table_args__ = (
        UniqueConstraint("user_id", "management_id", name="uq_users_management_pair"),
    )

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    management_id: Mapped[int] = mapped_column(
        ForeignKey("management.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    management: Mapped["Management"] = relationship("Management")
    user: Mapped["User"] = relationship("User")
