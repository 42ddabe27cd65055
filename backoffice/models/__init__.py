"""
SQLAlchemy models package.

Import all models here so Alembic can detect them.
"""

from backoffice.db.base import Base
from backoffice.models.base_model import TimestampedModel
from backoffice.models.company import Company
from backoffice.models.management import Management
from backoffice.models.process import Process
from backoffice.models.candidate import Candidate
from backoffice.models.candidate_process import CandidateProcess
from backoffice.models.candidate_management import CandidateManagement
from backoffice.models.post_sales_activity import PostSalesActivity
from backoffice.models.pre_invoice import PreInvoice, PreInvoiceItem
from backoffice.models.role import Role
from backoffice.models.user import User, UserCompany, UserManagement

__all__ = [
    "Base",
    "TimestampedModel",
    "Company",
    "Management",
    "Process",
    "Candidate",
    "CandidateProcess",
    "CandidateManagement",
    "PostSalesActivity",
    "PreInvoice",
    "PreInvoiceItem",
    "Role",
    "User",
    "UserCompany",
    "UserManagement",
]
