"""
Role-based permission helpers for the back-office.

Defines roles and the allow-lists used by route dependencies.
"""

from typing import Iterable


class Roles:
    """Standard roles in the back-office."""
    ADMIN = "admin"
    RECRUITER = "recruiter"
    CLIENT = "client"
    CLIENT_MANAGER = "client_manager"

    # All roles list for validation
    ALL = [ADMIN, RECRUITER, CLIENT, CLIENT_MANAGER]

    # Role capabilities matrix
    # admin: Full access to everything
    # recruiter: Processes, candidates, pipeline and invoices
    # client_manager: Reads scoped to linked companies, approves invoices
    # client: Reads scoped to linked managements
    INVOICE_APPROVERS = [ADMIN, CLIENT_MANAGER]


def check_role_permission(user_role: str, allowed_roles: Iterable[str]) -> bool:
    """
    Check if user's role is in the list of allowed roles.

    Args:
        user_role: The user's current role
        allowed_roles: Roles that are permitted

    Returns:
        True if user has permission, False otherwise
    """
    allowed = list(allowed_roles)
    if not user_role or not allowed:
        return False
    return user_role in allowed
