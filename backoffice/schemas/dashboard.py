"""
Dashboard Pydantic schemas.
"""

from typing import List

from pydantic import BaseModel, Field


class CloseTimeHistory(BaseModel):
    """Average close time in days per closing month (``YYYY-MM``)."""

    labels: List[str] = Field(default_factory=list)
    values: List[int] = Field(default_factory=list)


class DashboardStats(BaseModel):
    active_processes: int
    closed_processes: int
    closed_this_quarter: int
    active_professionals: int
    average_close_days: int
    close_time_history: CloseTimeHistory
    days_since_last_active_process: int
