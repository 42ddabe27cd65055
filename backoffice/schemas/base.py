"""
Base Pydantic schemas with common fields.

These are templates that other schemas inherit from.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, PlainSerializer

T = TypeVar("T")


def _money_to_str(value: Decimal) -> str:
    # "595.00" -> "595", "12.50" -> "12.5"
    return format(value.normalize(), "f")


# Decimal on the inside, plain string at the JSON boundary
Money = Annotated[Decimal, PlainSerializer(_money_to_str, return_type=str, when_used="json")]


class ORMRead(BaseModel):
    """
    Base schema for reading stored records.

    Includes all the auto-generated fields like id, timestamps, etc.
    """

    id: int
    created_at: datetime
    updated_at: datetime

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True)


class Page(BaseModel, Generic[T]):
    """Pagination envelope: ``total`` matching rows plus the requested ``batch``."""

    total: int
    batch: List[T]


class MessageResponse(BaseModel):
    message: str
