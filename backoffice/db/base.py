"""
SQLAlchemy declarative base.

Every back-office table registers on ``Base.metadata``, which is what
Alembic and the test fixtures build the schema from.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
