"""SQLAlchemy Declarative Base for all Fic.AI Signals tables.

Invariants:
    - Every model inherits from Base; Base.metadata is what Alembic and the
      test fixtures build the schema from
    - A bare Mapped[datetime] column is timezone-aware
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }
