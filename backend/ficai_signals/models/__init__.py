"""ORM Models: SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Tag and URL catalogs are NOT tables: they are queries over Signal

Design Decisions:
    - One file per entity for locality
    - Associations are plain foreign keys queried with explicit joins; no
      relationship() attributes
    - All models imported here so Base.metadata is complete for Alembic and tests
"""

from ficai_signals.models.account import Account  # noqa: F401
from ficai_signals.models.account_session import AccountSession  # noqa: F401
from ficai_signals.models.signal import Signal  # noqa: F401
from ficai_signals.models.fic import Fic, FicUrlCache  # noqa: F401
