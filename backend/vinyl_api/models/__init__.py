"""ORM Models - SQLAlchemy declarative models for the collection.

Invariants:
    - All models inherit from Base (db/base.py)
    - Vinyl is the aggregate root; every Track is scoped by vinyl_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from vinyl_api.models.vinyl import Vinyl  # noqa: F401
from vinyl_api.models.track import Track  # noqa: F401
