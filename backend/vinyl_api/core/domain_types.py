"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - VinylId wraps the store-generated string UUIDs
    - Sort direction is an Enum - no raw string matching outside core/

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

VinylId = NewType("VinylId", str)


# ─── Enums ───────────────────────────────────────────────────────

class SortOrder(str, Enum):
    """Sort direction for vinyl listings."""
    ASC = "asc"
    DESC = "desc"


UNKNOWN_LABEL = "Unknown"
