"""Track ORM - persists one song on a side of a vinyl.

Invariants:
    - Always belongs to a Vinyl (vinyl_id FK, non-null, ON DELETE CASCADE)
    - side is the primary ordering key within a vinyl, position the secondary one

Design Decisions:
    - duration stored as free text ("3:45"): displayed, never computed on
"""

import uuid

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vinyl_api.db.base import Base


class Track(Base):
    """Track entity - a single song on a vinyl side."""
    __tablename__ = "tracks"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    vinyl_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vinyls.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    side: Mapped[str | None] = mapped_column(String(10), nullable=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(20), nullable=True)

    vinyl: Mapped["Vinyl"] = relationship(
        "Vinyl", back_populates="tracks",
    )
