"""Vinyl ORM - persists a record album, the aggregate root of the collection.

Invariants:
    - id is a string UUID primary key generated on insert, never updated
    - title and artist are non-nullable; every other descriptive field is optional
    - tracks are always loaded ordered by side, then position
    - deleting a Vinyl deletes its tracks (ORM cascade + ON DELETE CASCADE on the FK)

Design Decisions:
    - String(36) ids over native UUID columns: path ids compare as plain strings,
      an unknown or malformed id is simply "not found"
    - lazy="selectin" on tracks: every read returns the vinyl with its tracks without
      lazy-load IO in async context
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vinyl_api.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Vinyl(Base):
    """Vinyl entity - one album in the collection."""
    __tablename__ = "vinyls"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    artist: Mapped[str] = mapped_column(String(500), nullable=False)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Descriptive fields, stored as given
    label: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    format: Mapped[str | None] = mapped_column(String(50), nullable=True)
    condition: Mapped[str | None] = mapped_column(String(50), nullable=True)
    cover_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    # Relationships
    tracks: Mapped[list["Track"]] = relationship(
        "Track", back_populates="vinyl",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[Track.side, Track.position]",
    )
