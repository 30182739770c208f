"""Vinyl Repository - SQLAlchemy implementation of the VinylStore protocol.

Invariants:
    - One AsyncSession per repository (per request); calls run sequentially
    - Reads always include tracks ordered by side, then position
    - Every store call is attempted once; failures propagate to the route boundary
    - update() on FieldsWithTracks deletes all tracks of the vinyl before inserting the new set
    - update() rejects unknown field names and bad track payloads before deleting anything

Design Decisions:
    - Direct Vinyl/Track references (no entity lookup by name)
    - Existence checks select only the primary key: the vinyl is not pulled into the
      identity map before a bulk track delete, so its tracks collection is never stale
    - Reads after writes use populate_existing so returned tracks come back in store order
"""

import logging
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vinyl_api.core.domain_types import SortOrder, VinylId
from vinyl_api.core.vinyl_query import VinylQuery
from vinyl_api.core.vinyl_update import FieldsOnly, FieldsWithTracks, VinylUpdate
from vinyl_api.models.track import Track
from vinyl_api.models.vinyl import Vinyl

logger = logging.getLogger(__name__)

_UPDATABLE_COLUMNS = frozenset(Vinyl.__table__.columns.keys()) - {"id"}


class VinylRepository:
    """Vinyl and track persistence over one async session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Reads ───────────────────────────────────────────────────

    async def list_vinyls(self, query: VinylQuery) -> list[Vinyl]:
        stmt = select(Vinyl)
        if query.genre:
            stmt = stmt.where(Vinyl.genre == query.genre)
        if query.search:
            stmt = stmt.where(or_(
                Vinyl.title.icontains(query.search, autoescape=True),
                Vinyl.artist.icontains(query.search, autoescape=True),
            ))
        column = getattr(Vinyl, query.sort_field)
        stmt = stmt.order_by(
            column.asc() if query.sort_order is SortOrder.ASC else column.desc(),
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, vinyl_id: VinylId) -> Vinyl | None:
        result = await self._db.execute(
            select(Vinyl)
            .where(Vinyl.id == vinyl_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def exists(self, vinyl_id: VinylId) -> bool:
        result = await self._db.execute(
            select(Vinyl.id).where(Vinyl.id == vinyl_id),
        )
        return result.scalar_one_or_none() is not None

    # ─── Writes ──────────────────────────────────────────────────

    async def create(
        self, fields: dict[str, Any], tracks: list[dict[str, Any]] | None,
    ) -> Vinyl:
        """Insert a vinyl; tracks, when given, are inserted in the same flush."""
        vinyl = Vinyl(**fields)
        if tracks is not None:
            vinyl.tracks = [Track(**t) for t in tracks]
        self._db.add(vinyl)
        await self._db.commit()
        logger.info(
            f"Created vinyl with {len(tracks or [])} track(s)",
            extra={"vinyl_id": vinyl.id},
        )
        return await self.get(VinylId(vinyl.id))

    async def update(self, vinyl_id: VinylId, update: VinylUpdate) -> Vinyl:
        """Apply an update to an existing vinyl. Caller has checked existence."""
        unknown = sorted(set(update.fields) - _UPDATABLE_COLUMNS)
        if unknown:
            raise TypeError(f"Not updatable Vinyl field(s): {', '.join(unknown)}")

        match update:
            case FieldsWithTracks(tracks=tracks):
                new_tracks = [Track(**t) for t in tracks]
                await self.delete_tracks(vinyl_id)
            case FieldsOnly():
                new_tracks = None

        vinyl = await self.get(vinyl_id)
        if vinyl is None:
            raise LookupError(f"Vinyl '{vinyl_id}' disappeared during update")
        for name, value in update.fields.items():
            setattr(vinyl, name, value)
        if new_tracks is not None:
            vinyl.tracks.extend(new_tracks)
        await self._db.commit()
        return await self.get(vinyl_id)

    async def delete(self, vinyl_id: VinylId) -> None:
        """Delete a vinyl; its tracks go with it."""
        vinyl = await self.get(vinyl_id)
        if vinyl is None:
            return
        await self._db.delete(vinyl)
        await self._db.commit()

    async def delete_tracks(self, vinyl_id: VinylId) -> int:
        result = await self._db.execute(
            delete(Track).where(Track.vinyl_id == vinyl_id),
        )
        return result.rowcount

    async def add_track(
        self, vinyl_id: VinylId, fields: dict[str, Any],
    ) -> Track:
        track = Track(**{**fields, "vinyl_id": vinyl_id})
        self._db.add(track)
        await self._db.commit()
        await self._db.refresh(track)
        return track

    # ─── Aggregates ──────────────────────────────────────────────

    async def count(self) -> int:
        result = await self._db.execute(select(func.count(Vinyl.id)))
        return result.scalar_one()

    async def count_by_genre(self) -> list[tuple[str | None, int]]:
        result = await self._db.execute(
            select(Vinyl.genre, func.count(Vinyl.id))
            .group_by(Vinyl.genre)
            .order_by(Vinyl.genre.asc().nulls_last()),
        )
        return [(genre, count) for genre, count in result.all()]

    async def count_by_year(self) -> list[tuple[int | None, int]]:
        result = await self._db.execute(
            select(Vinyl.year, func.count(Vinyl.id))
            .group_by(Vinyl.year)
            .order_by(Vinyl.year.desc().nulls_last()),
        )
        return [(year, count) for year, count in result.all()]
