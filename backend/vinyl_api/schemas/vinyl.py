"""Vinyl Schemas - Pydantic models for the vinyl/track API boundary.

Invariants:
    - JSON is camelCase (createdAt, vinylId, coverUrl); Python attributes are snake_case
    - Request bodies are permissive: declared fields are all optional, undeclared fields are
      kept as given and handed to the store, which accepts or rejects them
    - Only fields present in the body reach the store (partial writes)
    - VinylUpdateBody.to_update() yields FieldsOnly or FieldsWithTracks

Design Decisions:
    - No field-level rules (lengths, required fields): the store's constraints are the only
      validation, a missing title surfaces as a failed create
    - tracks=null is treated like an absent tracks key (existing tracks preserved)
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vinyl_api.core.vinyl_update import VinylUpdate, plan_update


class CamelModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _PassThroughBody(CamelModel):
    """Request body whose undeclared fields are forwarded to the store."""
    model_config = ConfigDict(extra="allow")

    def to_fields(self, exclude: frozenset[str] = frozenset()) -> dict[str, Any]:
        """Fields present in the body, snake_case for declared ones, as given for extras."""
        declared = type(self).model_fields
        fields = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name in declared and name not in exclude
        }
        fields.update(self.model_extra or {})
        return fields


# ─── Requests ────────────────────────────────────────────────────

class TrackCreate(_PassThroughBody):
    """Track payload - without id or parent (the vinyl comes from the path)."""
    side: str | None = None
    title: str | None = None
    position: int | None = None
    duration: str | None = None


class _VinylFields(_PassThroughBody):
    title: str | None = None
    artist: str | None = None
    genre: str | None = None
    year: int | None = None
    label: str | None = None
    country: str | None = None
    format: str | None = None
    condition: str | None = None
    cover_url: str | None = None
    notes: str | None = None
    tracks: list[TrackCreate] | None = None

    def track_fields(self) -> list[dict[str, Any]] | None:
        if self.tracks is None:
            return None
        return [t.to_fields() for t in self.tracks]

    def vinyl_fields(self) -> dict[str, Any]:
        return self.to_fields(exclude=frozenset({"tracks"}))


class VinylCreate(_VinylFields):
    """Vinyl creation - optional tracks are created with the vinyl."""


class VinylUpdateBody(_VinylFields):
    """Vinyl update - partial fields; tracks, when sent, replace all existing tracks."""

    def to_update(self) -> VinylUpdate:
        return plan_update(self.vinyl_fields(), self.track_fields())


# ─── Responses ───────────────────────────────────────────────────

class TrackResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    vinyl_id: str
    side: str | None = None
    title: str
    position: int | None = None
    duration: str | None = None


class VinylResponse(CamelModel):
    """Vinyl with its tracks, ordered by side."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    artist: str
    genre: str | None = None
    year: int | None = None
    label: str | None = None
    country: str | None = None
    format: str | None = None
    condition: str | None = None
    cover_url: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    tracks: list[TrackResponse] = []


class MessageResponse(BaseModel):
    message: str


class GenreCount(BaseModel):
    genre: str
    count: int


class YearCount(BaseModel):
    year: int | str
    count: int


class StatisticsResponse(CamelModel):
    """Collection aggregates - "Unknown" stands in for a missing genre or year."""
    total_vinyls: int
    vinyls_by_genre: list[GenreCount]
    vinyls_by_year: list[YearCount]
