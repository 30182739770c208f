"""Vinyl Routes - list, read, create, update and delete vinyls and append tracks.

Invariants:
    - Each handler issues its store calls sequentially, each attempted once
    - Id-addressed mutations check existence first: a missing vinyl is a 404 and nothing is written
    - Store failures and mis-shaped bodies come back as 500 {error, details} with an
      operation-specific message
    - Returned vinyls always carry their tracks ordered by side

Design Decisions:
    - Thin handlers: query building lives in core/vinyl_query, update variants in
      core/vinyl_update, SQL in infrastructure/vinyl_repository
    - PUT replaces tracks only for FieldsWithTracks; FieldsOnly leaves them untouched
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from vinyl_api.api.routes.vinyl_helpers import (
    ensure_vinyl_exists, get_vinyl_repository, parse_body, store_operation,
)
from vinyl_api.core.domain_types import VinylId
from vinyl_api.core.errors import VinylNotFoundError
from vinyl_api.core.repository_protocols import VinylStore
from vinyl_api.core.vinyl_query import build_vinyl_query
from vinyl_api.core.vinyl_update import replaces_tracks
from vinyl_api.schemas.vinyl import (
    MessageResponse, TrackCreate, TrackResponse,
    VinylCreate, VinylResponse, VinylUpdateBody,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vinyls", tags=["vinyls"])


@router.get("", response_model=list[VinylResponse])
async def list_vinyls(
    genre: str | None = Query(None),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    order: str | None = Query(None),
    store: VinylStore = Depends(get_vinyl_repository),
):
    """List vinyls, filtered by genre and/or title/artist search, sorted by any listed field."""
    async with store_operation("GET /vinyls", "Failed to fetch vinyls"):
        query = build_vinyl_query(
            genre=genre, search=search, sort_by=sort_by, order=order,
        )
        return await store.list_vinyls(query)


@router.get("/{vinyl_id}", response_model=VinylResponse)
async def get_vinyl(
    vinyl_id: str, store: VinylStore = Depends(get_vinyl_repository),
):
    async with store_operation("GET /vinyls/:id", "Failed to fetch vinyl"):
        vinyl = await store.get(VinylId(vinyl_id))
        if vinyl is None:
            raise VinylNotFoundError(vinyl_id)
        return vinyl


@router.post(
    "", response_model=VinylResponse, status_code=status.HTTP_201_CREATED,
)
async def create_vinyl(
    payload: Any = Body(None),
    store: VinylStore = Depends(get_vinyl_repository),
):
    """Create a vinyl; tracks in the body are created with it."""
    async with store_operation("POST /vinyls", "Failed to create vinyl"):
        body = parse_body(VinylCreate, payload)
        return await store.create(body.vinyl_fields(), body.track_fields())


@router.put("/{vinyl_id}", response_model=VinylResponse)
async def update_vinyl(
    vinyl_id: str,
    payload: Any = Body(None),
    store: VinylStore = Depends(get_vinyl_repository),
):
    """Update a vinyl. Sending tracks replaces every existing track."""
    async with store_operation("PUT /vinyls/:id", "Failed to update vinyl"):
        await ensure_vinyl_exists(store, VinylId(vinyl_id))
        update = parse_body(VinylUpdateBody, payload).to_update()
        if replaces_tracks(update):
            logger.info(
                "Replacing all tracks", extra={"vinyl_id": vinyl_id},
            )
        return await store.update(VinylId(vinyl_id), update)


@router.delete("/{vinyl_id}", response_model=MessageResponse)
async def delete_vinyl(
    vinyl_id: str, store: VinylStore = Depends(get_vinyl_repository),
):
    async with store_operation("DELETE /vinyls/:id", "Failed to delete vinyl"):
        await ensure_vinyl_exists(store, VinylId(vinyl_id))
        await store.delete(VinylId(vinyl_id))
        return MessageResponse(message="Vinyl deleted successfully")


@router.post(
    "/{vinyl_id}/tracks",
    response_model=TrackResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_track(
    vinyl_id: str,
    payload: Any = Body(None),
    store: VinylStore = Depends(get_vinyl_repository),
):
    """Append one track to an existing vinyl."""
    async with store_operation("POST /vinyls/:id/tracks", "Failed to add track"):
        await ensure_vinyl_exists(store, VinylId(vinyl_id))
        body = parse_body(TrackCreate, payload)
        return await store.add_track(VinylId(vinyl_id), body.to_fields())
