"""Boundary Protocols - contract between the routes and the relational store.

Invariants:
    - Routes depend on VinylStore, never on a concrete session or engine
    - All store operations are async because implementations do IO
    - Every call is attempted exactly once - no retries behind this contract

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Returns ORM-shaped objects (attribute access); routes serialize them via schemas
"""

from typing import Any, Protocol

from vinyl_api.core.domain_types import VinylId
from vinyl_api.core.vinyl_query import VinylQuery
from vinyl_api.core.vinyl_update import VinylUpdate


class VinylStore(Protocol):
    """Contract for vinyl/track persistence - implemented by infrastructure."""
    async def list_vinyls(self, query: VinylQuery) -> list[Any]: ...
    async def get(self, vinyl_id: VinylId) -> Any | None: ...
    async def exists(self, vinyl_id: VinylId) -> bool: ...
    async def create(
        self, fields: dict[str, Any], tracks: list[dict[str, Any]] | None,
    ) -> Any: ...
    async def update(self, vinyl_id: VinylId, update: VinylUpdate) -> Any: ...
    async def delete(self, vinyl_id: VinylId) -> None: ...
    async def add_track(
        self, vinyl_id: VinylId, fields: dict[str, Any],
    ) -> Any: ...
    async def count(self) -> int: ...
    async def count_by_genre(self) -> list[tuple[str | None, int]]: ...
    async def count_by_year(self) -> list[tuple[int | None, int]]: ...
