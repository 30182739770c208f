"""Vinyl Route Helpers - operation boundary and dependencies shared by vinyl routes.

Invariants:
    - Every route body runs inside store_operation(tag, message)
    - VinylApiError (e.g. not-found) passes through the boundary untouched
    - Any other exception becomes StoreOperationError: logged once with the operation tag,
      reported as 500 {error, details}
    - Not-found is checked before any mutating store call
    - Request bodies are validated inside the boundary: a field of the wrong shape fails
      the operation like a store error (500 {error, details}), not as a 400

Design Decisions:
    - Async context manager over a decorator: keeps FastAPI's signature introspection
      of the route functions intact
    - get_vinyl_repository as a dependency: tests replace the store with a fake
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, TypeVar

from fastapi import Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from vinyl_api.core.domain_types import VinylId
from vinyl_api.core.errors import StoreOperationError, VinylApiError, VinylNotFoundError
from vinyl_api.core.repository_protocols import VinylStore
from vinyl_api.infrastructure.database import get_db
from vinyl_api.infrastructure.vinyl_repository import VinylRepository

logger = logging.getLogger(__name__)

_BodyT = TypeVar("_BodyT", bound=BaseModel)


def get_vinyl_repository(db: AsyncSession = Depends(get_db)) -> VinylStore:
    """FastAPI dependency for the vinyl store."""
    return VinylRepository(db)


@asynccontextmanager
async def store_operation(operation: str, message: str) -> AsyncGenerator[None, None]:
    """Translate store failures inside the block into StoreOperationError."""
    try:
        yield
    except VinylApiError:
        raise
    except Exception as e:
        logger.error(
            f"{operation} error: {e}",
            extra={"operation": operation},
            exc_info=True,
        )
        raise StoreOperationError(message, operation, str(e) or repr(e)) from e


async def ensure_vinyl_exists(store: VinylStore, vinyl_id: VinylId) -> None:
    """Raise VinylNotFoundError unless the vinyl exists."""
    if not await store.exists(vinyl_id):
        raise VinylNotFoundError(vinyl_id)


def parse_body(model: type[_BodyT], payload: Any) -> _BodyT:
    """Validate a decoded JSON body against a request model; a missing body is {}."""
    return model.model_validate({} if payload is None else payload)
