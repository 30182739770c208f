"""Statistics Route - aggregate counts over the whole collection.

Invariants:
    - Three store queries, run sequentially: total, per genre, per year (year descending)
    - Missing genre/year buckets are labelled "Unknown" (core/collection_stats)
    - Store failures come back as 500 {error, details}
"""

import logging

from fastapi import APIRouter, Depends

from vinyl_api.api.routes.vinyl_helpers import get_vinyl_repository, store_operation
from vinyl_api.core.collection_stats import compute_collection_stats
from vinyl_api.core.repository_protocols import VinylStore
from vinyl_api.schemas.vinyl import StatisticsResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("", response_model=StatisticsResponse)
async def get_statistics(store: VinylStore = Depends(get_vinyl_repository)):
    """Total vinyls plus counts by genre and by year."""
    async with store_operation("GET /statistics", "Failed to compute statistics"):
        total = await store.count()
        by_genre = await store.count_by_genre()
        by_year = await store.count_by_year()
    return compute_collection_stats(total, by_genre, by_year)
