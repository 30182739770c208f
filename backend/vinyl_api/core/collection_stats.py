"""Collection Stats - pure assembly of the statistics payload from grouped counts.

Invariants:
    - Inputs are (bucket, count) pairs straight from the store; no IO here
    - A None bucket is reported as the literal "Unknown"
    - Output keys are fixed: totalVinyls, vinylsByGenre, vinylsByYear
    - Bucket order from the store is preserved

Design Decisions:
    - Pure function, not a repository method: labelling is presentation, counting is storage
"""

from collections.abc import Iterable
from typing import Any

from vinyl_api.core.domain_types import UNKNOWN_LABEL


def _label(value: Any) -> Any:
    return UNKNOWN_LABEL if value is None else value


def compute_collection_stats(
    total: int,
    by_genre: Iterable[tuple[str | None, int]],
    by_year: Iterable[tuple[int | None, int]],
) -> dict:
    """Build the statistics response body. Pure, no IO."""
    return {
        "totalVinyls": total,
        "vinylsByGenre": [
            {"genre": _label(genre), "count": count}
            for genre, count in by_genre
        ],
        "vinylsByYear": [
            {"year": _label(year), "count": count}
            for year, count in by_year
        ],
    }
