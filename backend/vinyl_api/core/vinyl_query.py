"""Vinyl Query - pure translation of listing parameters into a store-neutral query.

Invariants:
    - Only whitelisted columns can be used for ordering
    - sortBy accepted in camelCase (API) or snake_case (Python); result is always snake_case
    - Empty genre/search values mean "no filter"

Design Decisions:
    - Whitelist over pass-through: an arbitrary attribute name never reaches the ORM
    - Unknown values raise InvalidQueryError, reported by the route boundary as a failed fetch
"""

from dataclasses import dataclass

from vinyl_api.core.domain_types import SortOrder
from vinyl_api.core.errors import InvalidQueryError

DEFAULT_SORT_FIELD = "created_at"
DEFAULT_SORT_ORDER = SortOrder.DESC

# API name -> model attribute
SORTABLE_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "artist": "artist",
    "genre": "genre",
    "year": "year",
    "label": "label",
    "country": "country",
    "format": "format",
    "condition": "condition",
}


@dataclass(frozen=True)
class VinylQuery:
    """Filter and ordering for a vinyl listing."""
    genre: str | None = None
    search: str | None = None
    sort_field: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = DEFAULT_SORT_ORDER


def resolve_sort_field(sort_by: str | None) -> str:
    """Map an API sort name to a model attribute, or raise InvalidQueryError."""
    if not sort_by:
        return DEFAULT_SORT_FIELD
    if sort_by in SORTABLE_FIELDS:
        return SORTABLE_FIELDS[sort_by]
    if sort_by in SORTABLE_FIELDS.values():
        return sort_by
    raise InvalidQueryError("sortBy", sort_by)


def resolve_sort_order(order: str | None) -> SortOrder:
    if not order:
        return DEFAULT_SORT_ORDER
    try:
        return SortOrder(order.lower())
    except ValueError:
        raise InvalidQueryError("order", order) from None


def build_vinyl_query(
    genre: str | None = None,
    search: str | None = None,
    sort_by: str | None = None,
    order: str | None = None,
) -> VinylQuery:
    """Build a VinylQuery from raw query-string values."""
    return VinylQuery(
        genre=genre or None,
        search=search or None,
        sort_field=resolve_sort_field(sort_by),
        sort_order=resolve_sort_order(order),
    )
