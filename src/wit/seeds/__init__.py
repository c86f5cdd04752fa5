"""Static taxonomies and the bootstrap step that loads them."""

from sqlalchemy.ext.asyncio import AsyncSession

from wit.seeds.categories import (
    CATEGORIES,
    get_all_categories,
    get_category_by_slug,
    load_category_tree,
    seed_categories,
)
from wit.seeds.location_types import (
    ALL_LOCATION_TYPES,
    LOCATION_TYPES,
    get_type_info,
    get_type_values,
    get_types_by_kind,
    is_container_type,
    seed_location_types,
)

__all__ = [
    "ALL_LOCATION_TYPES",
    "CATEGORIES",
    "LOCATION_TYPES",
    "get_all_categories",
    "get_category_by_slug",
    "get_type_info",
    "get_type_values",
    "get_types_by_kind",
    "is_container_type",
    "load_category_tree",
    "seed_all",
    "seed_categories",
    "seed_location_types",
]


async def seed_all(session: AsyncSession) -> dict[str, int]:
    """Run every seed; returns the number of records inserted per table."""
    return {
        "categories": await seed_categories(session),
        "location_types": await seed_location_types(session),
    }
