"""Location type taxonomy.

Types are grouped by kind:

- property: top-level places (house, warehouse, vehicle...)
- room: rooms within a property
- zone: areas within a room or warehouse
- container: storage units that hold items
- other: user-defined
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wit.models.inventory import LocationType

logger = logging.getLogger(__name__)

LOCATION_TYPES: dict[str, list[dict[str, str]]] = {
    "property": [
        {"value": "house", "label": "House", "icon": "🏠", "color": "#3B82F6"},
        {"value": "apartment", "label": "Apartment", "icon": "🏢", "color": "#6366F1"},
        {"value": "warehouse", "label": "Warehouse", "icon": "🏭", "color": "#8B5CF6"},
        {"value": "storage_unit", "label": "Storage Unit", "icon": "📦", "color": "#A855F7"},
        {"value": "office", "label": "Office", "icon": "🏢", "color": "#EC4899"},
        {"value": "vehicle", "label": "Vehicle", "icon": "🚗", "color": "#F43F5E"},
        {"value": "boat", "label": "Boat", "icon": "⛵", "color": "#0EA5E9"},
        {"value": "rv", "label": "RV/Camper", "icon": "🚐", "color": "#14B8A6"},
    ],
    "room": [
        {"value": "garage", "label": "Garage", "icon": "🚙", "color": "#64748B"},
        {"value": "basement", "label": "Basement", "icon": "🪜", "color": "#475569"},
        {"value": "attic", "label": "Attic", "icon": "🏚️", "color": "#78716C"},
        {"value": "kitchen", "label": "Kitchen", "icon": "🍳", "color": "#F97316"},
        {"value": "bedroom", "label": "Bedroom", "icon": "🛏️", "color": "#8B5CF6"},
        {"value": "bathroom", "label": "Bathroom", "icon": "🚿", "color": "#0EA5E9"},
        {"value": "living_room", "label": "Living Room", "icon": "🛋️", "color": "#10B981"},
        {"value": "dining_room", "label": "Dining Room", "icon": "🍽️", "color": "#F59E0B"},
        {"value": "office_room", "label": "Home Office", "icon": "💻", "color": "#6366F1"},
        {"value": "laundry", "label": "Laundry Room", "icon": "🧺", "color": "#06B6D4"},
        {"value": "workshop", "label": "Workshop", "icon": "🔧", "color": "#EF4444"},
        {"value": "utility", "label": "Utility Room", "icon": "🔌", "color": "#64748B"},
        {"value": "room", "label": "Other Room", "icon": "🚪", "color": "#94A3B8"},
    ],
    "zone": [
        {"value": "zone", "label": "Zone", "icon": "📍", "color": "#3B82F6"},
        {"value": "inbound", "label": "Inbound", "icon": "📥", "color": "#22C55E"},
        {"value": "outbound", "label": "Outbound", "icon": "📤", "color": "#EF4444"},
        {"value": "staging", "label": "Staging", "icon": "⏳", "color": "#F59E0B"},
        {"value": "receiving", "label": "Receiving", "icon": "📬", "color": "#10B981"},
        {"value": "shipping", "label": "Shipping", "icon": "🚚", "color": "#F97316"},
        {"value": "racking", "label": "Racking", "icon": "🏗️", "color": "#8B5CF6"},
        {"value": "floor", "label": "Floor Area", "icon": "⬜", "color": "#64748B"},
        {"value": "aisle", "label": "Aisle", "icon": "↔️", "color": "#06B6D4"},
    ],
    "container": [
        {"value": "closet", "label": "Closet", "icon": "🚪", "color": "#8B5CF6"},
        {"value": "cabinet", "label": "Cabinet", "icon": "🗄️", "color": "#64748B"},
        {"value": "drawer", "label": "Drawer", "icon": "🗃️", "color": "#78716C"},
        {"value": "shelf", "label": "Shelf", "icon": "📚", "color": "#A855F7"},
        {"value": "box", "label": "Box", "icon": "📦", "color": "#F59E0B"},
        {"value": "bin", "label": "Bin", "icon": "🗑️", "color": "#10B981"},
        {"value": "container", "label": "Container", "icon": "📥", "color": "#3B82F6"},
        {"value": "drawer_cabinet", "label": "Drawer Cabinet", "icon": "🗄️", "color": "#6366F1"},
        {"value": "shelving", "label": "Shelving Unit", "icon": "📚", "color": "#8B5CF6"},
        {"value": "bin_rack", "label": "Bin Rack", "icon": "🗃️", "color": "#22C55E"},
        {"value": "tool_chest", "label": "Tool Chest", "icon": "🧰", "color": "#EF4444"},
        {"value": "pegboard", "label": "Pegboard", "icon": "📌", "color": "#F97316"},
        {"value": "locker", "label": "Locker", "icon": "🔐", "color": "#0EA5E9"},
        {"value": "safe", "label": "Safe", "icon": "🔒", "color": "#1F2937"},
        {"value": "trunk", "label": "Trunk", "icon": "📦", "color": "#78716C"},
        {"value": "crate", "label": "Crate", "icon": "📦", "color": "#A16207"},
        {"value": "pallet", "label": "Pallet", "icon": "🪵", "color": "#92400E"},
    ],
    "other": [
        {"value": "custom", "label": "Custom", "icon": "✏️", "color": "#6B7280"},
    ],
}

ALL_LOCATION_TYPES: list[dict[str, str]] = [entry for entries in LOCATION_TYPES.values() for entry in entries]

_CONTAINER_VALUES = frozenset(entry["value"] for entry in LOCATION_TYPES["container"]) | {"storage_unit"}


def get_type_values() -> list[str]:
    """Return every location type value, in taxonomy order."""
    return [entry["value"] for entry in ALL_LOCATION_TYPES]


def get_type_info(value: str) -> dict[str, str] | None:
    for entry in ALL_LOCATION_TYPES:
        if entry["value"] == value:
            return entry
    return None


def get_types_by_kind(kind: str) -> list[dict[str, str]]:
    return LOCATION_TYPES.get(kind, [])


def is_container_type(value: str | None) -> bool:
    """Whether a location of this type directly holds items (bins, shelves, storage units)."""
    return value in _CONTAINER_VALUES


async def seed_location_types(session: AsyncSession) -> int:
    """Insert the system location types unless any are already present.

    Returns:
        Number of location types inserted (0 when seeding was skipped).
    """
    existing = await session.scalar(
        select(func.count()).select_from(LocationType).where(LocationType.is_system.is_(True))
    )
    if existing:
        logger.info(f"Location types already seeded ({existing} found). Skipping.")
        return 0

    logger.info("Seeding location types...")
    total = 0
    for kind, entries in LOCATION_TYPES.items():
        for i, entry in enumerate(entries):
            session.add(
                LocationType(
                    value=entry["value"],
                    kind=kind,
                    label=entry["label"],
                    icon=entry["icon"],
                    color=entry["color"],
                    is_system=True,
                    sort_order=i,
                )
            )
            total += 1

    await session.commit()
    logger.info(f"Seeded {total} location types.")
    return total
