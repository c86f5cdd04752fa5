"""Category seed data.

Fifteen top-level categories, each with an ordered list of subcategories.
Loaded into the ``categories`` table as system (non-deletable) entries.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wit.models.inventory import Category

logger = logging.getLogger(__name__)

CATEGORIES: list[dict[str, Any]] = [
    {
        "name": "Tools",
        "slug": "tools",
        "icon": "🔧",
        "color": "#EF4444",
        "subcategories": [
            {"name": "Hand Tools", "slug": "hand-tools", "icon": "🔨"},
            {"name": "Power Tools", "slug": "power-tools", "icon": "⚡"},
            {"name": "Measuring Tools", "slug": "measuring-tools", "icon": "📏"},
            {"name": "Cutting Tools", "slug": "cutting-tools", "icon": "✂️"},
            {"name": "Garden Tools", "slug": "garden-tools", "icon": "🌱"},
            {"name": "Automotive Tools", "slug": "automotive-tools", "icon": "🚗"},
        ],
    },
    {
        "name": "Hardware",
        "slug": "hardware",
        "icon": "🔩",
        "color": "#6B7280",
        "subcategories": [
            {"name": "Fasteners", "slug": "fasteners", "icon": "🔩"},
            {"name": "Screws", "slug": "screws", "icon": "🪛"},
            {"name": "Nails", "slug": "nails", "icon": "📌"},
            {"name": "Bolts & Nuts", "slug": "bolts-nuts", "icon": "🔧"},
            {"name": "Anchors", "slug": "anchors", "icon": "⚓"},
            {"name": "Brackets", "slug": "brackets", "icon": "📐"},
            {"name": "Hinges", "slug": "hinges", "icon": "🚪"},
            {"name": "Hooks", "slug": "hooks", "icon": "🪝"},
        ],
    },
    {
        "name": "Plumbing",
        "slug": "plumbing",
        "icon": "🔧",
        "color": "#0EA5E9",
        "subcategories": [
            {"name": "Pipes & Fittings", "slug": "pipes-fittings", "icon": "🔧"},
            {"name": "Valves", "slug": "valves", "icon": "🚰"},
            {"name": "Faucets", "slug": "faucets", "icon": "🚿"},
            {"name": "Drains", "slug": "drains", "icon": "🕳️"},
            {"name": "Water Heater Parts", "slug": "water-heater", "icon": "🔥"},
        ],
    },
    {
        "name": "Electrical",
        "slug": "electrical",
        "icon": "⚡",
        "color": "#F59E0B",
        "subcategories": [
            {"name": "Wire & Cable", "slug": "wire-cable", "icon": "🔌"},
            {"name": "Outlets & Switches", "slug": "outlets-switches", "icon": "🔘"},
            {"name": "Lighting", "slug": "lighting", "icon": "💡"},
            {"name": "Breakers & Fuses", "slug": "breakers-fuses", "icon": "⚡"},
            {"name": "Connectors", "slug": "connectors", "icon": "🔗"},
            {"name": "Batteries", "slug": "batteries", "icon": "🔋"},
        ],
    },
    {
        "name": "Building Materials",
        "slug": "building-materials",
        "icon": "🧱",
        "color": "#A16207",
        "subcategories": [
            {"name": "Lumber", "slug": "lumber", "icon": "🪵"},
            {"name": "Drywall", "slug": "drywall", "icon": "⬜"},
            {"name": "Insulation", "slug": "insulation", "icon": "🧤"},
            {"name": "Roofing", "slug": "roofing", "icon": "🏠"},
            {"name": "Concrete & Masonry", "slug": "concrete-masonry", "icon": "🧱"},
            {"name": "Flooring", "slug": "flooring", "icon": "🪵"},
        ],
    },
    {
        "name": "Paint & Supplies",
        "slug": "paint-supplies",
        "icon": "🎨",
        "color": "#8B5CF6",
        "subcategories": [
            {"name": "Interior Paint", "slug": "interior-paint", "icon": "🎨"},
            {"name": "Exterior Paint", "slug": "exterior-paint", "icon": "🏠"},
            {"name": "Stains & Finishes", "slug": "stains-finishes", "icon": "🪵"},
            {"name": "Brushes & Rollers", "slug": "brushes-rollers", "icon": "🖌️"},
            {"name": "Tape & Drop Cloths", "slug": "tape-drop-cloths", "icon": "📜"},
            {"name": "Caulk & Sealants", "slug": "caulk-sealants", "icon": "🔧"},
        ],
    },
    {
        "name": "Safety & PPE",
        "slug": "safety-ppe",
        "icon": "🦺",
        "color": "#22C55E",
        "subcategories": [
            {"name": "Eye Protection", "slug": "eye-protection", "icon": "🥽"},
            {"name": "Gloves", "slug": "gloves", "icon": "🧤"},
            {"name": "Respirators", "slug": "respirators", "icon": "😷"},
            {"name": "Hearing Protection", "slug": "hearing-protection", "icon": "🎧"},
            {"name": "First Aid", "slug": "first-aid", "icon": "🩹"},
            {"name": "Fire Safety", "slug": "fire-safety", "icon": "🧯"},
        ],
    },
    {
        "name": "Automotive",
        "slug": "automotive",
        "icon": "🚗",
        "color": "#EF4444",
        "subcategories": [
            {"name": "Fluids", "slug": "automotive-fluids", "icon": "🛢️"},
            {"name": "Filters", "slug": "automotive-filters", "icon": "🔲"},
            {"name": "Belts & Hoses", "slug": "belts-hoses", "icon": "➰"},
            {"name": "Brakes", "slug": "brakes", "icon": "🛑"},
            {"name": "Electrical Parts", "slug": "automotive-electrical", "icon": "⚡"},
            {"name": "Body Parts", "slug": "body-parts", "icon": "🚗"},
        ],
    },
    {
        "name": "Garden & Outdoor",
        "slug": "garden-outdoor",
        "icon": "🌿",
        "color": "#10B981",
        "subcategories": [
            {"name": "Plants & Seeds", "slug": "plants-seeds", "icon": "🌱"},
            {"name": "Soil & Fertilizer", "slug": "soil-fertilizer", "icon": "🪴"},
            {"name": "Irrigation", "slug": "irrigation", "icon": "💧"},
            {"name": "Outdoor Furniture", "slug": "outdoor-furniture", "icon": "🪑"},
            {"name": "Lawn Care", "slug": "lawn-care", "icon": "🌿"},
            {"name": "Pest Control", "slug": "pest-control", "icon": "🐛"},
        ],
    },
    {
        "name": "Food & Pantry",
        "slug": "food-pantry",
        "icon": "🍎",
        "color": "#F97316",
        "subcategories": [
            {"name": "Canned Goods", "slug": "canned-goods", "icon": "🥫"},
            {"name": "Dry Goods", "slug": "dry-goods", "icon": "🍚"},
            {"name": "Spices", "slug": "spices", "icon": "🧂"},
            {"name": "Beverages", "slug": "beverages", "icon": "🥤"},
            {"name": "Snacks", "slug": "snacks", "icon": "🍪"},
            {"name": "Frozen", "slug": "frozen", "icon": "🧊"},
        ],
    },
    {
        "name": "Household",
        "slug": "household",
        "icon": "🏠",
        "color": "#06B6D4",
        "subcategories": [
            {"name": "Cleaning Supplies", "slug": "cleaning-supplies", "icon": "🧹"},
            {"name": "Paper Products", "slug": "paper-products", "icon": "🧻"},
            {"name": "Laundry", "slug": "laundry", "icon": "🧺"},
            {"name": "Kitchen Supplies", "slug": "kitchen-supplies", "icon": "🍳"},
            {"name": "Storage & Organization", "slug": "storage-organization", "icon": "📦"},
            {"name": "Air Fresheners", "slug": "air-fresheners", "icon": "🌸"},
        ],
    },
    {
        "name": "Electronics",
        "slug": "electronics",
        "icon": "📱",
        "color": "#6366F1",
        "subcategories": [
            {"name": "Cables & Adapters", "slug": "cables-adapters", "icon": "🔌"},
            {"name": "Computers & Parts", "slug": "computers-parts", "icon": "💻"},
            {"name": "Audio/Video", "slug": "audio-video", "icon": "🎧"},
            {"name": "Smart Home", "slug": "smart-home", "icon": "🏠"},
            {"name": "Phones & Tablets", "slug": "phones-tablets", "icon": "📱"},
            {"name": "Cameras", "slug": "cameras", "icon": "📷"},
        ],
    },
    {
        "name": "Office Supplies",
        "slug": "office-supplies",
        "icon": "📎",
        "color": "#64748B",
        "subcategories": [
            {"name": "Paper & Notebooks", "slug": "paper-notebooks", "icon": "📝"},
            {"name": "Writing Instruments", "slug": "writing-instruments", "icon": "✏️"},
            {"name": "Filing & Storage", "slug": "filing-storage", "icon": "📁"},
            {"name": "Desk Accessories", "slug": "desk-accessories", "icon": "🖊️"},
            {"name": "Mailing Supplies", "slug": "mailing-supplies", "icon": "📬"},
        ],
    },
    {
        "name": "Sports & Recreation",
        "slug": "sports-recreation",
        "icon": "⚽",
        "color": "#EC4899",
        "subcategories": [
            {"name": "Fitness Equipment", "slug": "fitness-equipment", "icon": "🏋️"},
            {"name": "Outdoor Recreation", "slug": "outdoor-recreation", "icon": "🏕️"},
            {"name": "Team Sports", "slug": "team-sports", "icon": "⚽"},
            {"name": "Water Sports", "slug": "water-sports", "icon": "🏊"},
            {"name": "Cycling", "slug": "cycling", "icon": "🚴"},
        ],
    },
    {
        "name": "Other",
        "slug": "other",
        "icon": "📦",
        "color": "#9CA3AF",
        "subcategories": [
            {"name": "Miscellaneous", "slug": "miscellaneous", "icon": "📦"},
            {"name": "Uncategorized", "slug": "uncategorized", "icon": "❓"},
        ],
    },
]


def get_all_categories() -> list[dict[str, Any]]:
    """Return the full category taxonomy."""
    return CATEGORIES


def get_category_by_slug(slug: str) -> dict[str, Any] | None:
    """Find a category or subcategory by slug.

    Subcategories are returned as a copy with a ``parent`` key pointing at
    their top-level category.
    """
    for cat in CATEGORIES:
        if cat["slug"] == slug:
            return cat
        for sub in cat.get("subcategories", []):
            if sub["slug"] == slug:
                return {**sub, "parent": cat}
    return None


async def seed_categories(session: AsyncSession) -> int:
    """Insert the system categories unless any are already present.

    Returns:
        Number of categories inserted (0 when seeding was skipped).
    """
    existing = await session.scalar(select(func.count()).select_from(Category).where(Category.is_system.is_(True)))
    if existing:
        logger.info(f"Categories already seeded ({existing} found). Skipping.")
        return 0

    logger.info("Seeding categories...")
    total = 0
    for i, cat in enumerate(CATEGORIES):
        parent = Category(
            name=cat["name"],
            slug=cat["slug"],
            icon=cat["icon"],
            color=cat["color"],
            is_system=True,
            sort_order=i,
        )
        session.add(parent)
        # Flush to get the parent id for the subcategories
        await session.flush()
        total += 1

        for j, sub in enumerate(cat.get("subcategories", [])):
            session.add(
                Category(
                    name=sub["name"],
                    slug=sub["slug"],
                    icon=sub.get("icon") or cat["icon"],
                    color=sub.get("color") or cat["color"],
                    parent_id=parent.id,
                    is_system=True,
                    sort_order=j,
                )
            )
            total += 1

    await session.commit()
    logger.info(f"Seeded {total} categories.")
    return total


async def load_category_tree(session: AsyncSession) -> list[dict[str, Any]]:
    """Return the stored system categories as a two-level tree.

    Both levels are ordered by ``sort_order`` then name.
    """
    result = await session.execute(
        select(Category)
        .where(Category.is_system.is_(True), Category.is_active.is_(True))
        .order_by(Category.sort_order, Category.name)
    )
    rows = list(result.scalars())

    def node(category: Category) -> dict[str, Any]:
        return {
            "id": category.id,
            "name": category.name,
            "slug": category.slug,
            "icon": category.icon,
            "color": category.color,
        }

    children: dict[str, list[dict[str, Any]]] = {}
    for category in rows:
        if category.parent_id:
            children.setdefault(category.parent_id, []).append(node(category))

    return [
        {**node(category), "subcategories": children.get(category.id, [])}
        for category in rows
        if category.parent_id is None
    ]
