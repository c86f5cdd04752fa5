"""Label generation backed by the inventory database."""

import logging
from collections.abc import Sequence
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from wit.errors import AppError
from wit.labels.qr import DEFAULT_QR_SIZE, LabelGenerationError, generate_qr_code
from wit.models.inventory import Item, Location
from wit.models.label import LabelRecord, LabelType

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_ICON = "📍"


class LabelBatch(BaseModel):
    """Result of a batch label request.

    Failures for individual entities are collected in ``errors`` as
    ``{"itemId" | "locationId": id, "error": message}`` and do not abort
    the batch.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    labels: list[LabelRecord] = Field(default_factory=list)
    errors: list[dict[str, str]] = Field(default_factory=list)
    total_requested: int = 0

    @property
    def total_generated(self) -> int:
        return len(self.labels)

    def to_wire(self) -> dict:
        return {
            "labels": [label.to_wire() for label in self.labels],
            "errors": self.errors,
            "totalRequested": self.total_requested,
            "totalGenerated": self.total_generated,
        }


def format_label_date(value: date | None) -> str | None:
    """Format a date the way labels print it, e.g. ``Mar 5, 2026``."""
    if value is None:
        return None
    return f"{value:%b} {value.day}, {value.year}"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class LabelService:
    """Builds label records for items and locations."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        app_url: str = "http://localhost:3000",
        max_batch_size: int = 100,
    ) -> None:
        self._session_factory = session_factory
        self.app_url = app_url.rstrip("/")
        self.max_batch_size = max_batch_size

    def item_url(self, item_id: str) -> str:
        return f"{self.app_url}/item/{item_id}"

    def location_url(self, location_id: str) -> str:
        return f"{self.app_url}/location/{location_id}"

    async def generate_item_label(self, item_id: str, qr_size: int = DEFAULT_QR_SIZE) -> LabelRecord:
        """Generate the label for one item.

        Raises:
            AppError: ITEM_NOT_FOUND if the item does not exist.
            LabelGenerationError: If the QR code cannot be rendered.
        """
        async with self._session_factory() as session:
            item = await session.get(Item, item_id)
            if item is None:
                raise AppError.not_found("Item not found", "ITEM_NOT_FOUND")

            url = self.item_url(item.id)
            return LabelRecord(
                type=LabelType.ITEM,
                id=item.id,
                name=item.name,
                barcode=item.barcode or None,
                location=item.location.name if item.location else "Unknown",
                category=item.category.name if item.category else None,
                category_icon=item.category.icon if item.category else None,
                quantity=item.quantity,
                unit=item.unit or None,
                expiration_date=format_label_date(item.expiration_date),
                qr_code=generate_qr_code(url, qr_size),
                url=url,
                generated_at=_now_iso(),
            )

    async def generate_location_label(self, location_id: str, qr_size: int = DEFAULT_QR_SIZE) -> LabelRecord:
        """Generate the label for one location.

        The label shows the full ancestry path and the number of active
        items stored directly in the location.

        Raises:
            AppError: LOCATION_NOT_FOUND if the location does not exist.
            LabelGenerationError: If the QR code cannot be rendered.
        """
        async with self._session_factory() as session:
            location = await session.get(Location, location_id)
            if location is None:
                raise AppError.not_found("Location not found", "LOCATION_NOT_FOUND")

            path = await self._location_path(session, location)
            item_count = await session.scalar(
                select(func.count())
                .select_from(Item)
                .where(Item.location_id == location.id, Item.is_active.is_(True))
            )

            url = self.location_url(location.id)
            return LabelRecord(
                type=LabelType.LOCATION,
                id=location.id,
                name=location.name,
                icon=location.icon or DEFAULT_LOCATION_ICON,
                location_type=location.type,
                path=path,
                item_count=item_count or 0,
                qr_code=generate_qr_code(url, qr_size),
                url=url,
                generated_at=_now_iso(),
            )

    async def _location_path(self, session: AsyncSession, location: Location) -> str:
        ancestor_ids = [part for part in (location.path or "").split(",") if part]
        if not ancestor_ids:
            return location.name

        result = await session.execute(select(Location.id, Location.name).where(Location.id.in_(ancestor_ids)))
        names = {row.id: row.name for row in result}
        # Keep the stored order; ancestors that no longer exist are skipped
        parts = [names[ancestor_id] for ancestor_id in ancestor_ids if names.get(ancestor_id)]
        return " > ".join([*parts, location.name])

    async def generate_batch_item_labels(
        self, item_ids: Sequence[str], qr_size: int = DEFAULT_QR_SIZE
    ) -> LabelBatch:
        """Generate labels for several items, in request order."""
        batch = LabelBatch(total_requested=len(item_ids))
        for item_id in item_ids:
            try:
                batch.labels.append(await self.generate_item_label(item_id, qr_size))
            except (AppError, LabelGenerationError) as e:
                logger.warning(f"Skipping label for item {item_id}: {e}")
                batch.errors.append({"itemId": item_id, "error": str(e)})
        return batch

    async def generate_batch_location_labels(
        self, location_ids: Sequence[str], qr_size: int = DEFAULT_QR_SIZE
    ) -> LabelBatch:
        """Generate labels for several locations, in request order."""
        batch = LabelBatch(total_requested=len(location_ids))
        for location_id in location_ids:
            try:
                batch.labels.append(await self.generate_location_label(location_id, qr_size))
            except (AppError, LabelGenerationError) as e:
                logger.warning(f"Skipping label for location {location_id}: {e}")
                batch.errors.append({"locationId": location_id, "error": str(e)})
        return batch

    async def generate_location_item_labels(self, location_id: str, qr_size: int = DEFAULT_QR_SIZE) -> LabelBatch:
        """Generate labels for every active item stored in a location.

        Raises:
            AppError: LOCATION_NOT_FOUND if the location does not exist.
        """
        async with self._session_factory() as session:
            location = await session.get(Location, location_id)
            if location is None:
                raise AppError.not_found("Location not found", "LOCATION_NOT_FOUND")
            result = await session.execute(
                select(Item.id)
                .where(Item.location_id == location_id, Item.is_active.is_(True))
                .order_by(Item.name)
            )
            item_ids = list(result.scalars())

        return await self.generate_batch_item_labels(item_ids, qr_size)
