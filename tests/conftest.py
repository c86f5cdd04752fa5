"""Pytest configuration and fixtures."""

from datetime import date

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from wit.db import create_session_factory, init_db
from wit.labels.provider import LabelDataProvider
from wit.models.inventory import Category, Item, Location
from wit.models.label import LabelRecord, LabelType

# 1x1 transparent PNG
QR_DATA_URI = (
    "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite database shared by every session of a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def inventory(session_factory) -> dict[str, str]:
    """A garage with a shelf holding a hammer, a tape measure and a retired saw."""
    async with session_factory() as session:
        tools = Category(name="Tools", slug="tools", icon="🔧", color="#EF4444")
        session.add(tools)
        garage = Location(name="Garage", type="garage", icon="🚙")
        session.add(garage)
        await session.flush()

        shelf = Location(name="Shelf A", type="shelf", parent_id=garage.id, path=garage.id)
        session.add(shelf)
        await session.flush()

        hammer = Item(
            name="Hammer",
            barcode="123456",
            quantity=2,
            unit="pcs",
            expiration_date=date(2026, 3, 5),
            location_id=shelf.id,
            category_id=tools.id,
        )
        tape = Item(name="Tape Measure", location_id=shelf.id)
        saw = Item(name="Old Saw", location_id=shelf.id, is_active=False)
        loose = Item(name="Loose Screw")
        session.add_all([hammer, tape, saw, loose])
        await session.commit()

        return {
            "tools": tools.id,
            "garage": garage.id,
            "shelf": shelf.id,
            "hammer": hammer.id,
            "tape": tape.id,
            "saw": saw.id,
            "loose": loose.id,
        }


def make_item_label(id: str = "abc", name: str = "Hammer", **kwargs) -> LabelRecord:
    return LabelRecord(id=id, type=LabelType.ITEM, name=name, qr_code=QR_DATA_URI, **kwargs)


def make_location_label(id: str = "loc1", name: str = "Shelf A", **kwargs) -> LabelRecord:
    return LabelRecord(id=id, type=LabelType.LOCATION, name=name, qr_code=QR_DATA_URI, **kwargs)


class FakeLabelProvider(LabelDataProvider):
    """In-memory label provider that records every call.

    Set ``fail_with`` to make the next calls raise, and ``gate`` to an
    asyncio.Event to hold calls until it is set.
    """

    def __init__(self, labels: dict[str, LabelRecord] | None = None) -> None:
        self.labels = labels or {}
        self.calls: list[tuple[str, object]] = []
        self.fail_with: Exception | None = None
        self.gate = None

    async def _lookup(self, method: str, arg):
        self.calls.append((method, arg))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        if isinstance(arg, list):
            return [self.labels[i] for i in arg]
        return self.labels[arg]

    async def get_item_label(self, item_id):
        return await self._lookup("item", item_id)

    async def get_location_label(self, location_id):
        return await self._lookup("location", location_id)

    async def get_batch_item_labels(self, item_ids):
        return await self._lookup("batch_items", list(item_ids))

    async def get_batch_location_labels(self, location_ids):
        return await self._lookup("batch_locations", list(location_ids))
