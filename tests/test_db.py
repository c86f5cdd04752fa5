"""Tests for engine creation."""

import pytest

from wit.db import close_db, create_engine


class TestCreateEngine:
    """Tests for create_engine."""

    def test_missing_sqlite_directory(self, tmp_path):
        with pytest.raises(ValueError, match="Database directory does not exist"):
            create_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'wit.db'}")

    @pytest.mark.asyncio
    async def test_existing_directory(self, tmp_path):
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'wit.db'}")
        await close_db(engine)

    @pytest.mark.asyncio
    async def test_in_memory(self):
        engine = create_engine("sqlite+aiosqlite://")
        await close_db(engine)
