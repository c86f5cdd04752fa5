"""Tests for the location type taxonomy."""

import pytest

from wit.seeds.location_types import (
    ALL_LOCATION_TYPES,
    LOCATION_TYPES,
    get_type_info,
    get_type_values,
    get_types_by_kind,
    is_container_type,
)


class TestLocationTypes:
    """Tests for the static taxonomy and its helpers."""

    def test_kinds(self):
        assert list(LOCATION_TYPES) == ["property", "room", "zone", "container", "other"]

    def test_all_types_is_flat(self):
        assert len(ALL_LOCATION_TYPES) == sum(len(entries) for entries in LOCATION_TYPES.values())

    def test_values_unique(self):
        values = get_type_values()
        assert len(values) == len(set(values))

    def test_entries_complete(self):
        for entry in ALL_LOCATION_TYPES:
            assert set(entry) == {"value", "label", "icon", "color"}
            assert entry["color"].startswith("#") and len(entry["color"]) == 7

    def test_get_type_info(self):
        info = get_type_info("living_room")
        assert info is not None
        assert info["label"] == "Living Room"
        assert get_type_info("moon_base") is None

    def test_get_types_by_kind(self):
        assert [entry["value"] for entry in get_types_by_kind("other")] == ["custom"]
        assert get_types_by_kind("galaxy") == []


class TestIsContainerType:
    """Tests for is_container_type."""

    @pytest.mark.parametrize("value", [entry["value"] for entry in LOCATION_TYPES["container"]])
    def test_container_values(self, value):
        assert is_container_type(value)

    def test_storage_unit(self):
        """Storage units are properties that still hold items directly."""
        assert is_container_type("storage_unit")

    @pytest.mark.parametrize("value", ["house", "garage", "zone", "custom", "", "BIN", None])
    def test_non_containers(self, value):
        assert not is_container_type(value)
