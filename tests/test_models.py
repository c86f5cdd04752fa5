"""Tests for label models."""

import pytest
from pydantic import ValidationError

from wit.models.label import LABEL_SIZES, DEFAULT_LABEL_SIZE, LabelRecord, LabelSizePreset, LabelType

from conftest import QR_DATA_URI, make_item_label, make_location_label


class TestLabelRecord:
    """Tests for LabelRecord validation and serialization."""

    def test_item_label(self):
        """Item labels carry location and expiration."""
        label = make_item_label(location="Garage", expiration_date="Mar 5, 2026", barcode="123")
        assert label.type == LabelType.ITEM
        assert label.location == "Garage"
        assert label.item_count is None

    def test_location_label(self):
        """Location labels carry an item count."""
        label = make_location_label(icon="📦", item_count=3)
        assert label.type == LabelType.LOCATION
        assert label.item_count == 3
        assert label.location is None

    def test_qr_code_required(self):
        """A record without a QR code is rejected."""
        with pytest.raises(ValidationError):
            LabelRecord(id="abc", type="item", name="Hammer")

    def test_qr_code_not_empty(self):
        """An empty QR code is rejected."""
        with pytest.raises(ValidationError):
            LabelRecord(id="abc", type="item", name="Hammer", qr_code="")

    def test_item_count_not_allowed_on_item(self):
        with pytest.raises(ValidationError, match="itemCount"):
            make_item_label(item_count=2)

    def test_location_not_allowed_on_location(self):
        with pytest.raises(ValidationError, match="location is only valid"):
            make_location_label(location="Garage")

    def test_expiration_not_allowed_on_location(self):
        with pytest.raises(ValidationError, match="expirationDate"):
            make_location_label(expiration_date="Mar 5, 2026")

    def test_negative_item_count_rejected(self):
        with pytest.raises(ValidationError):
            make_location_label(item_count=-1)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            LabelRecord(id="abc", type="box", name="Hammer", qr_code=QR_DATA_URI)

    def test_type_is_immutable(self):
        """Records are frozen."""
        label = make_item_label()
        with pytest.raises(ValidationError):
            label.type = LabelType.LOCATION

    def test_accepts_camel_case(self):
        """Wire payloads use camelCase keys."""
        label = LabelRecord.model_validate(
            {
                "id": "loc1",
                "type": "location",
                "name": "Bin 4",
                "qrCode": QR_DATA_URI,
                "itemCount": 1,
                "locationType": "bin",
            }
        )
        assert label.qr_code == QR_DATA_URI
        assert label.item_count == 1
        assert label.location_type == "bin"

    def test_to_wire(self):
        """Serialization uses camelCase keys."""
        wire = make_item_label(expiration_date="Mar 5, 2026", category_icon="🔧").to_wire()
        assert wire["qrCode"] == QR_DATA_URI
        assert wire["expirationDate"] == "Mar 5, 2026"
        assert wire["categoryIcon"] == "🔧"
        assert wire["type"] == "item"
        assert "qr_code" not in wire


class TestLabelSizes:
    """Tests for label size presets."""

    def test_presets(self):
        assert set(LABEL_SIZES) == set(LabelSizePreset)

    def test_default_is_medium(self):
        assert DEFAULT_LABEL_SIZE == LabelSizePreset.MEDIUM
        medium = LABEL_SIZES[DEFAULT_LABEL_SIZE]
        assert (medium.width, medium.height) == (50, 25)
        assert medium.name == 'Medium (2" x 1")'

    def test_shelf_size(self):
        shelf = LABEL_SIZES[LabelSizePreset.SHELF]
        assert (shelf.width, shelf.height) == (100, 50)
