"""Label record and label size models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class LabelType(StrEnum):
    """Kind of entity a label describes."""

    ITEM = "item"
    LOCATION = "location"


class DialogMode(StrEnum):
    """Modes the print dialog can be opened in."""

    ITEM = "item"
    LOCATION = "location"
    BATCH = "batch"


class LabelSizePreset(StrEnum):
    """Physical label size presets."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    SHELF = "shelf"


class LabelSize(BaseModel):
    """Label dimensions in millimeters (operator guidance only)."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float
    name: str


LABEL_SIZES: dict[LabelSizePreset, LabelSize] = {
    LabelSizePreset.SMALL: LabelSize(width=25, height=25, name='Small (1" x 1")'),
    LabelSizePreset.MEDIUM: LabelSize(width=50, height=25, name='Medium (2" x 1")'),
    LabelSizePreset.LARGE: LabelSize(width=50, height=50, name='Large (2" x 2")'),
    LabelSizePreset.SHELF: LabelSize(width=100, height=50, name='Shelf (4" x 2")'),
}

DEFAULT_LABEL_SIZE = LabelSizePreset.MEDIUM


class LabelRecord(BaseModel):
    """Normalized, print-ready description of one item or location.

    Serialized with camelCase keys (``qrCode``, ``itemCount``...) and accepts
    either camelCase or snake_case on input.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    type: LabelType
    name: str
    qr_code: str = Field(min_length=1)
    icon: str | None = None
    barcode: str | None = None
    url: str | None = None
    generated_at: str | None = None

    # Item-only fields
    location: str | None = None
    expiration_date: str | None = None
    category: str | None = None
    category_icon: str | None = None
    quantity: float | None = None
    unit: str | None = None

    # Location-only fields
    item_count: int | None = Field(default=None, ge=0)
    location_type: str | None = None
    path: str | None = None

    @model_validator(mode="after")
    def _check_type_fields(self) -> "LabelRecord":
        if self.type == LabelType.ITEM:
            if self.item_count is not None:
                raise ValueError("itemCount is only valid on location labels")
        else:
            if self.location is not None:
                raise ValueError("location is only valid on item labels")
            if self.expiration_date is not None:
                raise ValueError("expirationDate is only valid on item labels")
        return self

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, as sent over the API."""
        return self.model_dump(by_alias=True, mode="json")
