"""Label requests: what the print dialog asks its provider for.

Exactly one request is built per dialog opening. Each variant knows which
provider call serves it, so the dialog never branches on its mode when
fetching.
"""

from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from wit.models.label import DialogMode, LabelRecord

if TYPE_CHECKING:
    from wit.labels.provider import LabelDataProvider


class LabelRequestError(Exception):
    """Exception raised when dialog props cannot form a label request."""

    pass


class ItemLabelRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["item"] = "item"
    id: str = Field(min_length=1)

    async def dispatch(self, provider: "LabelDataProvider") -> list[LabelRecord]:
        return [await provider.get_item_label(self.id)]


class LocationLabelRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["location"] = "location"
    id: str = Field(min_length=1)

    async def dispatch(self, provider: "LabelDataProvider") -> list[LabelRecord]:
        return [await provider.get_location_label(self.id)]


class BatchItemLabelsRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["batch_items"] = "batch_items"
    ids: tuple[str, ...] = Field(min_length=1)

    async def dispatch(self, provider: "LabelDataProvider") -> list[LabelRecord]:
        return list(await provider.get_batch_item_labels(list(self.ids)))


class BatchLocationLabelsRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["batch_locations"] = "batch_locations"
    ids: tuple[str, ...] = Field(min_length=1)

    async def dispatch(self, provider: "LabelDataProvider") -> list[LabelRecord]:
        return list(await provider.get_batch_location_labels(list(self.ids)))


LabelRequest = Annotated[
    ItemLabelRequest | LocationLabelRequest | BatchItemLabelsRequest | BatchLocationLabelsRequest,
    Field(discriminator="kind"),
]


def ref_id(ref: Any) -> str | None:
    """Extract an identifier from an entity reference.

    Accepts a plain id string, a mapping with ``id`` or ``_id``, or any
    object with an ``id`` attribute.
    """
    if ref is None:
        return None
    if isinstance(ref, str):
        value: Any = ref
    elif isinstance(ref, Mapping):
        value = ref.get("id") or ref.get("_id")
    else:
        value = getattr(ref, "id", None)
    if value is None or value == "":
        return None
    return str(value)


def _ids(refs: Iterable[Any], label: str) -> tuple[str, ...]:
    ids = []
    for ref in refs:
        value = ref_id(ref)
        if value is None:
            raise LabelRequestError(f"{label} reference without an id")
        ids.append(value)
    return tuple(ids)


def build_label_request(
    mode: DialogMode | str,
    item: Any = None,
    location: Any = None,
    items: Iterable[Any] = (),
    locations: Iterable[Any] = (),
) -> ItemLabelRequest | LocationLabelRequest | BatchItemLabelsRequest | BatchLocationLabelsRequest | None:
    """Turn dialog props into a single label request.

    Returns None for a batch with nothing selected; that is an empty
    result, not an error.

    Raises:
        LabelRequestError: If the props do not describe a valid request.
    """
    try:
        mode = DialogMode(mode)
    except ValueError:
        raise LabelRequestError(f"Unknown label mode: {mode}") from None

    if mode == DialogMode.ITEM:
        item_id = ref_id(item)
        if item_id is None:
            raise LabelRequestError("No item selected")
        return ItemLabelRequest(id=item_id)

    if mode == DialogMode.LOCATION:
        location_id = ref_id(location)
        if location_id is None:
            raise LabelRequestError("No location selected")
        return LocationLabelRequest(id=location_id)

    item_ids = _ids(items or (), "Item")
    location_ids = _ids(locations or (), "Location")
    if item_ids and location_ids:
        raise LabelRequestError("Cannot print items and locations in the same batch")
    if item_ids:
        return BatchItemLabelsRequest(ids=item_ids)
    if location_ids:
        return BatchLocationLabelsRequest(ids=location_ids)
    return None
