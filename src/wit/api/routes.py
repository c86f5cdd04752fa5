"""REST API routes for WIT labels and taxonomies."""

from typing import Annotated, Any

from fastapi import APIRouter, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from wit.errors import AppError
from wit.labels.qr import DEFAULT_QR_SIZE, LabelGenerationError
from wit.labels.service import LabelBatch, LabelService
from wit.models.label import LABEL_SIZES
from wit.seeds.categories import load_category_tree
from wit.seeds.location_types import LOCATION_TYPES

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by the app during startup
_app_state: dict[str, Any] = {}

MIN_QR_SIZE = 100
MAX_QR_SIZE = 500

QrSize = Annotated[int | None, Query(alias="qrSize", ge=MIN_QR_SIZE, le=MAX_QR_SIZE)]


def set_app_state(
    label_service: LabelService | None,
    session_factory: Any = None,
    qr_size: int = DEFAULT_QR_SIZE,
    max_batch_size: int = 100,
) -> None:
    """Set application state references for the routes."""
    _app_state["label_service"] = label_service
    _app_state["session_factory"] = session_factory
    _app_state["qr_size"] = qr_size
    _app_state["max_batch_size"] = max_batch_size


def _label_service() -> LabelService:
    service = _app_state.get("label_service")
    if service is None:
        raise AppError("Label service not available", 503, "SERVICE_UNAVAILABLE")
    return service


def _qr_size(requested: int | None) -> int:
    return requested or _app_state.get("qr_size", DEFAULT_QR_SIZE)


def ok(data: Any) -> dict[str, Any]:
    """Wrap ``data`` in the success envelope."""
    return {"success": True, "data": data}


def _check_batch(ids: list[str], noun: str) -> None:
    if not ids:
        raise AppError.bad_request(f"{noun} IDs array is required", "INVALID_INPUT")
    max_batch_size = _app_state.get("max_batch_size", 100)
    if len(ids) > max_batch_size:
        raise AppError.bad_request(f"Maximum {max_batch_size} labels per batch", "BATCH_TOO_LARGE")


# Request models


class _CamelBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BatchItemLabelsBody(_CamelBody):
    """Batch item label request body."""

    item_ids: list[str] = Field(default_factory=list)
    qr_size: int | None = Field(default=None, ge=MIN_QR_SIZE, le=MAX_QR_SIZE)


class BatchLocationLabelsBody(_CamelBody):
    """Batch location label request body."""

    location_ids: list[str] = Field(default_factory=list)
    qr_size: int | None = Field(default=None, ge=MIN_QR_SIZE, le=MAX_QR_SIZE)


# Routes


@router.get("/labels/sizes")
async def get_label_sizes() -> dict[str, Any]:
    """Available label size presets."""
    return ok({"sizes": {preset.value: size.model_dump() for preset, size in LABEL_SIZES.items()}})


@router.get("/labels/item/{item_id}")
async def get_item_label(item_id: str, qr_size: QrSize = None) -> dict[str, Any]:
    """Label for a single item."""
    try:
        label = await _label_service().generate_item_label(item_id, _qr_size(qr_size))
    except LabelGenerationError as e:
        raise AppError(str(e), 500, "LABEL_GENERATION_FAILED") from e
    return ok({"label": label.to_wire()})


@router.get("/labels/location/{location_id}")
async def get_location_label(location_id: str, qr_size: QrSize = None) -> dict[str, Any]:
    """Label for a single location."""
    try:
        label = await _label_service().generate_location_label(location_id, _qr_size(qr_size))
    except LabelGenerationError as e:
        raise AppError(str(e), 500, "LABEL_GENERATION_FAILED") from e
    return ok({"label": label.to_wire()})


@router.get("/labels/location/{location_id}/items")
async def get_location_item_labels(location_id: str, qr_size: QrSize = None) -> dict[str, Any]:
    """Labels for every active item in a location."""
    batch: LabelBatch = await _label_service().generate_location_item_labels(location_id, _qr_size(qr_size))
    data = batch.to_wire()
    data.pop("totalRequested")
    return ok(data)


@router.post("/labels/items/batch")
async def batch_item_labels(body: BatchItemLabelsBody) -> dict[str, Any]:
    """Labels for several items."""
    _check_batch(body.item_ids, "Item")
    batch = await _label_service().generate_batch_item_labels(body.item_ids, _qr_size(body.qr_size))
    return ok(batch.to_wire())


@router.post("/labels/locations/batch")
async def batch_location_labels(body: BatchLocationLabelsBody) -> dict[str, Any]:
    """Labels for several locations."""
    _check_batch(body.location_ids, "Location")
    batch = await _label_service().generate_batch_location_labels(body.location_ids, _qr_size(body.qr_size))
    return ok(batch.to_wire())


@router.get("/location-types")
async def get_location_types() -> dict[str, Any]:
    """Location type taxonomy, grouped by kind."""
    return ok({"types": LOCATION_TYPES})


@router.get("/categories")
async def get_categories() -> dict[str, Any]:
    """System category tree."""
    session_factory = _app_state.get("session_factory")
    if session_factory is None:
        raise AppError("Database not available", 503, "SERVICE_UNAVAILABLE")
    async with session_factory() as session:
        tree = await load_category_tree(session)
    return ok({"categories": tree})
