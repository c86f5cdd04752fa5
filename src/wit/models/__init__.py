"""Data models for WIT."""

from wit.models.label import (
    LABEL_SIZES,
    DialogMode,
    LabelRecord,
    LabelSize,
    LabelSizePreset,
    LabelType,
)

__all__ = [
    "DialogMode",
    "LABEL_SIZES",
    "LabelRecord",
    "LabelSize",
    "LabelSizePreset",
    "LabelType",
]
