"""HTML rendering for the label preview and the print document.

The preview grid is rendered once and reused verbatim inside the print
document, so what the user sees is what gets printed.
"""

from collections.abc import Sequence

from jinja2 import Environment, PackageLoader
from markupsafe import Markup

from wit.models.label import DialogMode, LabelRecord, LabelType

DEFAULT_DOCUMENT_TITLE = "WIT Labels"


def pluralize(count: int, noun: str) -> str:
    """``1 item``, ``0 items``, ``3 items``."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def label_detail(label: LabelRecord) -> str | None:
    """Secondary line under the label name.

    Items show where they are stored; locations show how many items they
    hold. Never both.
    """
    if label.type == LabelType.ITEM:
        return label.location or None
    return pluralize(label.item_count or 0, "item")


def name_line(label: LabelRecord) -> str:
    if label.type == LabelType.LOCATION and label.icon:
        return f"{label.icon} {label.name}"
    return label.name


def dialog_title(mode: DialogMode | str, label_count: int) -> str:
    if mode == DialogMode.BATCH:
        return f"Print {label_count} Label{'' if label_count == 1 else 's'}"
    if mode == DialogMode.LOCATION:
        return "Print Location Label"
    return "Print Item Label"


def autoprint_script(delay_ms: int) -> Markup:
    """Script that prints the page once it has loaded and laid out, then closes it."""
    return Markup(
        "<script>"
        'window.addEventListener("load", function () {'
        f" setTimeout(function () {{ window.print(); window.close(); }}, {int(delay_ms)});"
        " });"
        "</script>"
    )


_env = Environment(
    loader=PackageLoader("wit", "dialog/templates"),
    autoescape=True,
    keep_trailing_newline=True,
)
_env.filters["label_detail"] = label_detail
_env.filters["name_line"] = name_line


def render_preview(labels: Sequence[LabelRecord], columns: int, show_qr_only: bool) -> str:
    """Render the label grid shown in the dialog and reused for printing."""
    template = _env.get_template("label_grid.html.j2")
    return template.render(labels=labels, columns=columns, show_qr_only=show_qr_only)


def render_print_document(
    preview_markup: str,
    columns: int,
    show_qr_only: bool,
    title: str = DEFAULT_DOCUMENT_TITLE,
) -> str:
    """Wrap the preview grid in a standalone, print-ready HTML document."""
    template = _env.get_template("print_document.html.j2")
    return template.render(
        preview_markup=preview_markup,
        columns=columns,
        show_qr_only=show_qr_only,
        title=title,
    )
