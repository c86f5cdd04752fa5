"""FastUI web interface for WIT."""

from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, HTTPException, Query, Request
from fastui import AnyComponent, FastUI
from fastui import components as c
from fastui.components.display import DisplayLookup
from fastui.events import GoToEvent
from markupsafe import escape
from pydantic import BaseModel
from starlette.responses import HTMLResponse

from wit.auth.client import AuthProvider
from wit.auth.reset_password import ResetOutcome, ResetPasswordForm, extract_reset_token, reset_password
from wit.dialog.dialog import PrintLabelsDialog
from wit.dialog.printing import BrowserPrintHost
from wit.dialog.render import label_detail, name_line, render_print_document
from wit.dialog.state import MAX_COLUMNS, MIN_COLUMNS
from wit.labels.provider import ServiceLabelProvider
from wit.models.label import LABEL_SIZES, DialogMode, LabelRecord, LabelSizePreset

router = APIRouter()

# Application state references (set during startup)
_app_state: dict[str, Any] = {}


class LabelSizeRow(BaseModel):
    """Row model for the label sizes table."""

    preset: str
    name: str
    size: str


_CUSTOM_HTML = """\
<!doctype html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <meta name="fastui:APIRootUrl" content="{api_root_url}" />
    <meta name="fastui:APIPathStrip" content="{path_strip}" />
    <title>{title}</title>
    <script type="module" crossorigin \
src="https://cdn.jsdelivr.net/npm/@pydantic/fastui-prebuilt@0.0.26/dist/assets/index.js"></script>
    <link rel="stylesheet" crossorigin \
href="https://cdn.jsdelivr.net/npm/@pydantic/fastui-prebuilt@0.0.26/dist/assets/index.css">
    <style>
      .label {{
        border: 1px dashed #ccc;
        padding: 8px;
        display: flex;
        align-items: center;
        gap: 8px;
      }}
      .label-info {{
        flex: 1;
        min-width: 0;
      }}
      .label-name {{
        font-weight: 600;
      }}
      .label-detail {{
        font-size: 0.8rem;
        color: #666;
      }}
      .label-barcode {{
        font-family: monospace;
        font-size: 0.75rem;
        color: #888;
      }}
      .w-14 {{ width: 56px; }}
      .h-14 {{ height: 56px; }}
      .w-20 {{ width: 80px; }}
      .h-20 {{ height: 80px; }}
    </style>
  </head>
  <body>
    <div id="root"></div>
  </body>
</html>
"""


def set_app_state(
    label_service: Any,
    qr_size: int = 200,
    settle_delay_ms: int = 250,
    auth_provider: AuthProvider | None = None,
) -> None:
    """Set application state references for the UI."""
    _app_state["label_service"] = label_service
    _app_state["qr_size"] = qr_size
    _app_state["settle_delay_ms"] = settle_delay_ms
    _app_state["auth_provider"] = auth_provider


def _page_wrapper(*components: AnyComponent, title: str = "WIT") -> list[AnyComponent]:
    """Wrap components in a standard page layout."""
    return [
        c.PageTitle(text=title),
        c.Navbar(
            title="WIT",
            title_event=GoToEvent(url="/"),
            start_links=[
                c.Link(
                    components=[c.Text(text="Labels")],
                    on_click=GoToEvent(url="/"),
                ),
            ],
        ),
        c.Page(components=list(components)),
    ]


def _parse_ids(ids: str) -> list[str]:
    return [part.strip() for part in ids.split(",") if part.strip()]


async def _open_dialog(mode: str, ids: str, kind: str) -> PrintLabelsDialog:
    """Open a fresh dialog over the in-process label service.

    ``kind`` selects items or locations for batch mode.
    """
    provider = ServiceLabelProvider(_app_state.get("label_service"), qr_size=_app_state.get("qr_size", 200))
    # The browser is the print context and applies the settle delay itself
    dialog = PrintLabelsDialog(provider, settle_delay=0)
    id_list = _parse_ids(ids)
    first = id_list[0] if id_list else None
    if mode == DialogMode.BATCH and kind == "locations":
        await dialog.open(mode, locations=id_list)
    elif mode == DialogMode.BATCH:
        await dialog.open(mode, items=id_list)
    else:
        await dialog.open(mode, item=first, location=first)
    return dialog


def _print_url(base: str, **params: Any) -> str:
    query = {key: value for key, value in params.items() if value not in (None, "", False)}
    return f"{base}?{urlencode(query)}" if query else base


def _label_card(label: LabelRecord, show_qr_only: bool) -> AnyComponent:
    qr_class = "w-20 h-20" if show_qr_only else "w-14 h-14"
    qr_px = 80 if show_qr_only else 56
    components: list[AnyComponent] = [
        c.Image(src=label.qr_code, alt=f"QR code for {label.name}", width=qr_px, height=qr_px, class_name=qr_class),
    ]
    if not show_qr_only:
        info: list[AnyComponent] = [c.Div(class_name="label-name", components=[c.Text(text=name_line(label))])]
        detail = label_detail(label)
        if detail:
            info.append(c.Div(class_name="label-detail", components=[c.Text(text=detail)]))
        if label.barcode:
            info.append(c.Div(class_name="label-barcode", components=[c.Text(text=label.barcode)]))
        if label.expiration_date and label.type == "item":
            info.append(c.Div(class_name="label-detail", components=[c.Text(text=f"Exp: {label.expiration_date}")]))
        components.append(c.Div(class_name="label-info", components=info))
    return c.Div(class_name="col mb-2", components=[c.Div(class_name="label", components=components)])


def _size_link(option_link: Any, preset: LabelSizePreset, selected: bool) -> AnyComponent:
    name = LABEL_SIZES[preset].name
    return option_link(f"[{name}]" if selected else name, size=preset.value)


@router.get("/api/", response_model=FastUI, response_model_exclude_none=True)
async def home() -> list[AnyComponent]:
    """Home page - label sizes and how to print."""
    rows = [
        LabelSizeRow(preset=preset.value, name=size.name, size=f"{size.width:g} x {size.height:g} mm")
        for preset, size in LABEL_SIZES.items()
    ]
    return _page_wrapper(
        c.Heading(text="WIT Labels", level=2),
        c.Paragraph(
            text="Open /labels/print?mode=item&ids=<id> for one item, mode=location for a location, "
            "or mode=batch&kind=items|locations&ids=<id>,<id> for several."
        ),
        c.Heading(text="Label sizes", level=4),
        c.Table(
            data=rows,
            columns=[
                DisplayLookup(field="preset", title="Preset"),
                DisplayLookup(field="name", title="Name"),
                DisplayLookup(field="size", title="Size"),
            ],
        ),
        title="WIT Labels",
    )


@router.get("/api/labels/print", response_model=FastUI, response_model_exclude_none=True)
async def print_labels_page(
    mode: str = "item",
    ids: str = "",
    kind: str = "items",
    columns: int = Query(default=2, ge=MIN_COLUMNS, le=MAX_COLUMNS),
    qr_only: bool = False,
    size: LabelSizePreset = LabelSizePreset.MEDIUM,
) -> list[AnyComponent]:
    """The print-labels dialog: layout options, preview and print action."""
    dialog = await _open_dialog(mode, ids, kind)
    dialog.columns = columns
    dialog.show_qr_only = qr_only
    dialog.label_size = size

    params = {"mode": mode, "ids": ids, "kind": kind, "columns": columns, "qr_only": qr_only, "size": size.value}

    def option_link(text: str, **changes: Any) -> AnyComponent:
        return c.Link(
            components=[c.Text(text=text)],
            on_click=GoToEvent(url=_print_url("/labels/print", **{**params, **changes})),
        )

    current = dialog.current_size
    options: list[AnyComponent] = [
        c.Heading(text="Layout", level=4),
        c.Div(
            class_name="mb-2",
            components=[c.Text(text="Columns: ")]
            + [option_link(f"[{n}]" if n == columns else str(n), columns=n) for n in range(1, MAX_COLUMNS + 1)],
        ),
        c.Div(
            class_name="mb-2",
            components=[option_link("Show labels with details" if qr_only else "QR code only", qr_only=not qr_only)],
        ),
        c.Div(
            class_name="mb-2",
            components=[c.Text(text="Label size: ")]
            + [_size_link(option_link, preset, selected=preset == size) for preset in LabelSizePreset],
        ),
        c.Paragraph(text=f"{current.name}: {current.width:g} x {current.height:g} mm"),
    ]

    if dialog.loading:
        body: list[AnyComponent] = [c.Spinner(text="Generating labels...")]
    elif dialog.error:
        body = [
            c.Paragraph(text=dialog.error),
            option_link("Try again"),
        ]
    elif not dialog.labels:
        body = [c.Paragraph(text="No labels to display")]
    else:
        body = [
            c.Div(
                class_name=f"row row-cols-{dialog.columns}",
                components=[_label_card(label, dialog.show_qr_only) for label in dialog.labels],
            ),
        ]

    actions: list[AnyComponent] = []
    if dialog.can_print:
        document_url = _print_url("/labels/document", **params)
        actions = [
            c.Link(
                components=[c.Text(text="Print Labels")],
                on_click=GoToEvent(url=_print_url("/labels/document", **params, autoprint=1), target="_blank"),
            ),
            c.Link(
                components=[c.Text(text="Open print document")],
                on_click=GoToEvent(url=document_url, target="_blank"),
            ),
        ]

    return _page_wrapper(
        c.Heading(text=dialog.title, level=2),
        *options,
        *body,
        *actions,
        title=f"{dialog.title} - WIT",
    )


@router.get("/labels/document", response_class=HTMLResponse)
async def print_document(
    mode: str = "item",
    ids: str = "",
    kind: str = "items",
    columns: int = Query(default=2, ge=MIN_COLUMNS, le=MAX_COLUMNS),
    qr_only: bool = False,
    autoprint: bool = False,
) -> HTMLResponse:
    """Standalone print document; with ``autoprint`` the browser prints it on load."""
    dialog = await _open_dialog(mode, ids, kind)
    dialog.columns = columns
    dialog.show_qr_only = qr_only

    if not dialog.can_print:
        message = dialog.error or "No labels to display"
        return HTMLResponse(f"<!DOCTYPE html><html><body><p>{escape(message)}</p></body></html>", status_code=404)

    if autoprint:
        host = BrowserPrintHost(settle_delay_ms=_app_state.get("settle_delay_ms", 250))
        await dialog.print_labels(host)
        return HTMLResponse(host.document or "")

    markup = dialog.preview_markup or ""
    return HTMLResponse(render_print_document(markup, dialog.columns, dialog.show_qr_only))


@router.get("/api/reset-password", response_model=FastUI, response_model_exclude_none=True)
@router.get("/api/reset-password/{token:path}", response_model=FastUI, response_model_exclude_none=True)
async def reset_password_page(request: Request) -> list[AnyComponent]:
    """Set a new password using the token from the reset email."""
    token = extract_reset_token(request.url.path)
    if not token:
        return _page_wrapper(
            c.Heading(text="Set new password", level=2),
            c.Paragraph(text="Invalid reset link. Please use the link from your email."),
            title="Reset Password - WIT",
        )

    return _page_wrapper(
        c.Heading(text="Set new password", level=2),
        c.Paragraph(text="Enter your new password below"),
        c.ModelForm(
            model=ResetPasswordForm,
            submit_url=f"/reset-password/{token}/submit",
            display_mode="default",
        ),
        title="Reset Password - WIT",
    )


@router.post(
    "/api/reset-password/{token}/submit",
    response_model=FastUI,
    response_model_exclude_none=True,
)
async def submit_reset_password(request: Request, token: str) -> list[AnyComponent]:
    """Handle reset-password form submission."""
    provider: AuthProvider | None = _app_state.get("auth_provider")
    if provider is None:
        return _page_wrapper(
            c.Heading(text="Error", level=2),
            c.Paragraph(text="Password reset is not available."),
            title="Reset Password - WIT",
        )

    form = await request.form()
    result = await reset_password(
        provider,
        token,
        str(form.get("password", "")),
        str(form.get("confirm_password", "")),
    )

    if result.outcome == ResetOutcome.SUCCESS:
        return _page_wrapper(
            c.Heading(text="Password reset complete", level=2),
            c.Paragraph(text=result.message),
            c.Link(components=[c.Text(text="Sign In")], on_click=GoToEvent(url="/login")),
            title="Reset Password - WIT",
        )

    if result.outcome == ResetOutcome.INVALID_TOKEN:
        return _page_wrapper(
            c.Heading(text="Error", level=2),
            c.Paragraph(text=result.message),
            c.Link(
                components=[c.Text(text="Request a new reset link")],
                on_click=GoToEvent(url="/forgot-password"),
            ),
            title="Reset Password - WIT",
        )

    return _page_wrapper(
        c.Heading(text="Error", level=2),
        c.Paragraph(text=result.message),
        c.Link(
            components=[c.Text(text="<- Try again")],
            on_click=GoToEvent(url=f"/reset-password/{token}"),
        ),
        title="Reset Password - WIT",
    )


@router.get("/{path:path}", response_class=HTMLResponse)
async def spa_handler(request: Request, path: str) -> HTMLResponse:
    """Serve the FastUI SPA for all non-API routes."""
    if path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not Found")
    root_path = request.scope.get("root_path", "")
    api_root_url = f"{root_path}/api" if root_path else "/api"
    return HTMLResponse(_CUSTOM_HTML.format(title="WIT", api_root_url=api_root_url, path_strip=root_path))
