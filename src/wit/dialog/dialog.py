"""Label composition dialog.

Fetches label records for the entities it was opened with, lets the user
adjust the layout, and prints the preview through a print host.
"""

import asyncio
import itertools
import logging
from collections.abc import Iterable
from typing import Any

from wit.dialog.printing import PrintHost, print_session
from wit.dialog.render import dialog_title, render_preview, render_print_document
from wit.dialog.state import DialogPhase, DialogState
from wit.labels.provider import LabelDataProvider
from wit.labels.requests import build_label_request
from wit.models.label import LABEL_SIZES, DialogMode, LabelRecord, LabelSize, LabelSizePreset

logger = logging.getLogger(__name__)

DEFAULT_FETCH_ERROR = "Failed to generate labels"
DEFAULT_SETTLE_DELAY = 0.25


class PrintLabelsDialog:
    """Controller for one print-labels dialog.

    Args:
        provider: Source of label records.
        settle_delay: Seconds to wait between finishing the print document
            and printing it.
    """

    def __init__(self, provider: LabelDataProvider, settle_delay: float = DEFAULT_SETTLE_DELAY) -> None:
        self.provider = provider
        self.settle_delay = settle_delay
        self.visible = False
        self.mode: DialogMode = DialogMode.ITEM
        self.item: Any = None
        self.location: Any = None
        self.items: tuple[Any, ...] = ()
        self.locations: tuple[Any, ...] = ()
        self.state = DialogState()
        self._tokens = itertools.count(1)
        self._current_token = 0

    async def open(
        self,
        mode: DialogMode | str,
        item: Any = None,
        location: Any = None,
        items: Iterable[Any] = (),
        locations: Iterable[Any] = (),
    ) -> None:
        """Show the dialog for the given entities and fetch their labels."""
        try:
            self.mode = DialogMode(mode)
        except ValueError:
            # Rejected with a visible error by the fetch
            self.mode = mode  # type: ignore[assignment]
        self.item = item
        self.location = location
        self.items = tuple(items or ())
        self.locations = tuple(locations or ())
        self.state = DialogState()
        self.visible = True
        await self.fetch_labels()

    def close(self) -> None:
        """Hide the dialog and drop everything it fetched."""
        self._current_token = next(self._tokens)
        self.state.reset()
        self.visible = False

    async def fetch_labels(self) -> None:
        if not self.visible:
            logger.debug("Dialog is closed, not fetching labels")
            return
        token = self._current_token = next(self._tokens)
        self.state.start_loading()
        try:
            request = build_label_request(
                self.mode,
                item=self.item,
                location=self.location,
                items=self.items,
                locations=self.locations,
            )
            labels: list[LabelRecord] = [] if request is None else await request.dispatch(self.provider)
            if token == self._current_token:
                self.state.succeed(labels)
            else:
                logger.debug(f"Discarding stale label fetch ({len(labels)} labels)")
        except Exception as e:
            if token == self._current_token:
                logger.error(f"Failed to fetch labels: {e}")
                self.state.fail(str(e) or DEFAULT_FETCH_ERROR)
            else:
                logger.debug(f"Discarding stale label fetch failure: {e}")
        finally:
            if token == self._current_token and self.state.phase == DialogPhase.LOADING:
                self.state.abort()

    async def retry(self) -> None:
        """Fetch again after a failure."""
        await self.fetch_labels()

    @property
    def title(self) -> str:
        return dialog_title(self.mode, len(self.state.labels))

    @property
    def labels(self) -> tuple[LabelRecord, ...]:
        return self.state.labels

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def columns(self) -> int:
        return self.state.columns

    @columns.setter
    def columns(self, value: int) -> None:
        self.state.columns = value

    @property
    def show_qr_only(self) -> bool:
        return self.state.show_qr_only

    @show_qr_only.setter
    def show_qr_only(self, value: bool) -> None:
        self.state.show_qr_only = value

    @property
    def label_size(self) -> LabelSizePreset:
        return self.state.label_size

    @label_size.setter
    def label_size(self, value: LabelSizePreset | str) -> None:
        self.state.label_size = LabelSizePreset(value)

    @property
    def current_size(self) -> LabelSize:
        return LABEL_SIZES[self.state.label_size]

    @property
    def preview_markup(self) -> str | None:
        """Rendered label grid, or None when there is nothing to preview."""
        if self.state.phase != DialogPhase.READY or not self.state.labels:
            return None
        return render_preview(self.state.labels, self.state.columns, self.state.show_qr_only)

    @property
    def can_print(self) -> bool:
        return not self.state.loading and bool(self.state.labels)

    async def print_labels(self, host: PrintHost) -> bool:
        """Print the current preview through ``host``.

        Returns:
            True if a document was printed, False if there was nothing to print.

        Raises:
            PrintError: If the host fails to print.
        """
        markup = self.preview_markup
        if markup is None or not self.can_print:
            logger.debug("Nothing to print")
            return False

        document = render_print_document(markup, self.state.columns, self.state.show_qr_only)
        async with print_session(host):
            await host.write(document)
            await host.close_stream()
            if self.settle_delay > 0:
                await asyncio.sleep(self.settle_delay)
            await host.print()

        logger.info(f"Printed {len(self.state.labels)} label(s)")
        return True
