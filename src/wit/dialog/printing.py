"""Print hosts: isolated contexts that receive a finished print document.

A host is always used through :func:`print_session`, which guarantees the
context is closed even if printing fails or is cancelled.
"""

import asyncio
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

from wit.dialog.render import autoprint_script

logger = logging.getLogger(__name__)


class PrintError(Exception):
    """Exception raised when a print host fails to print."""

    pass


class PrintHost(ABC):
    """Abstract isolated print context."""

    @abstractmethod
    async def open_document(self) -> None:
        """Open a fresh, empty document."""
        pass

    @abstractmethod
    async def write(self, markup: str) -> None:
        """Append markup to the open document."""
        pass

    @abstractmethod
    async def close_stream(self) -> None:
        """Finish writing; the document is complete after this."""
        pass

    @abstractmethod
    async def print(self) -> None:
        """Print the completed document.

        Raises:
            PrintError: If printing fails.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the context. Must be safe to call in any state."""
        pass


@asynccontextmanager
async def print_session(host: PrintHost) -> AsyncIterator[PrintHost]:
    """Open a document on ``host`` and always close the host afterwards."""
    try:
        await host.open_document()
        yield host
    finally:
        await host.close()


class _BufferedHost(PrintHost):
    """Collects written markup in memory until the stream is closed."""

    def __init__(self) -> None:
        self._chunks: list[str] = []
        self._document: str | None = None

    async def open_document(self) -> None:
        self._chunks = []
        self._document = None

    async def write(self, markup: str) -> None:
        self._chunks.append(markup)

    async def close_stream(self) -> None:
        self._document = "".join(self._chunks)
        self._chunks = []

    def _require_document(self) -> str:
        if self._document is None:
            raise PrintError("Document has not been completed")
        return self._document


class FilePrintHost(_BufferedHost):
    """Saves each print document as an HTML file in ``output_dir``."""

    def __init__(self, output_dir: Path | str) -> None:
        super().__init__()
        self.output_dir = Path(output_dir)
        self.printed: list[Path] = []
        self._path: Path | None = None

    async def close_stream(self) -> None:
        await super().close_stream()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
        self._path = self.output_dir / f"wit-labels-{timestamp}.html"
        self._path.write_text(self._require_document(), encoding="utf-8")

    async def print(self) -> None:
        if self._path is None:
            raise PrintError("Document has not been completed")
        self.printed.append(self._path)
        logger.info(f"Saved label document to {self._path}")

    async def close(self) -> None:
        self._chunks = []
        self._document = None
        self._path = None


class CommandPrintHost(_BufferedHost):
    """Prints through an external command such as ``lp``.

    The document is written to a temporary HTML file whose path is appended
    to ``command``. The file is removed when the host is closed.
    """

    def __init__(self, command: Sequence[str]) -> None:
        super().__init__()
        if not command:
            raise ValueError("Print command must not be empty")
        self.command = list(command)
        self._path: Path | None = None

    async def close_stream(self) -> None:
        await super().close_stream()
        fd, name = tempfile.mkstemp(prefix="wit-labels-", suffix=".html")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(self._require_document())
        self._path = Path(name)

    async def print(self) -> None:
        if self._path is None:
            raise PrintError("Document has not been completed")

        args = [*self.command, str(self._path)]
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise PrintError(f"Failed to run print command {self.command[0]}: {e}") from e

        _, stderr = await process.communicate()
        if process.returncode != 0:
            detail = stderr.decode(errors="replace").strip()
            message = f"Print command exited with status {process.returncode}"
            raise PrintError(f"{message}: {detail}" if detail else message)
        logger.info(f"Sent label document to {' '.join(self.command)}")

    async def close(self) -> None:
        self._chunks = []
        self._document = None
        if self._path is not None:
            self._path.unlink(missing_ok=True)
            self._path = None


class BrowserPrintHost(_BufferedHost):
    """Buffers the document for an HTTP response; the browser does the printing.

    Printing marks the document for auto-print: a load handler waits
    ``settle_delay_ms`` for layout, then opens the print dialog and closes
    the window. Use it with a dialog whose own settle delay is 0.
    """

    def __init__(self, settle_delay_ms: int = 250) -> None:
        super().__init__()
        self.settle_delay_ms = settle_delay_ms
        self.autoprint = False
        self.document: str | None = None

    async def open_document(self) -> None:
        await super().open_document()
        self.autoprint = False
        self.document = None

    async def print(self) -> None:
        document = self._require_document()
        self.autoprint = True
        script = autoprint_script(self.settle_delay_ms)
        if "</body>" in document:
            document = document.replace("</body>", f"{script}\n</body>", 1)
        else:
            document = f"{document}{script}"
        self.document = document

    async def close(self) -> None:
        # The finished document outlives the session; it is the response body
        if self.document is None and self._document is not None:
            self.document = self._document
        self._chunks = []
        self._document = None
