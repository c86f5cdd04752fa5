"""Tests for print hosts and the print session."""

import sys
from pathlib import Path

import pytest

from wit.dialog.printing import (
    BrowserPrintHost,
    CommandPrintHost,
    FilePrintHost,
    PrintError,
    PrintHost,
    print_session,
)

DOCUMENT = "<!DOCTYPE html><html><body><p>labels</p></body></html>"


class TrackingHost(PrintHost):
    """Minimal host that tracks whether it was closed."""

    def __init__(self):
        self.opened = False
        self.closed = False

    async def open_document(self):
        self.opened = True

    async def write(self, markup):
        pass

    async def close_stream(self):
        pass

    async def print(self):
        pass

    async def close(self):
        self.closed = True


async def _print(host: PrintHost, document: str = DOCUMENT) -> None:
    async with print_session(host):
        await host.write(document)
        await host.close_stream()
        await host.print()


class TestPrintSession:
    """Tests for print_session."""

    @pytest.mark.asyncio
    async def test_opens_and_closes(self):
        host = TrackingHost()
        async with print_session(host) as session_host:
            assert session_host is host
            assert host.opened
            assert not host.closed
        assert host.closed

    @pytest.mark.asyncio
    async def test_closes_on_error(self):
        host = TrackingHost()
        with pytest.raises(ValueError):
            async with print_session(host):
                raise ValueError("boom")
        assert host.closed


class TestFilePrintHost:
    """Tests for FilePrintHost."""

    @pytest.mark.asyncio
    async def test_saves_document(self, tmp_path):
        host = FilePrintHost(tmp_path / "out")
        await _print(host)
        assert len(host.printed) == 1
        path = host.printed[0]
        assert path.parent == tmp_path / "out"
        assert path.name.startswith("wit-labels-")
        assert path.suffix == ".html"
        assert path.read_text(encoding="utf-8") == DOCUMENT

    @pytest.mark.asyncio
    async def test_multiple_writes(self, tmp_path):
        host = FilePrintHost(tmp_path)
        async with print_session(host):
            await host.write("<p>a</p>")
            await host.write("<p>b</p>")
            await host.close_stream()
            await host.print()
        assert host.printed[0].read_text(encoding="utf-8") == "<p>a</p><p>b</p>"

    @pytest.mark.asyncio
    async def test_print_before_close_stream(self, tmp_path):
        host = FilePrintHost(tmp_path)
        with pytest.raises(PrintError):
            async with print_session(host):
                await host.write(DOCUMENT)
                await host.print()
        assert host.printed == []


class TestCommandPrintHost:
    """Tests for CommandPrintHost."""

    @pytest.mark.asyncio
    async def test_runs_command_with_document_path(self, tmp_path):
        copy = tmp_path / "copy.html"
        script = f"import shutil, sys; shutil.copy(sys.argv[1], {str(copy)!r})"
        host = CommandPrintHost([sys.executable, "-c", script])
        await _print(host)
        assert copy.read_text(encoding="utf-8") == DOCUMENT

    @pytest.mark.asyncio
    async def test_temp_file_removed_on_close(self):
        host = CommandPrintHost([sys.executable, "-c", "pass"])
        async with print_session(host):
            await host.write(DOCUMENT)
            await host.close_stream()
            temp_path = host._path
            assert temp_path is not None and temp_path.exists()
            await host.print()
        assert not Path(temp_path).exists()

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        host = CommandPrintHost([sys.executable, "-c", "import sys; sys.stderr.write('no printer'); sys.exit(3)"])
        with pytest.raises(PrintError, match="status 3: no printer"):
            await _print(host)
        assert host._path is None

    @pytest.mark.asyncio
    async def test_missing_command(self):
        host = CommandPrintHost(["wit-no-such-print-command"])
        with pytest.raises(PrintError, match="Failed to run print command"):
            await _print(host)

    def test_empty_command(self):
        with pytest.raises(ValueError):
            CommandPrintHost([])


class TestBrowserPrintHost:
    """Tests for BrowserPrintHost."""

    @pytest.mark.asyncio
    async def test_autoprint_script_injected(self):
        host = BrowserPrintHost(settle_delay_ms=300)
        await _print(host)
        assert host.autoprint
        assert host.document.startswith("<!DOCTYPE html>")
        assert "window.print()" in host.document
        assert "300" in host.document
        assert host.document.index("<script>") < host.document.index("</body>")

    @pytest.mark.asyncio
    async def test_document_kept_without_print(self):
        host = BrowserPrintHost()
        async with print_session(host):
            await host.write(DOCUMENT)
            await host.close_stream()
        assert not host.autoprint
        assert host.document == DOCUMENT
