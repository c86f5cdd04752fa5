"""CLI tool for printing labels without a browser."""

import argparse
import asyncio
import logging
import shlex
import sys
from pathlib import Path

from wit.config import AppConfig, load_config, settings
from wit.dialog.dialog import PrintLabelsDialog
from wit.dialog.printing import CommandPrintHost, FilePrintHost, PrintError, PrintHost
from wit.labels.provider import HttpLabelProvider
from wit.models.label import LABEL_SIZES, DialogMode, LabelSizePreset


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch labels from a WIT server and print them.",
        prog="wit-labels",
    )
    parser.add_argument(
        "mode",
        choices=[mode.value for mode in DialogMode],
        help="What to print: one item, one location, or a batch",
    )
    parser.add_argument(
        "ids",
        nargs="*",
        metavar="ID",
        help="Item or location id(s)",
    )
    parser.add_argument(
        "--locations",
        action="store_true",
        help="In batch mode, treat the ids as locations instead of items",
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="WIT server URL (default: app_url from config)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: WIT_CONFIG_FILE or ./config.yaml)",
    )
    parser.add_argument(
        "--columns",
        type=int,
        choices=range(1, 5),
        default=2,
        help="Labels per row (default: 2)",
    )
    parser.add_argument(
        "--qr-only",
        action="store_true",
        help="Print only the QR codes",
    )
    parser.add_argument(
        "--size",
        choices=[preset.value for preset in LabelSizePreset],
        default=LabelSizePreset.MEDIUM.value,
        help="Label size preset (default: medium)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Directory to save the print document in",
    )
    output.add_argument(
        "--command",
        default=None,
        help='Print command; the document path is appended (e.g. "lp -d office")',
    )
    return parser


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    provider = HttpLabelProvider(args.api_url or config.app_url, qr_size=config.qr_size)
    dialog = PrintLabelsDialog(provider, settle_delay=config.print.settle_delay)

    if args.mode == DialogMode.BATCH and args.locations:
        await dialog.open(args.mode, locations=args.ids)
    elif args.mode == DialogMode.BATCH:
        await dialog.open(args.mode, items=args.ids)
    else:
        await dialog.open(args.mode, item=args.ids[0], location=args.ids[0])

    if dialog.error:
        print(f"Error: {dialog.error}", file=sys.stderr)
        return 1

    dialog.columns = args.columns
    dialog.show_qr_only = args.qr_only
    dialog.label_size = args.size

    host: PrintHost
    if args.command:
        host = CommandPrintHost(shlex.split(args.command))
    else:
        host = FilePrintHost(args.output or config.print.output_dir)

    try:
        printed = await dialog.print_labels(host)
    except PrintError as e:
        print(f"Error printing labels: {e}", file=sys.stderr)
        return 1

    if not printed:
        print("No labels to display", file=sys.stderr)
        return 1

    size = LABEL_SIZES[dialog.label_size]
    print(f"{dialog.title}: printed {len(dialog.labels)} label(s) for {size.name} stock")
    if isinstance(host, FilePrintHost):
        for path in host.printed:
            print(f"Saved to: {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for wit-labels CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.mode in (DialogMode.ITEM, DialogMode.LOCATION) and len(args.ids) != 1:
        parser.error(f"{args.mode} mode takes exactly one id")
    if args.locations and args.mode != DialogMode.BATCH:
        parser.error("--locations only applies to batch mode")

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config(args.config or settings.config_file)
    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    sys.exit(main())
