#!/usr/bin/env python3
"""
qikpos command line
-------------------
Printer discovery, selection and raw ZPL/binary printing against a QikPOS
print server. Results are printed as JSON; the exit status is 0 when the
server reported success and 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

from dotenv import load_dotenv

from . import __version__
from .transport import (
    get_label_printers,
    get_printers,
    get_selected_label_printer,
    get_selected_printer,
    print_raw,
    print_zpl,
    select_label_printer,
    select_printer,
)
from .transport.http import TransportResult

_LOGGER = logging.getLogger(__name__)


# ------------------------------------------------------
#  Sub-commands
# ------------------------------------------------------
async def _cmd_printers(args: argparse.Namespace) -> TransportResult:
    if args.label:
        return await get_label_printers(args.url)
    return await get_printers(args.url)


async def _cmd_select(args: argparse.Namespace) -> TransportResult:
    if args.label:
        return await select_label_printer(args.name, args.url)
    return await select_printer(args.name, args.url)


async def _cmd_selected(args: argparse.Namespace) -> TransportResult:
    if args.label:
        return await get_selected_label_printer(args.url)
    return await get_selected_printer(args.url)


async def _cmd_zpl(args: argparse.Namespace) -> TransportResult:
    zpl = Path(args.file).read_text(encoding="utf-8")
    return await print_zpl(zpl, args.printer, args.copies, args.url)


async def _cmd_raw(args: argparse.Namespace) -> TransportResult:
    data = base64.b64encode(Path(args.file).read_bytes()).decode("ascii")
    return await print_raw(data, args.printer, args.copies, args.url)


COMMANDS: Dict[str, Callable[[argparse.Namespace], Awaitable[TransportResult]]] = {
    "printers": _cmd_printers,
    "select": _cmd_select,
    "selected": _cmd_selected,
    "zpl": _cmd_zpl,
    "raw": _cmd_raw,
}


# ------------------------------------------------------
#  CLI entrypoint
# ------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qikpos", description="QikPOS print server client")
    parser.add_argument("--url", default=None, help="Server base URL (default: QIKPOS_*_URL or localhost)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    printers = sub.add_parser("printers", help="List available printers")
    printers.add_argument("--label", action="store_true", help="Query the label server")

    select = sub.add_parser("select", help="Select the default printer")
    select.add_argument("name", help="Printer name")
    select.add_argument("--label", action="store_true", help="Use the label server")

    selected = sub.add_parser("selected", help="Show the selected printer")
    selected.add_argument("--label", action="store_true", help="Query the label server")

    for name, help_text in (("zpl", "Print a ZPL file"), ("raw", "Print a binary file as raw data")):
        raw = sub.add_parser(name, help=help_text)
        raw.add_argument("file", help="File to send")
        raw.add_argument("--printer", default=None, help="Target printer (default: server selection)")
        raw.add_argument("--copies", type=int, default=1, help="Number of copies")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = asyncio.run(COMMANDS[args.command](args))
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.error("Cannot read %s: %s", getattr(args, "file", "input"), exc)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
