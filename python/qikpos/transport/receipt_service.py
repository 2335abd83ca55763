"""Receipt printer (ESC/POS) server calls."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

import aiohttp

from .. import config
from ..builders.receipt import ReceiptCommandBuilder
from ..schemas import validate_receipt_commands
from .http import (
    PrinterListResult,
    PrinterSelectionResult,
    PrintResult,
    printer_list_result,
    printer_selection_result,
    print_result,
    result_boundary,
    send_request,
)

ReceiptJob = Union[ReceiptCommandBuilder, Sequence[Mapping[str, Any]]]


@result_boundary(PrintResult, "sending print commands")
async def print_receipt(
    invoice: ReceiptJob,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrintResult:
    """Build (or validate) a receipt job and send it to the print server."""

    if isinstance(invoice, ReceiptCommandBuilder):
        commands = await invoice.build()
    else:
        commands = validate_receipt_commands(invoice)
    url = config.endpoint(api_url or config.receipt_api_url(), config.RECEIPT_PRINT_PATH)
    reply = await send_request("POST", url, commands, session)
    return print_result(reply, "Print job sent successfully")


@result_boundary(PrinterListResult, "fetching printers")
async def get_printers(
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterListResult:
    """List the printers known to the receipt server."""

    url = config.endpoint(api_url or config.receipt_api_url(), config.RECEIPT_LIST_PATH)
    return printer_list_result(await send_request("GET", url, session=session))


@result_boundary(PrinterSelectionResult, "selecting printer")
async def select_printer(
    printer_name: str,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterSelectionResult:
    """Make ``printer_name`` the receipt server's default printer."""

    url = config.endpoint(api_url or config.receipt_api_url(), config.RECEIPT_SELECT_PATH)
    payload: Dict[str, Any] = {"printerName": printer_name}
    reply = await send_request("POST", url, payload, session)
    return printer_selection_result(reply, f"Printer '{printer_name}' selected")


@result_boundary(PrinterSelectionResult, "fetching selected printer", "Could not get the selected printer")
async def get_selected_printer(
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterSelectionResult:
    url = config.endpoint(api_url or config.receipt_api_url(), config.RECEIPT_SELECTED_PATH)
    reply = await send_request("GET", url, session=session)
    return printer_selection_result(reply, "Selected printer retrieved")
