"""Label printer (ZPL) server calls."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

import aiohttp

from .. import config
from ..builders.label import LabelCommandBuilder
from ..schemas import validate_label_job, validate_raw_job, validate_zpl_job
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

LabelJob = Union[LabelCommandBuilder, Mapping[str, Any]]


def _label_url(api_url: Optional[str], path: str) -> str:
    return config.endpoint(api_url or config.label_api_url(), path)


def _raw_job(key: str, payload: str, printer_name: Optional[str], copies: int) -> Dict[str, Any]:
    job: Dict[str, Any] = {key: payload, "copies": max(1, copies)}
    if printer_name is not None:
        job["printerName"] = printer_name
    return job


@result_boundary(PrintResult, "sending label commands")
async def print_label(
    label: LabelJob,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrintResult:
    """Build (or validate) a label job and send it to the label server."""

    if isinstance(label, LabelCommandBuilder):
        request = await label.build()
    else:
        request = validate_label_job(label)
    reply = await send_request("POST", _label_url(api_url, config.LABEL_PRINT_PATH), request, session)
    return print_result(reply, "Label sent successfully")


@result_boundary(PrintResult, "sending ZPL code")
async def print_zpl(
    zpl_code: str,
    printer_name: Optional[str] = None,
    copies: int = 1,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrintResult:
    """Send ready-made ZPL code straight to the printer."""

    job = validate_zpl_job(_raw_job("zpl", zpl_code, printer_name, copies))
    reply = await send_request("POST", _label_url(api_url, config.LABEL_ZPL_PATH), job, session)
    return print_result(reply, "ZPL sent successfully")


@result_boundary(PrintResult, "sending raw data")
async def print_raw(
    raw_data: str,
    printer_name: Optional[str] = None,
    copies: int = 1,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrintResult:
    """Send base64-encoded binary data straight to the printer."""

    job = validate_raw_job(_raw_job("data", raw_data, printer_name, copies))
    reply = await send_request("POST", _label_url(api_url, config.LABEL_RAW_PATH), job, session)
    return print_result(reply, "Raw data sent successfully")


@result_boundary(PrinterListResult, "fetching label printers")
async def get_label_printers(
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterListResult:
    reply = await send_request("GET", _label_url(api_url, config.LABEL_LIST_PATH), session=session)
    return printer_list_result(reply)


@result_boundary(PrinterSelectionResult, "selecting label printer")
async def select_label_printer(
    printer_name: str,
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterSelectionResult:
    """Make ``printer_name`` the label server's default printer."""

    payload = {"printerName": printer_name}
    reply = await send_request("POST", _label_url(api_url, config.LABEL_SELECT_PATH), payload, session)
    return printer_selection_result(reply, f"Label printer '{printer_name}' selected")


@result_boundary(
    PrinterSelectionResult,
    "fetching selected label printer",
    "Could not get the selected label printer",
)
async def get_selected_label_printer(
    api_url: Optional[str] = None,
    *,
    session: Optional[aiohttp.ClientSession] = None,
) -> PrinterSelectionResult:
    reply = await send_request("GET", _label_url(api_url, config.LABEL_SELECTED_PATH), session=session)
    return printer_selection_result(reply, "Selected label printer retrieved")
