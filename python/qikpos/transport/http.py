"""HTTP exchange helpers and result records shared by the print services.

Every public service function returns one of the result records below and
never raises: HTTP errors, unreachable servers, malformed replies and
validation failures all come back as ``success=False`` with a message.
"""

from __future__ import annotations

import functools
import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type, TypeVar

import aiohttp

from ..exceptions import TransportError

_LOGGER = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

R = TypeVar("R", bound="TransportResult")


@dataclass
class TransportResult:
    success: bool
    message: str = ""

    @classmethod
    def failed(cls: Type[R], message: str) -> R:
        return cls(success=False, message=message)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PrintResult(TransportResult):
    """Outcome of a print request."""


@dataclass
class PrinterListResult(TransportResult):
    printers: List[Any] = field(default_factory=list)


@dataclass
class PrinterSelectionResult(TransportResult):
    printer: Optional[Any] = None


@dataclass
class ServerReply:
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def error_message(self) -> str:
        return f"Error: {self.status} - {self.text}"

    def envelope(self) -> Dict[str, Any]:
        """Parse the ``{success, message, data}`` body; an empty body is ``{}``."""
        if not self.text.strip():
            return {}
        try:
            body = json.loads(self.text)
        except json.JSONDecodeError as exc:
            raise TransportError(f"Malformed response from print server: {exc}") from exc
        if not isinstance(body, dict):
            raise TransportError("Malformed response from print server: expected a JSON object")
        return body


async def send_request(
    method: str,
    url: str,
    payload: Any = None,
    session: Optional[aiohttp.ClientSession] = None,
) -> ServerReply:
    """Issue one request and return the status and body text.

    A session is opened for the call when none is supplied.
    """
    owns_session = session is None
    client = session or aiohttp.ClientSession()
    body = None if payload is None else json.dumps(payload)
    _LOGGER.debug("%s %s", method, url)
    try:
        async with client.request(method, url, data=body, headers=JSON_HEADERS) as resp:
            text = await resp.text()
            _LOGGER.debug("%s %s -> %s", method, url, resp.status)
            return ServerReply(status=resp.status, text=text)
    finally:
        if owns_session:
            await client.close()


def result_boundary(
    result_type: Type[R],
    action: str,
    failure_message: Optional[str] = None,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """Convert any exception raised by a service call into a failed result."""

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            try:
                return await func(*args, **kwargs)
            except Exception as exc:
                _LOGGER.error("Error %s: %s", action, exc)
                description = str(exc) or type(exc).__name__
                message = f"{failure_message}: {description}" if failure_message else f"Error: {description}"
                return result_type.failed(message)

        return wrapper

    return decorator


def _outcome(body: Dict[str, Any], default_message: str) -> tuple[bool, str]:
    success = body.get("success", True)
    if not isinstance(success, bool):
        raise TransportError(f"Malformed response from print server: 'success' is {success!r}, not a boolean")
    message = body.get("message") or (default_message if success else "Print server reported a failure")
    return success, str(message)


def print_result(reply: ServerReply, default_message: str) -> PrintResult:
    if not reply.ok:
        return PrintResult.failed(reply.error_message())
    success, message = _outcome(reply.envelope(), default_message)
    return PrintResult(success=success, message=message)


def printer_list_result(reply: ServerReply) -> PrinterListResult:
    if not reply.ok:
        return PrinterListResult.failed(reply.error_message())
    body = reply.envelope()
    printers = body.get("data") or []
    if not isinstance(printers, list):
        raise TransportError("Malformed printer list: 'data' is not an array")
    success, message = _outcome(body, f"{len(printers)} printer(s) found")
    return PrinterListResult(
        success=success,
        message=message,
        printers=list(printers),
    )


def printer_selection_result(reply: ServerReply, default_message: str) -> PrinterSelectionResult:
    if not reply.ok:
        return PrinterSelectionResult.failed(reply.error_message())
    body = reply.envelope()
    printer = body.get("data")
    success, message = _outcome(body, default_message)
    return PrinterSelectionResult(
        success=success,
        message=message,
        printer=printer,
    )
