"""Receipt (ESC/POS) command factories and the chainable receipt builder."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..protocol import CommandEmitter, ImageResolver
from ..schemas import validate_definition, validate_receipt_commands

_LOGGER = logging.getLogger(__name__)

PrintStyle = Union[str, Sequence[str]]


def _check(definition: str, value: Any) -> Any:
    return validate_definition("receipt", definition, value)


# ---- Command factories ----
def initialize() -> Dict[str, Any]:
    return {"cmd": "Initialize"}


def print_line(text: str) -> Dict[str, Any]:
    return {"cmd": "PrintLine", "value": text}


def feed_lines(qty: int) -> Dict[str, Any]:
    """Feed ``qty`` blank lines; ``qty`` must be between 1 and 10."""
    return {"cmd": "FeedLines", "value": str(int(_check("feedLines", qty)))}


def code_page(code: str) -> Dict[str, Any]:
    return {"cmd": "CodePage", "value": _check("codePage", code)}


def print_image(base64_data: str, width: Optional[float] = None) -> Dict[str, Any]:
    command: Dict[str, Any] = {"cmd": "PrintImage", "value": base64_data}
    if width is not None:
        command["width"] = width
    return command


def qr_code(value: str) -> Dict[str, Any]:
    return {"cmd": "PrintQRCode", "value": value}


def barcode(value: str, barcode_type: str) -> Dict[str, Any]:
    return {"cmd": "PrintBarcode", "value": value, "type": _check("barcodeType", barcode_type)}


def set_style(style: PrintStyle) -> Dict[str, Any]:
    """Select print styles; a list of options is sent as one ``", "`` joined value."""
    if isinstance(style, (list, tuple)):
        style = list(style)
    valid = _check("printStyle", style)
    value = valid if isinstance(valid, str) else ", ".join(valid)
    return {"cmd": "SetStyles", "value": value}


def left_align() -> Dict[str, Any]:
    return {"cmd": "LeftAlign"}


def center_align() -> Dict[str, Any]:
    return {"cmd": "CenterAlign"}


def right_align() -> Dict[str, Any]:
    return {"cmd": "RightAlign"}


def clear() -> Dict[str, Any]:
    return {"cmd": "Clear"}


def full_cut() -> Dict[str, Any]:
    return {"cmd": "FullCut"}


class ReceiptCommandBuilder(CommandEmitter):
    """Accumulates receipt commands in call order.

    Every method validates its argument before anything is appended, so a
    rejected call leaves the sequence unchanged. ``image`` inserts a
    placeholder and resolves the picture in the background; call
    :meth:`build` to wait for it.
    """

    def __init__(self, image_resolver: Optional[ImageResolver] = None) -> None:
        super().__init__(image_resolver)

    def _append(self, command: Dict[str, Any]) -> "ReceiptCommandBuilder":
        self._commands.append(_check("command", command))
        return self

    def initialize(self) -> "ReceiptCommandBuilder":
        return self._append(initialize())

    def text(self, text: str) -> "ReceiptCommandBuilder":
        return self._append(print_line(text))

    def feed(self, qty: int) -> "ReceiptCommandBuilder":
        return self._append(feed_lines(qty))

    def code_page(self, code: str) -> "ReceiptCommandBuilder":
        return self._append(code_page(code))

    def image(self, image_path: str, width: Optional[float] = None) -> "ReceiptCommandBuilder":
        if width is not None:
            _check("command", print_image("", width))
        self.emit_image("PrintImage", image_path, width=width)
        return self

    def qr_code(self, value: str) -> "ReceiptCommandBuilder":
        return self._append(qr_code(value))

    def barcode(self, value: str, barcode_type: str) -> "ReceiptCommandBuilder":
        return self._append(barcode(value, barcode_type))

    def text_style(self, style: PrintStyle) -> "ReceiptCommandBuilder":
        return self._append(set_style(style))

    def left(self) -> "ReceiptCommandBuilder":
        return self._append(left_align())

    def center(self) -> "ReceiptCommandBuilder":
        return self._append(center_align())

    def right(self) -> "ReceiptCommandBuilder":
        return self._append(right_align())

    def clear(self) -> "ReceiptCommandBuilder":
        return self._append(clear())

    def full_cut(self) -> "ReceiptCommandBuilder":
        return self._append(full_cut())

    async def build(self) -> List[Dict[str, Any]]:
        """Wait for pending images and return the validated command list."""

        await self.resolve_images()
        commands = validate_receipt_commands(self._commands)
        _LOGGER.debug("Built receipt with %d command(s)", len(commands))
        return commands


def create_invoice(image_resolver: Optional[ImageResolver] = None) -> ReceiptCommandBuilder:
    """Return a new, empty receipt builder."""

    return ReceiptCommandBuilder(image_resolver)
