"""Label (ZPL) builder: positioned elements plus label-level metadata."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from ..protocol import CommandEmitter, ImageResolver, dedupe_barcodes
from ..schemas import validate_barcode_options, validate_definition, validate_label_job

_LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 20
DEFAULT_QR_SIZE = 5
DEFAULT_THICKNESS = 1

ROTATION_TO_ORIENTATION: Dict[int, str] = {0: "N", 90: "R", 180: "I", 270: "B"}
ORIENTATION_TO_ROTATION: Dict[str, int] = {v: k for k, v in ROTATION_TO_ORIENTATION.items()}

# Stored barcode key order; also the legacy positional argument order.
BARCODE_FIELDS = (
    "value",
    "x",
    "y",
    "height",
    "type",
    "width",
    "orientation",
    "printText",
    "textAbove",
    "checkDigit",
    "mode",
)


def _check(definition: str, value: Any) -> Any:
    return validate_definition("label", definition, value)


class LabelCommandBuilder(CommandEmitter):
    """Accumulates label elements for one print job.

    Positions and sizes are in printer dots; the label ``width`` and
    ``height`` are in inches. Metadata left as ``None`` falls back to the
    schema defaults (4 x 6 inches, 203 dpi) when the job is built.
    """

    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        dpi: Optional[float] = None,
        printer_name: Optional[str] = None,
        *,
        image_resolver: Optional[ImageResolver] = None,
    ) -> None:
        super().__init__(image_resolver)
        self.width = width
        self.height = height
        self.dpi = dpi
        self.printer_name = printer_name
        self.copies = 1

    def _append(self, command: Dict[str, Any]) -> "LabelCommandBuilder":
        self._commands.append(_check("command", command))
        return self

    # ---- Job metadata ----
    def set_copies(self, qty: int) -> "LabelCommandBuilder":
        """Set the number of copies; anything below 1 prints one copy."""
        self.copies = max(1, qty)
        return self

    def set_printer(self, name: str) -> "LabelCommandBuilder":
        self.printer_name = name
        return self

    # ---- Elements ----
    def text(
        self,
        text: str,
        x: float,
        y: float,
        font_size: float = DEFAULT_FONT_SIZE,
        rotation: int = 0,
        orientation: Optional[str] = None,
        font_width: Optional[float] = None,
    ) -> "LabelCommandBuilder":
        """Add a text field.

        ``rotation`` (0/90/180/270) is the legacy way of turning text; an
        explicit ``orientation`` code (N/R/I/B) takes precedence over it.
        ``font_width`` is stored in ``width`` when given.
        """
        if orientation is not None:
            orientation = _check("orientation", orientation)
            rotation = ORIENTATION_TO_ROTATION[orientation]
        else:
            rotation = _check("rotation", rotation)
            orientation = ROTATION_TO_ORIENTATION[rotation]
        command: Dict[str, Any] = {
            "cmd": "text",
            "value": text,
            "x": x,
            "y": y,
            "fontSize": font_size,
            "rotation": rotation,
            "orientation": orientation,
        }
        if font_width is not None:
            command["width"] = font_width
        return self._append(command)

    def barcode(
        self,
        value: Union[str, Mapping[str, Any]],
        x: Optional[float] = None,
        y: Optional[float] = None,
        height: Optional[float] = None,
        barcode_type: Optional[str] = None,
        width: Optional[float] = None,
        orientation: Optional[str] = None,
        print_text: Optional[bool] = None,
        text_above: Optional[bool] = None,
        check_digit: Optional[bool] = None,
        mode: Optional[str] = None,
    ) -> "LabelCommandBuilder":
        """Add a barcode.

        Pass either one options mapping using the wire field names
        (``{"value": ..., "x": ..., "y": ..., "printText": False}``) or the
        legacy positional form ``barcode(value, x, y, height, type, width,
        orientation, printText, textAbove, checkDigit, mode)``. Both are
        defaulted through the schema and stored identically.
        """
        positional = (x, y, height, barcode_type, width, orientation, print_text, text_above, check_digit, mode)
        if isinstance(value, Mapping):
            if any(arg is not None for arg in positional):
                raise TypeError("barcode() takes an options mapping or positional arguments, not both")
            options = dict(value)
        else:
            options = {
                field: arg
                for field, arg in zip(BARCODE_FIELDS, (value, *positional))
                if arg is not None
            }
        valid = validate_barcode_options(options)
        command: Dict[str, Any] = {"cmd": "barcode"}
        for field in BARCODE_FIELDS:
            command[field] = valid[field]
        return self._append(command)

    def qr_code(self, value: str, x: float, y: float, size: float = DEFAULT_QR_SIZE) -> "LabelCommandBuilder":
        return self._append({"cmd": "qrcode", "value": value, "x": x, "y": y, "width": size})

    def image(self, image_path: str, x: float, y: float, width: float, height: float) -> "LabelCommandBuilder":
        """Add an image loaded from a file path, URL or data URI.

        The slot is reserved now; the picture is fetched in the background
        and converted to base64 before :meth:`build` returns.
        """
        _check("command", {"cmd": "image", "value": "", "x": x, "y": y, "width": width, "height": height})
        self.emit_image("image", image_path, x=x, y=y, width=width, height=height)
        return self

    def image_base64(self, image_base64: str, x: float, y: float, width: float, height: float) -> "LabelCommandBuilder":
        return self._append(
            {"cmd": "image", "value": image_base64, "x": x, "y": y, "width": width, "height": height}
        )

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float = DEFAULT_THICKNESS,
    ) -> "LabelCommandBuilder":
        # The end point travels in width/height and the thickness in fontSize.
        return self._append(
            {"cmd": "line", "x": x1, "y": y1, "width": x2, "height": y2, "fontSize": thickness}
        )

    def rectangle(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        thickness: float = DEFAULT_THICKNESS,
    ) -> "LabelCommandBuilder":
        return self._append(
            {"cmd": "rectangle", "x": x, "y": y, "width": width, "height": height, "fontSize": thickness}
        )

    # ---- Build ----
    def to_request(self) -> Dict[str, Any]:
        """Assemble the unvalidated job; metadata set to ``None`` is omitted."""
        request: Dict[str, Any] = {
            "printerName": self.printer_name,
            "width": self.width,
            "height": self.height,
            "dpi": self.dpi,
            "copies": self.copies,
        }
        request = {key: value for key, value in request.items() if value is not None}
        request["commands"] = dedupe_barcodes(self._commands)
        return request

    async def build(self) -> Dict[str, Any]:
        """Wait for pending images, drop duplicate barcodes and validate the job."""

        await self.resolve_images()
        job = validate_label_job(self.to_request())
        _LOGGER.debug(
            "Built label %sx%s in @ %s dpi with %d command(s)",
            job["width"],
            job["height"],
            job["dpi"],
            len(job["commands"]),
        )
        return job


def create_label(
    width: Optional[float] = None,
    height: Optional[float] = None,
    dpi: Optional[float] = None,
    printer_name: Optional[str] = None,
    *,
    image_resolver: Optional[ImageResolver] = None,
) -> LabelCommandBuilder:
    """Return a new label builder (defaults: 4 x 6 inches at 203 dpi)."""

    return LabelCommandBuilder(width, height, dpi, printer_name, image_resolver=image_resolver)
