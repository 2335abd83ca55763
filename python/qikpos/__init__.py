"""Client library for the QikPOS receipt and label print servers.

Build a job with :func:`create_invoice` or :func:`create_label`, then send
it with :func:`print_receipt` or :func:`print_label`. Builders raise on
invalid input; the ``print_*``/``get_*``/``select_*`` calls never raise and
return a result record instead.
"""

from .builders import LabelCommandBuilder, ReceiptCommandBuilder, create_invoice, create_label
from .builders import receipt as commands
from .exceptions import CommandValidationError, ImageResolutionError, QikPOSError, TransportError
from .images import image_to_base64
from .protocol import PLACEHOLDER, dedupe_barcodes
from .transport import (
    PrinterListResult,
    PrinterSelectionResult,
    PrintResult,
    get_label_printers,
    get_printers,
    get_selected_label_printer,
    get_selected_printer,
    print_label,
    print_raw,
    print_receipt,
    print_zpl,
    select_label_printer,
    select_printer,
)

__version__ = "1.0.0"

__all__ = [
    "PLACEHOLDER",
    "CommandValidationError",
    "ImageResolutionError",
    "LabelCommandBuilder",
    "PrintResult",
    "PrinterListResult",
    "PrinterSelectionResult",
    "QikPOSError",
    "ReceiptCommandBuilder",
    "TransportError",
    "commands",
    "create_invoice",
    "create_label",
    "dedupe_barcodes",
    "get_label_printers",
    "get_printers",
    "get_selected_label_printer",
    "get_selected_printer",
    "image_to_base64",
    "print_label",
    "print_raw",
    "print_receipt",
    "print_zpl",
    "select_label_printer",
    "select_printer",
]
