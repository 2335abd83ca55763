"""HTTP calls to the QikPOS receipt and label print servers."""

from .http import PrinterListResult, PrinterSelectionResult, PrintResult, TransportResult
from .label_service import (
    get_label_printers,
    get_selected_label_printer,
    print_label,
    print_raw,
    print_zpl,
    select_label_printer,
)
from .receipt_service import get_printers, get_selected_printer, print_receipt, select_printer

__all__ = [
    "PrintResult",
    "PrinterListResult",
    "PrinterSelectionResult",
    "TransportResult",
    "get_label_printers",
    "get_printers",
    "get_selected_label_printer",
    "get_selected_printer",
    "print_label",
    "print_raw",
    "print_receipt",
    "print_zpl",
    "select_label_printer",
    "select_printer",
]
