"""Chainable builders for receipt and label print jobs."""

from .label import LabelCommandBuilder, create_label
from .receipt import ReceiptCommandBuilder, create_invoice

__all__ = ["LabelCommandBuilder", "ReceiptCommandBuilder", "create_invoice", "create_label"]
