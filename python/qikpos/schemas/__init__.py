"""Print job schemas and validators."""

from __future__ import annotations

from .registry import enum_values, get_definition, get_schema, list_schemas
from .validation import (
    DefaultingDraft7Validator,
    validate_barcode_options,
    validate_definition,
    validate_document,
    validate_label_job,
    validate_raw_job,
    validate_receipt_commands,
    validate_zpl_job,
)

__all__ = [
    "DefaultingDraft7Validator",
    "enum_values",
    "get_definition",
    "get_schema",
    "list_schemas",
    "validate_barcode_options",
    "validate_definition",
    "validate_document",
    "validate_label_job",
    "validate_raw_job",
    "validate_receipt_commands",
    "validate_zpl_job",
]
