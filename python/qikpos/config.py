"""Endpoint configuration for the QikPOS print servers."""

import os

ENV_RECEIPT_URL = "QIKPOS_RECEIPT_URL"
ENV_LABEL_URL = "QIKPOS_LABEL_URL"

DEFAULT_RECEIPT_API_URL = "http://localhost:8080"
DEFAULT_LABEL_API_URL = "http://localhost:5003"

# Receipt (ESC/POS) server
RECEIPT_PRINT_PATH = "/api/printer/print"
RECEIPT_LIST_PATH = "/api/printer/list"
RECEIPT_SELECT_PATH = "/api/printer/select"
RECEIPT_SELECTED_PATH = "/api/printer/selected"

# Label (ZPL) server
LABEL_PRINT_PATH = "/api/labelprinter/print/label"
LABEL_ZPL_PATH = "/api/labelprinter/print/zpl"
LABEL_RAW_PATH = "/api/labelprinter/print/raw"
LABEL_LIST_PATH = "/api/labelprinter/list"
LABEL_SELECT_PATH = "/api/labelprinter/select"
LABEL_SELECTED_PATH = "/api/labelprinter/selected"


def _get_url(key: str, default: str) -> str:
    value = os.getenv(key)
    if not value or not value.strip():
        return default
    return value.strip()


def receipt_api_url() -> str:
    """Base URL of the receipt server, honouring QIKPOS_RECEIPT_URL."""
    return _get_url(ENV_RECEIPT_URL, DEFAULT_RECEIPT_API_URL)


def label_api_url() -> str:
    """Base URL of the label server, honouring QIKPOS_LABEL_URL."""
    return _get_url(ENV_LABEL_URL, DEFAULT_LABEL_API_URL)


def endpoint(api_url: str, path: str) -> str:
    return api_url.rstrip("/") + path
