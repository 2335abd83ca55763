"""
Error types raised by the builders and used internally by the transport layer.

Builders raise; transport functions convert everything into result records.
"""
from __future__ import annotations


class QikPOSError(Exception):
    """Base exception for all qikpos errors."""


class CommandValidationError(QikPOSError, ValueError):
    """A command or job failed its schema constraints."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class ImageResolutionError(QikPOSError):
    """An image source could not be loaded or decoded."""


class TransportError(QikPOSError):
    """The print server answered with something that is not a response envelope."""
