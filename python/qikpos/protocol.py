"""Shared command-building primitives for the receipt and label builders.

This module exposes:
- :class:`CommandEmitter`, the ordered command list both builders extend.
  It owns the image placeholders and the rendezvous that waits for their
  resolution before a job is handed to the transport layer.
- :func:`dedupe_barcodes`, the stable filter applied to label jobs.

Commands are plain ``dict`` objects shaped exactly as the print server
expects them on the wire, so a built job can be passed to :func:`json.dumps`
as is.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from .exceptions import ImageResolutionError
from .images import image_to_base64

_LOGGER = logging.getLogger(__name__)

PLACEHOLDER = "PLACEHOLDER"

ImageResolver = Callable[[str], Awaitable[str]]


@dataclass
class PendingImage:
    """An image slot waiting for its base64 payload."""

    index: int
    source: str
    task: Optional["asyncio.Future[str]"] = None


class CommandEmitter:
    """Ordered, append-only command list with deferred image resolution."""

    def __init__(self, image_resolver: Optional[ImageResolver] = None) -> None:
        self._commands: List[Dict[str, Any]] = []
        self._pending: List[PendingImage] = []
        self._image_resolver: ImageResolver = image_resolver or image_to_base64

    @property
    def commands(self) -> List[Dict[str, Any]]:
        """A snapshot of the commands emitted so far, placeholders included."""

        return list(self._commands)

    @property
    def pending_images(self) -> int:
        return len(self._pending)

    def __len__(self) -> int:
        return len(self._commands)

    def emit(self, command: str, **fields: Any) -> Dict[str, Any]:
        """Append a command entry; fields set to ``None`` are left out."""

        entry: Dict[str, Any] = {"cmd": command}
        entry.update({key: value for key, value in fields.items() if value is not None})
        self._commands.append(entry)
        return entry

    def emit_image(self, command: str, source: str, **fields: Any) -> Dict[str, Any]:
        """Append an image placeholder and start resolving ``source``.

        The placeholder keeps the call position; :meth:`resolve_images`
        swaps the payload in once every pending image is available.
        """

        entry = self.emit(command, value=PLACEHOLDER, **fields)
        pending = PendingImage(index=len(self._commands) - 1, source=source)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # No loop yet; the task starts when build() runs.
            _LOGGER.debug("Deferring image resolution for slot %d", pending.index)
        else:
            pending.task = asyncio.ensure_future(self._resolve(source))
        self._pending.append(pending)
        return entry

    async def _resolve(self, source: str) -> str:
        try:
            return await self._image_resolver(source)
        except ImageResolutionError:
            raise
        except Exception as exc:
            _LOGGER.error("Error processing image %s: %s", source, exc)
            raise ImageResolutionError(f"Failed to resolve image '{source}': {exc}") from exc

    async def resolve_images(self) -> None:
        """Wait for every pending image and write the payloads into their slots."""

        if not self._pending:
            return
        for pending in self._pending:
            if pending.task is None:
                pending.task = asyncio.ensure_future(self._resolve(pending.source))
        _LOGGER.debug("Waiting for %d pending image(s)", len(self._pending))
        payloads = await asyncio.gather(*(pending.task for pending in self._pending))
        for pending, payload in zip(self._pending, payloads):
            self._commands[pending.index] = {**self._commands[pending.index], "value": payload}
        self._pending.clear()


def barcode_key(command: Dict[str, Any]) -> Tuple[Any, Any, Any]:
    return command.get("value"), command.get("x"), command.get("y")


def dedupe_barcodes(commands: Iterable[Dict[str, Any]], barcode_tag: str = "barcode") -> List[Dict[str, Any]]:
    """Drop barcodes repeating an earlier (value, x, y); first one wins.

    Type, module width and orientation are not part of the key. Other
    commands pass through and survivors keep their relative order.
    """

    seen: set[Tuple[Any, Any, Any]] = set()
    result: List[Dict[str, Any]] = []
    for command in commands:
        if command.get("cmd") == barcode_tag:
            key = barcode_key(command)
            if key in seen:
                _LOGGER.debug("Dropping duplicate barcode %r at (%s, %s)", *key)
                continue
            seen.add(key)
        result.append(command)
    return result


__all__ = [
    "PLACEHOLDER",
    "CommandEmitter",
    "ImageResolver",
    "PendingImage",
    "barcode_key",
    "dedupe_barcodes",
]
