"""Image loading for image commands.

Sources may be a ``data:`` URI, an ``http(s)`` URL or a local file path.
Whatever the input format, the image is decoded and re-encoded as PNG,
and the PNG is returned base64-encoded, ready to be placed in a command's
``value``.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Optional

import aiohttp
from PIL import Image, UnidentifiedImageError

from .exceptions import ImageResolutionError

_LOGGER = logging.getLogger(__name__)

MAX_IMAGE_SIZE_MB = 10
MAX_IMAGE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024
DOWNLOAD_CHUNK_SIZE = 64 * 1024


def _decode_data_uri(uri: str) -> bytes:
    header, sep, payload = uri.partition(",")
    if not sep:
        raise ImageResolutionError("Malformed data URI: missing ',' separator")
    if ";base64" not in header:
        raise ImageResolutionError("Only base64 data URIs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ImageResolutionError(f"Invalid base64 payload in data URI: {exc}") from exc


async def _download(url: str, session: Optional[aiohttp.ClientSession]) -> bytes:
    _LOGGER.debug("Downloading image from URL: %s", url)
    owns_session = session is None
    client = session or aiohttp.ClientSession()
    try:
        async with client.get(url) as resp:
            resp.raise_for_status()
            if resp.content_length is not None and resp.content_length > MAX_IMAGE_BYTES:
                raise ImageResolutionError(f"Image too large (max {MAX_IMAGE_SIZE_MB}MB)")
            content = bytearray()
            async for chunk in resp.content.iter_chunked(DOWNLOAD_CHUNK_SIZE):
                content.extend(chunk)
                if len(content) > MAX_IMAGE_BYTES:
                    raise ImageResolutionError(f"Image too large (max {MAX_IMAGE_SIZE_MB}MB)")
    finally:
        if owns_session:
            await client.close()
    return bytes(content)


def _to_png_base64(data: bytes) -> str:
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.mode not in ("1", "L", "LA", "P", "RGB", "RGBA"):
                img = img.convert("RGBA")
            out = io.BytesIO()
            img.save(out, format="PNG")
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageResolutionError(f"Cannot decode image: {exc}") from exc
    return base64.b64encode(out.getvalue()).decode("ascii")


async def load_image_bytes(source: str, session: Optional[aiohttp.ClientSession] = None) -> bytes:
    """Fetch the raw bytes behind an image source."""

    if not isinstance(source, str) or not source.strip():
        raise ImageResolutionError("Image source must be a non-empty string")
    if source.startswith("data:"):
        return _decode_data_uri(source)
    if source.lower().startswith(("http://", "https://")):
        try:
            return await _download(source, session)
        except aiohttp.ClientError as exc:
            raise ImageResolutionError(f"Failed to download image: {exc}") from exc
    path = Path(source)
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise ImageResolutionError(f"Cannot read image file '{source}': {exc}") from exc


async def image_to_base64(source: str, session: Optional[aiohttp.ClientSession] = None) -> str:
    """Convert an image from a data URI, URL or file path to base64 PNG."""

    try:
        data = await load_image_bytes(source, session)
        return await asyncio.to_thread(_to_png_base64, data)
    except ImageResolutionError as exc:
        _LOGGER.error("Error converting image to base64: %s", exc)
        raise
