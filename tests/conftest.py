"""Shared fixtures: a fake image source and an in-process print server."""

from __future__ import annotations

import asyncio
import base64
import io
import json
import socket
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer
from PIL import Image


def make_png(size: Tuple[int, int] = (4, 3), color: Tuple[int, int, int] = (255, 0, 0)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


class FakeImageSource:
    """Resolver stand-in: returns ``b64:<source>`` after an optional delay."""

    def __init__(self, delays: Dict[str, float] | None = None, failing: set[str] | None = None) -> None:
        self.delays = delays or {}
        self.failing = failing or set()
        self.started: List[str] = []
        self.completed: List[str] = []

    async def __call__(self, source: str) -> str:
        self.started.append(source)
        await asyncio.sleep(self.delays.get(source, 0))
        if source in self.failing:
            raise FileNotFoundError(source)
        self.completed.append(source)
        return f"b64:{source}"


@pytest.fixture
def image_source() -> FakeImageSource:
    return FakeImageSource()


@pytest.fixture
def png_file(tmp_path: Any) -> Any:
    path = tmp_path / "logo.png"
    path.write_bytes(make_png())
    return path


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: Any


@dataclass
class FakePrintServer:
    """Records requests and answers with canned ``{success, message, data}`` envelopes."""

    requests: List[RecordedRequest] = field(default_factory=list)
    responses: Dict[str, Tuple[int, str]] = field(default_factory=dict)
    url: str = ""

    def respond(self, path: str, status: int = 200, body: Any = None, raw: str | None = None) -> None:
        text = raw if raw is not None else json.dumps(body if body is not None else {"success": True})
        self.responses[path] = (status, text)

    def last(self, path: str) -> RecordedRequest:
        matches = [req for req in self.requests if req.path == path]
        assert matches, f"no request recorded for {path}"
        return matches[-1]

    async def handle(self, request: web.Request) -> web.Response:
        raw = await request.text()
        body = json.loads(raw) if raw else None
        self.requests.append(RecordedRequest(request.method, request.path, body))
        status, text = self.responses.get(request.path, (200, json.dumps({"success": True})))
        return web.Response(status=status, text=text, content_type="application/json")


@pytest_asyncio.fixture
async def print_server():
    server_state = FakePrintServer()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", server_state.handle)
    server = TestServer(app)
    await server.start_server()
    server_state.url = f"http://{server.host}:{server.port}"
    try:
        yield server_state
    finally:
        await server.close()


@pytest.fixture
def unreachable_url() -> str:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
