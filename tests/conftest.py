"""
Pytest configuration and shared fixtures for the OpenNeuro relay tests.

The remote API is never contacted: every relay gets an httpx client backed by
``httpx.MockTransport``, and the handler records each request it sees.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from openneuro_mcp.config import RelaySettings
from openneuro_mcp.relay import OpenNeuroRelay, build_client


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response or exception."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self._responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def settings():
    """Default settings, independent of the caller's environment."""
    return RelaySettings()


@pytest.fixture
def make_relay(settings):
    """Build a relay whose HTTP client is served by the given responder.

    Returns (relay, handler). Use the relay as an async context manager so the
    client gets closed.
    """

    def _make(responder: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(responder)
        client = build_client(settings, transport=httpx.MockTransport(handler))
        return OpenNeuroRelay(settings=settings, client=client), handler

    return _make


@pytest.fixture
def json_response():
    """Responder factory returning a fixed status and JSON body."""

    def _responder(status_code: int, body: Any):
        return lambda request: httpx.Response(status_code, json=body)

    return _responder


@pytest.fixture
def text_response():
    """Responder factory returning a fixed status and raw text body."""

    def _responder(status_code: int, text: str):
        return lambda request: httpx.Response(status_code, text=text)

    return _responder


@pytest.fixture
def connection_refused():
    """Responder that fails the way a closed port does."""

    def _responder(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

    return _responder
