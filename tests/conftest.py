"""Shared fixtures for userstack tests."""

import json
from typing import Any, Callable, List

import httpx
import pytest


def _json_response(body: Any, status_code: int) -> httpx.Response:
    content = body if isinstance(body, (bytes, str)) else json.dumps(body)
    return httpx.Response(
        status_code,
        content=content,
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Requests seen by the mock transports, in order."""
    return []


@pytest.fixture
def mock_http_client(sent_requests) -> Callable[..., httpx.Client]:
    """Factory for an httpx.Client answering every request with ``body``."""

    def _make(body: Any, status_code: int = 200) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return _json_response(body, status_code)

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def mock_async_http_client(sent_requests) -> Callable[..., httpx.AsyncClient]:
    """Factory for an httpx.AsyncClient answering every request with ``body``."""

    def _make(body: Any, status_code: int = 200) -> httpx.AsyncClient:
        async def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return _json_response(body, status_code)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
