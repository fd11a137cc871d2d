import asyncio
from http import HTTPStatus
from typing import Any

import httpx

from ipinfo_lookup.models.http import HttpRequest, HttpResponse
from ipinfo_lookup.transport import BaseTransport


class MockResponse:
    def __init__(self, status_code: int, text: str = "", headers: dict[str, str] | None = None) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = headers or {"content-type": "application/json"}


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient."""

    def __init__(self, response: MockResponse) -> None:
        self._response = response
        self.calls: list[tuple[str, dict[str, str]]] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        self.calls.append((url, headers or {}))
        return self._response


class FailingAsyncClient:
    """Async client whose requests fail with the given httpx exception type."""

    def __init__(self, url: str, exc_type: type[httpx.RequestError] = httpx.ConnectError) -> None:
        self._url = url
        self._exc_type = exc_type

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        request = httpx.Request("GET", self._url)
        raise self._exc_type("Network failure", request=request)


class StubTransport(BaseTransport):
    """Transport returning a canned response and recording every request."""

    def __init__(self, status_code: int = HTTPStatus.OK, body: str = "", delay: float = 0.0) -> None:
        self.status_code = status_code
        self.body = body
        self.delay = delay
        self.requests: list[HttpRequest] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        return HttpResponse(status_code=int(self.status_code), body=self.body)


class RoutingTransport(BaseTransport):
    """Transport answering per URL suffix; handlers may await to simulate slow responses."""

    def __init__(self, handlers: dict[str, Any]) -> None:
        self._handlers = handlers
        self.requests: list[HttpRequest] = []

    async def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for suffix, handler in self._handlers.items():
            if request.url.endswith(suffix):
                return await handler(request)
        return HttpResponse(status_code=HTTPStatus.NOT_FOUND, body='{"error": "not routed"}')
