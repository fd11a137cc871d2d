from collections.abc import Callable
from http import HTTPStatus
from typing import Any

import httpx
import pytest

from ipinfo_lookup.errors import TransportError, TransportTimeoutError
from ipinfo_lookup.models.http import HttpRequest
from ipinfo_lookup.transport import HttpxTransport
from tests.common import FailingAsyncClient, MockAsyncClient, MockResponse

REQUEST = HttpRequest(
    method="GET",
    url="https://ipinfo.io/8.8.8.8",
    headers={"Accept": "application/json", "Authorization": "Bearer token"},
)


def make_fake_async_client(client: MockAsyncClient) -> Callable[..., MockAsyncClient]:
    """Factory for a fake httpx.AsyncClient always handing out the same mock."""

    def _fake_client(*args: Any, **kwargs: Any) -> MockAsyncClient:
        return client

    return _fake_client


@pytest.mark.asyncio
async def test_execute_returns_status_and_body(monkeypatch: pytest.MonkeyPatch) -> None:
    mock_client = MockAsyncClient(MockResponse(status_code=HTTPStatus.OK, text='{"ip": "8.8.8.8"}'))
    monkeypatch.setattr(httpx, "AsyncClient", make_fake_async_client(mock_client))

    response = await HttpxTransport().execute(REQUEST)

    assert response.status_code == HTTPStatus.OK
    assert response.body == '{"ip": "8.8.8.8"}'
    assert response.headers["content-type"] == "application/json"
    assert mock_client.calls == [("https://ipinfo.io/8.8.8.8", REQUEST.headers)]


@pytest.mark.asyncio
async def test_execute_returns_error_statuses_instead_of_raising(monkeypatch: pytest.MonkeyPatch) -> None:
    mock_client = MockAsyncClient(MockResponse(status_code=HTTPStatus.FORBIDDEN, text='{"error": "bad token"}'))
    monkeypatch.setattr(httpx, "AsyncClient", make_fake_async_client(mock_client))

    response = await HttpxTransport().execute(REQUEST)

    assert response.status_code == HTTPStatus.FORBIDDEN


@pytest.mark.asyncio
async def test_execute_uses_supplied_client(monkeypatch: pytest.MonkeyPatch) -> None:
    """A caller-owned client is used directly instead of opening a new one."""

    def _must_not_be_called(*args: Any, **kwargs: Any) -> None:
        raise AssertionError("a new AsyncClient must not be created")

    monkeypatch.setattr(httpx, "AsyncClient", _must_not_be_called)
    mock_client = MockAsyncClient(MockResponse(status_code=HTTPStatus.OK, text="{}"))

    response = await HttpxTransport(client=mock_client).execute(REQUEST)  # type: ignore[arg-type]

    assert response.status_code == HTTPStatus.OK
    assert len(mock_client.calls) == 1


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda *args, **kwargs: FailingAsyncClient("https://ipinfo.io", httpx.ConnectError)
    )

    with pytest.raises(TransportError) as exc_info:
        await HttpxTransport().execute(REQUEST)

    assert not isinstance(exc_info.value, TransportTimeoutError)
    assert exc_info.value.request is REQUEST
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_timeout_raises_transport_timeout_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda *args, **kwargs: FailingAsyncClient("https://ipinfo.io", httpx.ReadTimeout)
    )

    with pytest.raises(TransportTimeoutError):
        await HttpxTransport(timeout_seconds=0.1).execute(REQUEST)


@pytest.mark.asyncio
async def test_only_get_is_supported() -> None:
    with pytest.raises(ValueError):
        await HttpxTransport().execute(HttpRequest(method="POST", url="https://ipinfo.io/batch"))


class _InvalidUrlAsyncClient(MockAsyncClient):
    async def get(self, url: str, headers: dict[str, str] | None = None) -> MockResponse:
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")


@pytest.mark.asyncio
async def test_invalid_url_raises_transport_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """httpx.InvalidURL is not a RequestError but must not escape untyped."""
    monkeypatch.setattr(
        httpx, "AsyncClient", make_fake_async_client(_InvalidUrlAsyncClient(MockResponse(HTTPStatus.OK)))
    )

    with pytest.raises(TransportError) as exc_info:
        await HttpxTransport().execute(REQUEST)

    assert exc_info.value.request is REQUEST
    assert isinstance(exc_info.value.__cause__, httpx.InvalidURL)
