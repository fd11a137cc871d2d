from abc import ABC, abstractmethod

import httpx

from ipinfo_lookup.errors import TransportError, TransportTimeoutError
from ipinfo_lookup.models.http import HttpRequest, HttpResponse


class BaseTransport(ABC):
    """Executes a single request against the lookup service.

    Implementations perform exactly one attempt and raise TransportError when
    no response could be obtained. Any HTTP status, including errors, is a
    response and must be returned, not raised.
    """

    @abstractmethod
    async def execute(self, request: HttpRequest) -> HttpResponse:
        raise NotImplementedError


class HttpxTransport(BaseTransport):
    """Transport backed by httpx.AsyncClient.

    Without a `client`, a short-lived AsyncClient is opened per request. A
    caller-supplied client is reused and its lifecycle stays with the caller.
    """

    def __init__(self, timeout_seconds: float = 5.0, client: httpx.AsyncClient | None = None) -> None:
        self._timeout_seconds = timeout_seconds
        self._client = client

    async def execute(self, request: HttpRequest) -> HttpResponse:
        if request.method.upper() != "GET":
            raise ValueError(f"Unsupported HTTP method for lookups: {request.method}")

        try:
            if self._client is not None:
                response = await self._client.get(request.url, headers=request.headers)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                    response = await client.get(request.url, headers=request.headers)
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(f"Request to lookup service timed out: {repr(exc)}", request) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Request to lookup service failed: {repr(exc)}", request) from exc
        except httpx.InvalidURL as exc:
            # Raised before anything is sent; not a RequestError subclass.
            raise TransportError(f"Invalid lookup service URL: {repr(exc)}", request) from exc

        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
