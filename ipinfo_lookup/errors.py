from ipinfo_lookup.models.http import HttpExchange, HttpRequest


class AppError(Exception):
    """Base application error for the ipinfo lookup client."""


class IpLookupError(AppError):
    """Base error for every failure a lookup can surface to the caller."""


class TransportError(IpLookupError):
    """Raised when the request never produced a response (connection refused, DNS, TLS...)."""

    def __init__(self, message: str, request: HttpRequest) -> None:
        super().__init__(message)
        self.request = request


class TransportTimeoutError(TransportError):
    """Raised when the transport gave up waiting for the lookup service."""


class ResponseError(IpLookupError):
    """Raised when the lookup service answered with a non-success status.

    The full exchange is kept so callers can inspect headers and body for diagnostics.
    """

    def __init__(self, exchange: HttpExchange, reason: str) -> None:
        super().__init__(reason)
        self.exchange = exchange
        self.reason = reason

    @property
    def status_code(self) -> int:
        return self.exchange.response.status_code

    @property
    def body(self) -> str:
        return self.exchange.response.body


class ClientResponseError(ResponseError):
    """Raised for 4xx responses (bad token, malformed address, ...)."""


class QuotaExceededError(ClientResponseError):
    """Raised for HTTP 429, the lookup service's quota/rate limit signal."""


class ServerResponseError(ResponseError):
    """Raised for 5xx responses."""


class DecodeError(IpLookupError):
    """Raised when a success response carries a body that is not a valid IP details payload."""

    def __init__(self, message: str, body: str | bytes) -> None:
        super().__init__(message)
        self.body = body
