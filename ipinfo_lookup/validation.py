import json
from http import HTTPStatus
from typing import Any

from ipinfo_lookup.errors import (
    ClientResponseError,
    QuotaExceededError,
    ResponseError,
    ServerResponseError,
)
from ipinfo_lookup.models.http import HttpExchange

QUOTA_EXCEEDED_REASON = "Lookup service rate limit or quota exceeded (HTTP 429)."


def validate_response(exchange: HttpExchange) -> ResponseError | None:
    """Classify the response half of an exchange.

    Returns None for a 2xx status, leaving the body for the decoder. Any other
    status produces the matching ResponseError, carrying the whole exchange;
    the caller decides whether to raise it.
    """
    status_code = int(exchange.response.status_code)

    if HTTPStatus.OK <= status_code < HTTPStatus.MULTIPLE_CHOICES:
        return None

    message = _extract_error_message(exchange.response.body)

    if status_code == HTTPStatus.TOO_MANY_REQUESTS:
        return QuotaExceededError(exchange, message or QUOTA_EXCEEDED_REASON)

    reason = message or f"Lookup service returned HTTP {status_code}"

    if HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR:
        return ClientResponseError(exchange, reason)
    if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return ServerResponseError(exchange, reason)
    # 1xx/3xx: nothing we can decode, but not the client's or server's fault either.
    return ResponseError(exchange, reason)


def _extract_error_message(body: str) -> str | None:
    """Pull a human-readable message out of an error body, if it has one.

    Known shapes:
        {"error": "bad token"}
        {"error": {"title": "Wrong ip", "message": "Please provide a valid IP address"}}
    """
    try:
        data: Any = json.loads(body)
    except (ValueError, RecursionError):
        # RecursionError: pathologically nested bodies.
        return None
    if not isinstance(data, dict):
        return None

    error = data.get("error")
    if isinstance(error, str) and error.strip():
        return error.strip()
    if isinstance(error, dict):
        title = str(error.get("title") or "").strip()
        message = str(error.get("message") or "").strip()
        if title and message:
            return f"{title}: {message}"
        return title or message or None
    return None
