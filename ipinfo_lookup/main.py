from functools import lru_cache
from http import HTTPStatus
from ipaddress import ip_address
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import ValidationError

from ipinfo_lookup.client import IPinfoClient
from ipinfo_lookup.errors import (
    DecodeError,
    QuotaExceededError,
    ResponseError,
    TransportError,
    TransportTimeoutError,
)
from ipinfo_lookup.exception_handlers import (
    pydantic_validation_exception_handler,
    unhandled_exception_handler,
)
from ipinfo_lookup.logger import logger
from ipinfo_lookup.models.request_models import IPLookupRequest
from ipinfo_lookup.models.response_models import HealthResponse, IPLookupResponse
from ipinfo_lookup.settings import ClientSettings

app = FastAPI(
    title="IP Lookup Service",
    version="0.1.0",
    description="IP details lookup backed by ipinfo.io, with local bogon detection and caching.",
)
logger.info("Started IP Lookup Service")


@lru_cache
def get_ipinfo_client() -> IPinfoClient:
    """Dependency providing the process-wide client, so every request shares one cache."""
    return IPinfoClient.from_settings(ClientSettings.from_env())


app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


def _error(status_code: int, code: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": str(exc)})


def _as_ip(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return str(ip_address(value.strip()))
    except ValueError:
        return None


def _caller_ip(request: Request) -> str | None:
    """Best-effort address of the caller: first X-Forwarded-For hop, else the socket peer.

    Only IP literals are used. Anything else would reach the lookup service as an
    arbitrary path and get cached under a key shared by every caller sending it.
    """
    x_forwarded_for = request.headers.get("x-forwarded-for")
    if x_forwarded_for:
        first_hop = _as_ip(x_forwarded_for.split(",")[0])
        if first_hop:
            return first_hop
    return _as_ip(request.client.host) if request.client else None


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


@app.get(
    "/v1/ip/lookup",
    response_model=IPLookupResponse,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up details for an IP address.",
)
async def ip_lookup(
    request: Request,
    query: Annotated[IPLookupRequest, Depends()],
    ipinfo_client: Annotated[IPinfoClient, Depends(get_ipinfo_client)],
) -> IPLookupResponse:
    """Look up details for either a specific IP or the caller's IP.

    - If `query.ip` is provided, that IP is used.
    - Otherwise the caller's address is taken from X-Forwarded-For or the connection.
      When neither is known, the lookup service reports this server's own address.
    """
    ip = query.ip or _caller_ip(request)
    logger.info(f"Performing IP lookup path={request.url.path} method={request.method} ip={ip}")

    try:
        details = await ipinfo_client.get_details(ip)
    except QuotaExceededError as exc:
        logger.error(f"Lookup quota exceeded ip={ip} error={exc}")
        raise _error(status.HTTP_429_TOO_MANY_REQUESTS, "quota_exceeded", exc) from exc
    except ResponseError as exc:
        if exc.status_code == HTTPStatus.NOT_FOUND:
            logger.error(f"No details found for IP ip={ip} error={exc}")
            raise _error(status.HTTP_404_NOT_FOUND, "ip_not_found", exc) from exc
        logger.exception(f"Lookup service error ip={ip} status={exc.status_code} error={exc}")
        raise _error(status.HTTP_502_BAD_GATEWAY, "upstream_error", exc) from exc
    except TransportTimeoutError as exc:
        logger.exception(f"Lookup service timed out ip={ip} error={exc}")
        raise _error(status.HTTP_504_GATEWAY_TIMEOUT, "upstream_timeout", exc) from exc
    except TransportError as exc:
        logger.exception(f"Lookup service unreachable ip={ip} error={exc}")
        raise _error(status.HTTP_502_BAD_GATEWAY, "upstream_unavailable", exc) from exc
    except DecodeError as exc:
        logger.exception(f"Lookup service returned an unexpected payload ip={ip} error={exc}")
        raise _error(status.HTTP_502_BAD_GATEWAY, "upstream_invalid_response", exc) from exc

    return IPLookupResponse.from_details(details)
