from collections.abc import Callable
from logging import getLogger
from urllib.parse import quote

from ipinfo_lookup.bogon import is_bogon
from ipinfo_lookup.cache import BaseCache, CacheAdapter
from ipinfo_lookup.decoding import decode_details
from ipinfo_lookup.errors import IpLookupError
from ipinfo_lookup.models.details import IPDetails
from ipinfo_lookup.models.http import HttpExchange, HttpRequest
from ipinfo_lookup.transport import BaseTransport
from ipinfo_lookup.validation import validate_response

DEFAULT_BASE_URL = "https://ipinfo.io"
USER_AGENT = "ipinfo-lookup/0.1.0"

# Child of the "ipinfo_lookup" logger; handlers are only attached by the service (ipinfo_lookup.logger).
logger = getLogger(__name__)


class Resolver:
    """Resolves an address to IPDetails: cache, bogon check, remote call, validation, decoding.

    One instance is meant to be shared by all lookups of a client. Every call to
    `resolve` keeps its state in local variables; the cache store is the only
    shared mutable resource and is responsible for its own locking.

    Failures are raised as IpLookupError subclasses and never replaced with a
    cached record. Bogon results and self-lookups (empty address) are returned
    without being cached.
    """

    def __init__(
        self,
        transport: BaseTransport,
        *,
        cache: BaseCache | None = None,
        decoder: Callable[[str], IPDetails] = decode_details,
        base_url: str = DEFAULT_BASE_URL,
        access_token: str = "",
    ) -> None:
        self._transport = transport
        self._decoder = decoder
        self._base_url = base_url.rstrip("/")
        self._access_token = access_token
        self.cache_adapter = CacheAdapter(cache)

    async def resolve(self, ip: str | None = "") -> IPDetails:
        """Look up details for `ip`; an empty string or None means the caller's own address."""
        ip = ip or ""
        is_self_lookup = not ip

        if not is_self_lookup:
            cached = self.cache_adapter.get(ip)
            if cached is not None:
                logger.debug(f"Cache hit ip={ip}")
                return cached

            if is_bogon(ip):
                logger.debug(f"Bogon address, skipping remote lookup ip={ip}")
                return IPDetails(ip=ip, bogon=True)

        request = self._build_request(ip)
        logger.debug(f"Requesting lookup service url={request.url}")
        try:
            response = await self._transport.execute(request)
        except IpLookupError as exc:
            logger.warning(f"Lookup service unreachable ip={ip!r} error={exc}")
            raise

        failure = validate_response(HttpExchange(request=request, response=response))
        if failure is not None:
            logger.warning(
                f"Lookup service rejected request ip={ip!r} status={failure.status_code} reason={failure.reason}"
            )
            raise failure

        try:
            details = self._decoder(response.body)
        except IpLookupError as exc:
            logger.warning(f"Undecodable lookup service response ip={ip!r} error={exc}")
            raise

        # The resolved address of a self-lookup depends on where the caller runs.
        if not is_self_lookup:
            self.cache_adapter.set(ip, details)
        return details

    def _build_request(self, ip: str) -> HttpRequest:
        # The address is a single path segment: "?", "#", "/" and control characters are escaped.
        url = f"{self._base_url}/{quote(ip, safe=':')}" if ip else f"{self._base_url}/json"
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return HttpRequest(method="GET", url=url, headers=headers)
