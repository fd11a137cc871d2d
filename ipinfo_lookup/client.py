import asyncio
from ipaddress import IPv4Address, IPv6Address

import httpx

from ipinfo_lookup.cache import BaseCache, LRUCache
from ipinfo_lookup.models.details import IPDetails
from ipinfo_lookup.resolver import DEFAULT_BASE_URL, Resolver
from ipinfo_lookup.settings import ClientSettings
from ipinfo_lookup.transport import BaseTransport, HttpxTransport


class IPinfoClient:
    """Entry point for looking up IP details from ipinfo.io.

    Holds one Resolver for its whole lifetime so the configured cache is shared
    by every lookup. Passing `cache=None` (the default) disables caching.
    """

    def __init__(
        self,
        access_token: str = "",
        *,
        cache: BaseCache | None = None,
        timeout_seconds: float = 5.0,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.AsyncClient | None = None,
        transport: BaseTransport | None = None,
    ) -> None:
        self._cache = cache
        self._transport = transport or HttpxTransport(timeout_seconds=timeout_seconds, client=http_client)
        self._resolver = Resolver(
            self._transport,
            cache=cache,
            base_url=base_url,
            access_token=access_token,
        )

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs) -> "IPinfoClient":
        cache = None
        if settings.cache_maxsize > 0:
            cache = LRUCache(maxsize=settings.cache_maxsize, ttl_seconds=settings.cache_ttl_seconds)
        return cls(
            settings.access_token,
            cache=cache,
            timeout_seconds=settings.timeout_seconds,
            base_url=settings.base_url,
            **kwargs,
        )

    @property
    def cache(self) -> BaseCache | None:
        return self._cache

    async def get_details(self, ip: str | IPv4Address | IPv6Address | None = None) -> IPDetails:
        """Look up details for `ip`, or for the caller's own address when omitted."""
        return await self._resolver.resolve(str(ip) if ip is not None else "")

    def get_details_sync(self, ip: str | IPv4Address | IPv6Address | None = None) -> IPDetails:
        """Blocking variant of `get_details`; not usable from inside a running event loop."""
        return asyncio.run(self.get_details(ip))
