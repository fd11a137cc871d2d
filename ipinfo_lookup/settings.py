import os

from pydantic import BaseModel, Field

from ipinfo_lookup.resolver import DEFAULT_BASE_URL


class ClientSettings(BaseModel):
    """Client configuration, usually read from the environment.

    `cache_maxsize=0` disables caching altogether.
    """

    access_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=5.0, gt=0)
    cache_maxsize: int = Field(default=4096, ge=0)
    cache_ttl_seconds: float | None = Field(default=24 * 60 * 60, ge=0)

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from IPINFO_* environment variables, falling back to defaults."""
        env_map = {
            "access_token": "IPINFO_TOKEN",
            "base_url": "IPINFO_BASE_URL",
            "timeout_seconds": "IPINFO_TIMEOUT",
            "cache_maxsize": "IPINFO_CACHE_MAXSIZE",
            "cache_ttl_seconds": "IPINFO_CACHE_TTL",
        }
        values = {field: os.environ[var] for field, var in env_map.items() if os.getenv(var)}
        return cls.model_validate(values)
