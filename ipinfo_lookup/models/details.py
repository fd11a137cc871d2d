from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ASNDetails(_FrozenModel):
    asn: str | None = None
    name: str | None = None
    domain: str | None = None
    route: str | None = None
    type: str | None = None


class CompanyDetails(_FrozenModel):
    name: str | None = None
    domain: str | None = None
    type: str | None = None


class CarrierDetails(_FrozenModel):
    name: str | None = None
    mcc: str | None = None
    mnc: str | None = None


class PrivacyDetails(_FrozenModel):
    vpn: bool = False
    proxy: bool = False
    tor: bool = False
    relay: bool = False
    hosting: bool = False
    service: str | None = None


class AbuseDetails(_FrozenModel):
    address: str | None = None
    country: str | None = None
    email: str | None = None
    name: str | None = None
    network: str | None = None
    phone: str | None = None


class IPDetails(_FrozenModel):
    """Resolved metadata for a single IP address.

    Instances are immutable: a record coming from the cache is the very object
    stored by an earlier lookup, and a fresh lookup always builds a new one.
    Bogon records only carry `ip` and `bogon=True`.
    """

    ip: str
    bogon: bool = False
    hostname: str | None = None
    anycast: bool | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    loc: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    postal: str | None = None
    timezone: str | None = None
    org: str | None = None
    asn: ASNDetails | None = None
    company: CompanyDetails | None = None
    carrier: CarrierDetails | None = None
    privacy: PrivacyDetails | None = None
    abuse: AbuseDetails | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_loc(cls, data: Any) -> Any:
        """ipinfo.io reports coordinates as a single "lat,lon" string in `loc`."""
        if not isinstance(data, dict):
            return data
        loc = data.get("loc")
        if not isinstance(loc, str) or "," not in loc:
            return data
        if data.get("latitude") is not None or data.get("longitude") is not None:
            return data
        latitude, _, longitude = loc.partition(",")
        return {**data, "latitude": latitude.strip(), "longitude": longitude.strip()}

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_lat_lon(cls, value: Any) -> float | None:
        """Allow latitude/longitude to be provided as strings, numbers, or null.

        Invalid values are dropped rather than failing the whole record.
        """
        if value is None:
            return None
        try:
            # For general GPS and mapping, 5-6 decimal places (e.g., 34.052235)
            return round(float(value), 6)
        except (TypeError, ValueError):
            return None
