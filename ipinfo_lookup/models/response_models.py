from pydantic import BaseModel

from ipinfo_lookup.models.details import (
    AbuseDetails,
    ASNDetails,
    CarrierDetails,
    CompanyDetails,
    IPDetails,
    PrivacyDetails,
)


class HealthResponse(BaseModel):
    """Response model for the health check endpoint."""

    status: str


class IPLookupResponse(BaseModel):
    """Response model for IP lookup."""

    ip: str
    bogon: bool = False
    hostname: str | None = None
    anycast: bool | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    loc: str | None = None
    postal: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    org: str | None = None
    asn: ASNDetails | None = None
    company: CompanyDetails | None = None
    carrier: CarrierDetails | None = None
    privacy: PrivacyDetails | None = None
    abuse: AbuseDetails | None = None

    @classmethod
    def from_details(cls, details: IPDetails) -> "IPLookupResponse":
        return cls(
            ip=details.ip,
            bogon=details.bogon,
            hostname=details.hostname,
            anycast=details.anycast,
            city=details.city,
            region=details.region,
            country=details.country,
            loc=details.loc,
            postal=details.postal,
            latitude=details.latitude,
            longitude=details.longitude,
            timezone=details.timezone,
            org=details.org,
            asn=details.asn,
            company=details.company,
            carrier=details.carrier,
            privacy=details.privacy,
            abuse=details.abuse,
        )
