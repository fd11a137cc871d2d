"""Detection of bogon (reserved / non-routable) IP addresses.

The ranges mirror the bogon list published by ipinfo.io, including the 6to4
and Teredo encodings of the IPv4 ranges. Checking them locally lets lookups of
such addresses skip the network entirely.
"""

from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network

_IPV4_BOGONS = (
    "0.0.0.0/8",  # "this" network
    "10.0.0.0/8",  # private-use
    "100.64.0.0/10",  # carrier-grade NAT
    "127.0.0.0/8",  # loopback
    "169.254.0.0/16",  # link local
    "172.16.0.0/12",  # private-use
    "192.0.0.0/24",  # IETF protocol assignments
    "192.0.2.0/24",  # TEST-NET-1
    "192.168.0.0/16",  # private-use
    "198.18.0.0/15",  # network interconnect device benchmark testing
    "198.51.100.0/24",  # TEST-NET-2
    "203.0.113.0/24",  # TEST-NET-3
    "224.0.0.0/4",  # multicast
    "240.0.0.0/4",  # reserved for future use
    "255.255.255.255/32",  # limited broadcast
)

_IPV6_BOGONS = (
    "::/128",  # unspecified
    "::1/128",  # loopback
    "::ffff:0:0/96",  # IPv4-mapped
    "::/96",  # IPv4-compatible (deprecated)
    "100::/64",  # discard-only
    "2001:10::/28",  # ORCHID
    "2001:db8::/32",  # documentation
    "fc00::/7",  # unique local
    "fe80::/10",  # link local
    "fec0::/10",  # site local (deprecated)
    "ff00::/8",  # multicast
    # 6to4 encodings of the IPv4 bogons
    "2002::/24",
    "2002:a00::/24",
    "2002:7f00::/24",
    "2002:a9fe::/32",
    "2002:ac10::/28",
    "2002:c000::/40",
    "2002:c000:200::/40",
    "2002:c0a8::/32",
    "2002:c612::/31",
    "2002:c633:6400::/40",
    "2002:cb00:7100::/40",
    "2002:e000::/20",
    "2002:f000::/20",
    "2002:ffff:ffff::/48",
    # Teredo encodings of the IPv4 bogons
    "2001::/40",
    "2001:0:a00::/40",
    "2001:0:7f00::/40",
    "2001:0:a9fe::/48",
    "2001:0:ac10::/44",
    "2001:0:c000::/56",
    "2001:0:c000:200::/56",
    "2001:0:c0a8::/48",
    "2001:0:c612::/47",
    "2001:0:c633:6400::/56",
    "2001:0:cb00:7100::/56",
    "2001:0:e000::/36",
    "2001:0:f000::/36",
    "2001:0:ffff:ffff::/64",
)

BOGON_NETWORKS: tuple[IPv4Network | IPv6Network, ...] = tuple(
    ip_network(network) for network in (*_IPV4_BOGONS, *_IPV6_BOGONS)
)


def is_bogon(address: str) -> bool:
    """Return True if `address` is an IP literal inside a reserved range.

    Anything that does not parse as an IP address (including the empty string)
    is not a bogon; the lookup service decides what to do with it. Non-string
    input is never a bogon either, even where `ip_address` would accept it (ints).
    """
    if not isinstance(address, str):
        return False
    try:
        parsed = ip_address(address)
    except ValueError:
        return False

    for network in BOGON_NETWORKS:
        if network.version == parsed.version and parsed in network:
            return True
    return False
