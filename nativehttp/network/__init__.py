"""Connection preparation: DNS resolution and proxy selection."""

from nativehttp.network.dns import DnsCache, DnsResolver, ResolvedAuthority, system_lookup
from nativehttp.network.proxy import (
    ProxySelector,
    configure_headers_and_proxy,
    matches_no_proxy,
    parse_proxy,
)


__all__ = [
    # DNS
    "DnsCache",
    "DnsResolver",
    "ResolvedAuthority",
    "system_lookup",
    # Proxy
    "ProxySelector",
    "configure_headers_and_proxy",
    "matches_no_proxy",
    "parse_proxy",
]
