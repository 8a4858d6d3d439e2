"""Website domain extraction and IP record lookup via dnspython."""

import ipaddress
from urllib.parse import urlsplit

import dns.asyncresolver
import dns.exception
import dns.resolver
from loguru import logger

from src.parsers.exceptions import DnsLookupError

# IPv4 first; IPv6 only when the name has no A records
_RECORD_TYPES = ("A", "AAAA")


def extract_domain(website: str | None) -> str | None:
    """Return the DNS name of a website URL.

    None for a missing website, an unparseable or scheme-less URL, a URL
    without a host, or a host that is an IP literal.
    """
    if not website:
        return None

    try:
        parsed = urlsplit(website.strip())
        host = parsed.hostname
    except ValueError:
        return None

    if not parsed.scheme or not host:
        return None

    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host
    return None


async def resolve_ip_records(
    domain: str, resolver: dns.asyncresolver.Resolver | None = None
) -> list[str]:
    """Resolve the IP addresses of a domain.

    Raises DnsLookupError on any resolver failure. A name with neither A
    nor AAAA records yields an empty list.
    """
    addresses: list[str] = []
    try:
        resolver = resolver or dns.asyncresolver.Resolver()
        for rdtype in _RECORD_TYPES:
            try:
                answer = await resolver.resolve(domain, rdtype)
            except dns.resolver.NoAnswer:
                continue
            addresses.extend(rdata.to_text() for rdata in answer)
            if addresses:
                break
    except dns.exception.DNSException as e:
        raise DnsLookupError(f"DNS lookup failed for {domain}: {e}") from e

    logger.debug(f"[DNS] {domain} -> {len(addresses)} records")
    return addresses
