"""Tests for website domain extraction and DNS record lookup."""

from unittest.mock import AsyncMock, MagicMock

import dns.exception
import dns.resolver
import pytest

from src.parsers.dns_counter import extract_domain, resolve_ip_records
from src.parsers.exceptions import DnsLookupError


def _answer(*addresses: str) -> list[MagicMock]:
    records = []
    for address in addresses:
        rdata = MagicMock()
        rdata.to_text.return_value = address
        records.append(rdata)
    return records


class TestExtractDomain:
    @pytest.mark.parametrize(
        ("website", "expected"),
        [
            ("https://sollamas.com", "sollamas.com"),
            ("https://www.Example.com/path?q=1", "www.example.com"),
            ("http://abstractlabs.art:8080/", "abstractlabs.art"),
        ],
    )
    def test_valid_websites(self, website: str, expected: str) -> None:
        assert extract_domain(website) == expected

    @pytest.mark.parametrize(
        "website",
        [
            None,
            "",
            "sollamas.com",  # no scheme
            "mailto:team@sollamas.com",  # no host
            "https://",
            "http://192.168.1.1/",  # IP literal, not a domain
            "http://[::1]/",
            "http://[::1",  # unbalanced bracket
        ],
    )
    def test_unavailable(self, website: str | None) -> None:
        assert extract_domain(website) is None


class TestResolveIpRecords:
    async def test_ipv4_records(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=_answer("1.1.1.1", "2.2.2.2"))

        assert await resolve_ip_records("sollamas.com", resolver) == ["1.1.1.1", "2.2.2.2"]
        resolver.resolve.assert_awaited_once_with("sollamas.com", "A")

    async def test_ipv6_fallback(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=[dns.resolver.NoAnswer(), _answer("::1")])

        assert await resolve_ip_records("v6only.example", resolver) == ["::1"]
        assert resolver.resolve.await_args_list[1].args == ("v6only.example", "AAAA")

    async def test_no_records_at_all(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=[dns.resolver.NoAnswer(), dns.resolver.NoAnswer()])

        assert await resolve_ip_records("empty.example", resolver) == []

    async def test_nxdomain(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=dns.resolver.NXDOMAIN())

        with pytest.raises(DnsLookupError, match="nope.invalid"):
            await resolve_ip_records("nope.invalid", resolver)

    async def test_timeout(self) -> None:
        resolver = MagicMock()
        resolver.resolve = AsyncMock(side_effect=dns.exception.Timeout())

        with pytest.raises(DnsLookupError):
            await resolve_ip_records("slow.example", resolver)
