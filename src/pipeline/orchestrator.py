"""Token lookup pipeline.

On-chain reads (mint + metadata) run concurrently and are both required.
The off-chain document is fetched next, then the DNS lookup of the website
it names; those two are best-effort and degrade to "unavailable".
"""

import asyncio
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeVar

import dns.asyncresolver
import httpx
from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.address import derive_metadata_address
from src.parsers.dns_counter import extract_domain, resolve_ip_records
from src.parsers.exceptions import (
    DnsLookupError,
    LedgerReadError,
    OffChainFetchError,
    TokenLookupError,
)
from src.parsers.metaplex.decoder import MetadataRecord, decode_metadata
from src.parsers.mint_parser import MintRecord, decode_mint
from src.parsers.offchain.client import fetch_offchain_metadata
from src.parsers.offchain.models import OffChainMetadata
from src.parsers.solana_rpc.client import SolanaRpcClient

T = TypeVar("T")

STAGE_MINT = "mint account data"
STAGE_METADATA = "Metaplex metadata"


class OnChainReadError(TokenLookupError):
    """A required on-chain read failed; the run cannot continue."""

    def __init__(self, stage: str, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(
            f"Error fetching {stage}: {cause}, "
            "it's likely because the token address is invalid"
        )


@dataclass(frozen=True)
class TokenReport:
    """Everything the CLI prints. None means unavailable."""

    name: str
    symbol: str
    supply: int
    decimals: int
    mint_authority: Pubkey | None
    freeze_authority: Pubkey | None
    description: str | None
    image: str | None
    website: str | None
    dns_record_count: int | None


async def best_effort(
    awaitable: Awaitable[T],
    errors: type[Exception] | tuple[type[Exception], ...],
    stage: str,
) -> T | None:
    """Await and collapse the given error types into None."""
    try:
        return await awaitable
    except errors as e:
        logger.debug(f"[PIPELINE] {stage} unavailable: {e}")
        return None


async def read_mint(rpc: SolanaRpcClient, token_address: Pubkey) -> MintRecord:
    return decode_mint(await rpc.read_account(token_address))


async def read_metadata(rpc: SolanaRpcClient, metadata_address: Pubkey) -> MetadataRecord:
    return decode_metadata(await rpc.read_account(metadata_address))


async def count_dns_records(
    website: str | None, resolver: dns.asyncresolver.Resolver | None = None
) -> int | None:
    """Number of IP records for a website's domain, or None if unavailable.

    Never raises.
    """
    domain = extract_domain(website)
    if domain is None:
        return None
    addresses = await best_effort(resolve_ip_records(domain, resolver), DnsLookupError, "DNS")
    return None if addresses is None else len(addresses)


async def fetch_token_report(
    rpc: SolanaRpcClient,
    http: httpx.AsyncClient,
    token_address: Pubkey,
    resolver: dns.asyncresolver.Resolver | None = None,
) -> TokenReport:
    """Run the full lookup for one mint.

    Raises OnChainReadError if either on-chain read fails. Off-chain and
    DNS failures never abort the run.
    """
    metadata_address = derive_metadata_address(token_address)
    logger.debug(f"[PIPELINE] mint={token_address} metadata={metadata_address}")

    # gather with return_exceptions waits for both reads even if one fails
    mint_result, metadata_result = await asyncio.gather(
        read_mint(rpc, token_address),
        read_metadata(rpc, metadata_address),
        return_exceptions=True,
    )
    for stage, result in ((STAGE_MINT, mint_result), (STAGE_METADATA, metadata_result)):
        if isinstance(result, LedgerReadError):
            raise OnChainReadError(stage, result) from result
        if isinstance(result, BaseException):
            raise result

    mint: MintRecord = mint_result  # type: ignore[assignment]
    metadata: MetadataRecord = metadata_result  # type: ignore[assignment]

    # The DNS lookup needs the website from the off-chain document, so the
    # two run in sequence.
    offchain = await best_effort(
        fetch_offchain_metadata(http, metadata.uri), OffChainFetchError, "Off-chain metadata"
    )
    if offchain is None:
        offchain = OffChainMetadata()

    dns_record_count = await count_dns_records(offchain.website, resolver)

    return TokenReport(
        name=metadata.name,
        symbol=metadata.symbol,
        supply=mint.supply,
        decimals=mint.decimals,
        mint_authority=mint.mint_authority,
        freeze_authority=mint.freeze_authority,
        description=offchain.description,
        image=offchain.image,
        website=offchain.website,
        dns_record_count=dns_record_count,
    )
