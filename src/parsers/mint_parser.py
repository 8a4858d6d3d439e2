"""SPL Token mint account decoder.

Validates the fixed 82-byte layout before reading any field, the same
checks `Mint::unpack` performs on-chain.
"""

import struct
from dataclasses import dataclass

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.exceptions import InvalidMintLayoutError

# SPL Token mint layout: 82 bytes
# [0:36]   mintAuthorityOption (4) + mintAuthority (32)
# [36:44]  supply (u64)
# [44:45]  decimals (u8)
# [45:46]  isInitialized (bool)
# [46:82]  freezeAuthorityOption (4) + freezeAuthority (32)
SPL_MINT_SIZE = 82

_MINT_AUTHORITY_OFFSET = 0
_SUPPLY_OFFSET = 36
_DECIMALS_OFFSET = 44
_INITIALIZED_OFFSET = 45
_FREEZE_AUTHORITY_OFFSET = 46


@dataclass(frozen=True)
class MintRecord:
    """Decoded mint account."""

    supply: int
    decimals: int
    mint_authority: Pubkey | None  # None = renounced
    freeze_authority: Pubkey | None
    is_initialized: bool


def decode_mint(raw: bytes) -> MintRecord:
    """Decode raw mint account bytes.

    Raises InvalidMintLayoutError on wrong length, bad option tags, a bad
    initialized flag, or an uninitialized mint.
    """
    if len(raw) != SPL_MINT_SIZE:
        raise InvalidMintLayoutError(
            f"Mint data must be {SPL_MINT_SIZE} bytes, got {len(raw)}"
        )

    mint_tag = struct.unpack_from("<I", raw, _MINT_AUTHORITY_OFFSET)[0]
    freeze_tag = struct.unpack_from("<I", raw, _FREEZE_AUTHORITY_OFFSET)[0]
    for name, tag in (("mint authority", mint_tag), ("freeze authority", freeze_tag)):
        if tag not in (0, 1):
            raise InvalidMintLayoutError(f"Invalid {name} option tag: {tag}")

    initialized = raw[_INITIALIZED_OFFSET]
    if initialized not in (0, 1):
        raise InvalidMintLayoutError(f"Invalid initialized flag: {initialized}")
    if not initialized:
        raise InvalidMintLayoutError("Mint account is not initialized")

    supply = struct.unpack_from("<Q", raw, _SUPPLY_OFFSET)[0]
    decimals = raw[_DECIMALS_OFFSET]

    record = MintRecord(
        supply=supply,
        decimals=decimals,
        mint_authority=_read_authority(raw, _MINT_AUTHORITY_OFFSET, mint_tag),
        freeze_authority=_read_authority(raw, _FREEZE_AUTHORITY_OFFSET, freeze_tag),
        is_initialized=True,
    )
    logger.debug(f"[MINT] supply={record.supply} decimals={record.decimals}")
    return record


def _read_authority(raw: bytes, offset: int, tag: int) -> Pubkey | None:
    """Read a COption<Pubkey> whose 4-byte tag starts at offset."""
    if tag == 0:
        return None
    return Pubkey.from_bytes(raw[offset + 4 : offset + 36])
