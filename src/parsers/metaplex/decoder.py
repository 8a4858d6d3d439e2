"""Decode Metaplex Token Metadata v1 accounts.

Borsh layout from https://github.com/metaplex-foundation/mpl-token-metadata

  0        key (u8, 4 = MetadataV1)
  1:33     update_authority (Pubkey)
  33:65    mint (Pubkey)
  65:      name, symbol, uri (u32 LE length + UTF-8, null-padded)
           seller_fee_basis_points (u16)
           creators (Option<Vec<Creator>>), Creator = Pubkey + bool + u8
           primary_sale_happened (bool)
           is_mutable (bool)

Everything after is_mutable (edition nonce, token standard, collection,
uses, ...) is not needed and is left unread.
"""

import struct
from dataclasses import dataclass, field

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.exceptions import InvalidMetadataLayoutError
from src.parsers.metaplex.constants import KEY_METADATA_V1, MAX_URI_LENGTH

_PUBKEY_SIZE = 32
# Sanity cap for a borsh string length prefix; real accounts pad to at most 200
_MAX_STRING_BYTES = MAX_URI_LENGTH * 4
# Metaplex allows at most 5 creators
_MAX_CREATORS = 5


@dataclass(frozen=True)
class Creator:
    address: Pubkey
    verified: bool
    share: int


@dataclass(frozen=True)
class MetadataRecord:
    """Decoded metadata account. String fields are already unpadded."""

    update_authority: Pubkey
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int = 0
    creators: list[Creator] = field(default_factory=list)
    primary_sale_happened: bool = False
    is_mutable: bool = True


def strip_padding(value: str) -> str:
    """Drop the trailing NULs left by fixed-width on-chain strings."""
    return value.rstrip("\x00")


def decode_metadata(raw: bytes) -> MetadataRecord:
    """Decode raw metadata account bytes.

    Raises InvalidMetadataLayoutError on a wrong discriminator, truncated
    data, or an invalid tag/bool byte.
    """
    reader = _BorshReader(raw)

    key = reader.u8()
    if key != KEY_METADATA_V1:
        raise InvalidMetadataLayoutError(
            f"Wrong account key {key}, expected MetadataV1 ({KEY_METADATA_V1})"
        )

    update_authority = reader.pubkey()
    mint = reader.pubkey()
    name = reader.string()
    symbol = reader.string()
    uri = reader.string()
    seller_fee_basis_points = reader.u16()

    creators: list[Creator] = []
    if reader.option():
        count = reader.u32()
        if count > _MAX_CREATORS:
            raise InvalidMetadataLayoutError(f"Too many creators: {count}")
        for _ in range(count):
            creators.append(
                Creator(address=reader.pubkey(), verified=reader.boolean(), share=reader.u8())
            )

    primary_sale_happened = reader.boolean()
    is_mutable = reader.boolean()

    record = MetadataRecord(
        update_authority=update_authority,
        mint=mint,
        name=strip_padding(name),
        symbol=strip_padding(symbol),
        uri=strip_padding(uri),
        seller_fee_basis_points=seller_fee_basis_points,
        creators=creators,
        primary_sale_happened=primary_sale_happened,
        is_mutable=is_mutable,
    )
    logger.debug(f"[METAPLEX] Decoded {record.symbol!r} uri={record.uri[:60]!r}")
    return record


class _BorshReader:
    """Bounds-checked cursor over borsh-encoded bytes."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def _take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise InvalidMetadataLayoutError(
                f"Metadata truncated: need {size} bytes at offset {self._offset}, "
                f"have {len(self._data) - self._offset}"
            )
        chunk = self._data[self._offset : end]
        self._offset = end
        return chunk

    def u8(self) -> int:
        return self._take(1)[0]

    def u16(self) -> int:
        return struct.unpack("<H", self._take(2))[0]

    def u32(self) -> int:
        return struct.unpack("<I", self._take(4))[0]

    def boolean(self) -> bool:
        value = self.u8()
        if value not in (0, 1):
            raise InvalidMetadataLayoutError(f"Invalid bool byte {value}")
        return value == 1

    def option(self) -> bool:
        tag = self.u8()
        if tag not in (0, 1):
            raise InvalidMetadataLayoutError(f"Invalid option tag {tag}")
        return tag == 1

    def pubkey(self) -> Pubkey:
        return Pubkey.from_bytes(self._take(_PUBKEY_SIZE))

    def string(self) -> str:
        length = self.u32()
        if length > _MAX_STRING_BYTES:
            raise InvalidMetadataLayoutError(f"String length {length} exceeds limit")
        try:
            return self._take(length).decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidMetadataLayoutError("String field is not valid UTF-8") from e
