"""Tests for mint_parser — SPL Token mint account decoding."""

import struct

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.exceptions import InvalidAccountLayoutError, InvalidMintLayoutError
from src.parsers.mint_parser import SPL_MINT_SIZE, MintRecord, decode_mint
from tests.factories import FAKE_AUTHORITY, build_mint


class TestDecodeMint:
    """Unit tests for decode_mint."""

    def test_standard_token_renounced(self) -> None:
        """Renounced authorities decode to None."""
        record = decode_mint(build_mint())

        assert record == MintRecord(
            supply=1_000_000_000,
            decimals=6,
            mint_authority=None,
            freeze_authority=None,
            is_initialized=True,
        )

    def test_authorities_present(self) -> None:
        freeze = Pubkey.from_bytes(b"\x02" * 32)
        record = decode_mint(build_mint(mint_authority=FAKE_AUTHORITY, freeze_authority=freeze))

        assert record.mint_authority == FAKE_AUTHORITY
        assert record.freeze_authority == freeze

    def test_nft_style_mint(self) -> None:
        record = decode_mint(build_mint(supply=1, decimals=0))
        assert record.supply == 1
        assert record.decimals == 0

    def test_max_supply(self) -> None:
        record = decode_mint(build_mint(supply=2**64 - 1))
        assert record.supply == 2**64 - 1

    def test_data_too_short(self) -> None:
        with pytest.raises(InvalidMintLayoutError, match="82 bytes"):
            decode_mint(b"\x00" * 40)

    def test_data_too_long(self) -> None:
        """Token2022 mints with extensions are not the fixed layout."""
        with pytest.raises(InvalidMintLayoutError):
            decode_mint(build_mint() + b"\x01\x00\x00")

    def test_empty_data(self) -> None:
        with pytest.raises(InvalidMintLayoutError):
            decode_mint(b"")

    def test_bad_mint_authority_tag(self) -> None:
        raw = bytearray(build_mint())
        struct.pack_into("<I", raw, 0, 7)
        with pytest.raises(InvalidMintLayoutError, match="mint authority option tag"):
            decode_mint(bytes(raw))

    def test_bad_freeze_authority_tag(self) -> None:
        raw = bytearray(build_mint())
        struct.pack_into("<I", raw, 46, 2)
        with pytest.raises(InvalidMintLayoutError, match="freeze authority option tag"):
            decode_mint(bytes(raw))

    def test_bad_initialized_flag(self) -> None:
        with pytest.raises(InvalidMintLayoutError, match="initialized flag"):
            decode_mint(build_mint(initialized=5))

    def test_uninitialized_mint(self) -> None:
        with pytest.raises(InvalidMintLayoutError, match="not initialized"):
            decode_mint(build_mint(initialized=0))

    def test_error_is_layout_error(self) -> None:
        with pytest.raises(InvalidAccountLayoutError):
            decode_mint(b"\x00" * (SPL_MINT_SIZE - 1))
