"""Solana address parsing and Metaplex metadata PDA derivation.

Pure functions, no I/O. The metadata account for a mint lives at the
program-derived address of seeds ["metadata", program_id, mint] under the
Metaplex Token Metadata program. Any deviation here makes the RPC read
target a nonexistent account.
"""

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.exceptions import InvalidAddressFormatError
from src.parsers.metaplex.constants import METADATA_PROGRAM_ID, METADATA_SEED


def parse_token_address(text: str) -> Pubkey:
    """Decode a base58 mint address into a Pubkey.

    Raises InvalidAddressFormatError if the text is not a 32-byte base58 key.
    """
    try:
        return Pubkey.from_string(text.strip())
    except ValueError as e:
        raise InvalidAddressFormatError(f"'{text}' is not a valid Solana address: {e}") from e


def derive_metadata_address(token_address: Pubkey) -> Pubkey:
    """Return the Metaplex metadata PDA for a mint."""
    seeds = [METADATA_SEED, bytes(METADATA_PROGRAM_ID), bytes(token_address)]
    metadata_address, _bump = Pubkey.find_program_address(seeds, METADATA_PROGRAM_ID)
    return metadata_address
