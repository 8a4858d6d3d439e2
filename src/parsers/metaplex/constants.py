"""Metaplex Token Metadata program constants."""

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

METADATA_PROGRAM_ID = Pubkey.from_string("metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s")

# First seed of every metadata PDA
METADATA_SEED = b"metadata"

# Account discriminator (Key enum) for Metadata v1 accounts
KEY_METADATA_V1 = 4

# On-chain fixed widths; stored strings are null-padded up to these
MAX_NAME_LENGTH = 32
MAX_SYMBOL_LENGTH = 10
MAX_URI_LENGTH = 200
