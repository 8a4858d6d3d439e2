"""Shared test fixtures."""

import pytest
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from tests.factories import USDC_MINT


@pytest.fixture
def usdc_mint() -> Pubkey:
    return Pubkey.from_string(USDC_MINT)
