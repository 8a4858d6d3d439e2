"""Minimal async Solana JSON-RPC client — raw account reads only."""

import base64
import binascii
from typing import Any

import httpx
from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.parsers.exceptions import AccountNotFoundError, RpcTransportError

# Same request timeout the Solana RPC clients use by default
RPC_TIMEOUT_SEC = 30.0
DEFAULT_COMMITMENT = "finalized"


class SolanaRpcClient:
    """Async HTTP client for a Solana RPC node.

    One instance is shared by all concurrent reads of a run.
    """

    def __init__(self, rpc_url: str, timeout: float = RPC_TIMEOUT_SEC) -> None:
        if not rpc_url:
            raise ValueError("RPC URL is empty")
        self._rpc_url = rpc_url
        self._client = httpx.AsyncClient(timeout=timeout)
        self._request_id = 0

    def __repr__(self) -> str:
        return f"SolanaRpcClient(rpc_url={self._rpc_url})"

    async def __aenter__(self) -> "SolanaRpcClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def read_account(self, address: Pubkey) -> bytes:
        """Fetch the raw data of an account.

        Raises AccountNotFoundError when the account does not exist and
        RpcTransportError on any transport or RPC-level failure.
        """
        value = await self._call(
            "getAccountInfo",
            [str(address), {"encoding": "base64", "commitment": DEFAULT_COMMITMENT}],
        )
        if value is None:
            raise AccountNotFoundError(f"AccountNotFound: pubkey={address}")

        data = value.get("data") if isinstance(value, dict) else None
        if not isinstance(data, list) or not data:
            raise RpcTransportError(f"Malformed account data for {address}")

        try:
            raw = base64.b64decode(data[0], validate=True)
        except (binascii.Error, TypeError) as e:
            raise RpcTransportError(f"Account data for {address} is not valid base64") from e

        logger.debug(f"[RPC] Read {len(raw)} bytes from {str(address)[:12]}")
        return raw

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Issue one JSON-RPC request and return `result.value`."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }

        try:
            resp = await self._client.post(self._rpc_url, json=payload)
        except httpx.HTTPError as e:
            logger.debug(f"[RPC] {method} transport error: {e}")
            raise RpcTransportError(f"{method} request failed: {e}") from e

        if resp.status_code != 200:
            raise RpcTransportError(f"{method} returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise RpcTransportError(f"{method} returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise RpcTransportError(f"{method} returned an unexpected response")
        if "error" in data:
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RpcTransportError(f"{method} RPC error: {message}")

        result = data.get("result")
        if not isinstance(result, dict) or "value" not in result:
            raise RpcTransportError(f"{method} response has no result value")
        return result["value"]
