"""Entry point for the token lookup CLI.

Usage:
    prophet EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from config.settings import CONFIG_FILE, ConfigError, load_settings
from src.parsers.address import parse_token_address
from src.parsers.exceptions import InvalidAddressFormatError
from src.parsers.offchain.client import create_http_client
from src.parsers.solana_rpc.client import SolanaRpcClient
from src.pipeline.formatter import format_report
from src.pipeline.orchestrator import OnChainReadError, fetch_token_report
from src.utils.logger import setup_logger


def _token_address(text: str) -> Pubkey:
    try:
        return parse_token_address(text)
    except InvalidAddressFormatError as e:
        raise argparse.ArgumentTypeError(
            f"invalid value '{text}' for '<TOKEN_ADDRESS>': {e}"
        ) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prophet", description="Fetch on/off chain token details"
    )
    parser.add_argument(
        "token_address",
        metavar="TOKEN_ADDRESS",
        type=_token_address,
        help="Solana mint account address",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_FILE,
        help=f"Path to the TOML config file (default: {CONFIG_FILE})",
    )
    parser.add_argument("--rpc-url", help="Override the configured RPC endpoint")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


async def run(args: argparse.Namespace) -> int:
    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Unable to load CLI config: {e}", file=sys.stderr)
        return 1

    rpc_url = args.rpc_url or settings.rpc_url
    logger.debug(f"Using RPC endpoint {rpc_url}")

    async with SolanaRpcClient(rpc_url) as rpc, create_http_client() as http:
        try:
            report = await fetch_token_report(rpc, http, args.token_address)
        except OnChainReadError as e:
            print(e, file=sys.stderr)
            return 1

    print(format_report(report))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level="DEBUG" if args.verbose else "WARNING", json_logs=args.json_logs)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
