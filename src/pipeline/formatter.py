"""Render a TokenReport as the CLI's plain-text output."""

from solders.pubkey import Pubkey  # type: ignore[import-untyped]

from src.pipeline.orchestrator import TokenReport

UNAVAILABLE = "Not available"


def string_or_unavailable(value: str | None) -> str:
    """Empty strings count as unavailable too."""
    if value:
        return value
    return UNAVAILABLE


def pubkey_or_unavailable(pubkey: Pubkey | None) -> str:
    return str(pubkey) if pubkey is not None else UNAVAILABLE


def format_report(report: TokenReport) -> str:
    dns_records = (
        str(report.dns_record_count) if report.dns_record_count is not None else UNAVAILABLE
    )
    lines = [
        f"Token Name: {report.name}",
        f"Token Symbol: {report.symbol}",
        f"Total Supply: {report.supply}",
        f"Decimals: {report.decimals}",
        f"Mint Authority: {pubkey_or_unavailable(report.mint_authority)}",
        f"Freeze Authority: {pubkey_or_unavailable(report.freeze_authority)}",
        f"Token Description: {string_or_unavailable(report.description)}",
        f"Token Image: {string_or_unavailable(report.image)}",
        f"Token Website: {string_or_unavailable(report.website)}",
        f"Number of DNS records: {dns_records}",
    ]
    return "\n".join(lines)
