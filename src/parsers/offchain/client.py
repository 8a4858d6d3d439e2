"""Off-chain metadata fetcher — GET the JSON document behind a metadata URI."""

import httpx
from loguru import logger
from pydantic import ValidationError

from src.parsers.exceptions import OffChainFetchError
from src.parsers.metaplex.decoder import strip_padding
from src.parsers.offchain.models import OffChainMetadata


def create_http_client() -> httpx.AsyncClient:
    """Plain client: no custom headers, httpx default timeout, follows redirects.

    Arweave and IPFS gateways commonly answer with a redirect.
    """
    return httpx.AsyncClient(follow_redirects=True)


async def fetch_offchain_metadata(client: httpx.AsyncClient, uri: str) -> OffChainMetadata:
    """Fetch and decode the off-chain document referenced by `uri`.

    Raises OffChainFetchError on an empty or invalid URI, transport errors,
    HTTP error statuses, and bodies that are not a JSON object of the
    expected shape.
    """
    uri = strip_padding(uri).strip()
    if not uri:
        raise OffChainFetchError("Metadata URI is empty")

    try:
        resp = await client.get(uri)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise OffChainFetchError(f"Failed to load offchain metadata from {uri}: {e}") from e

    if resp.status_code >= 400:
        raise OffChainFetchError(f"Offchain metadata HTTP {resp.status_code} for {uri}")

    try:
        payload = resp.json()
    except ValueError as e:
        raise OffChainFetchError("Failed to parse offchain metadata into JSON") from e

    if not isinstance(payload, dict):
        raise OffChainFetchError("Offchain metadata is not a JSON object")

    try:
        metadata = OffChainMetadata.model_validate(payload)
    except ValidationError as e:
        raise OffChainFetchError(f"Offchain metadata has unexpected fields: {e}") from e

    logger.debug(f"[OFFCHAIN] Loaded {uri[:60]} website={metadata.website}")
    return metadata
