"""Pydantic model for the off-chain token metadata JSON document."""

from pydantic import BaseModel, ConfigDict, Field


class OffChainMetadata(BaseModel):
    """Human-facing fields of a Metaplex JSON document. All optional."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    description: str | None = None
    image: str | None = None
    website: str | None = Field(default=None, alias="external_url")
