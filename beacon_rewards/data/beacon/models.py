"""Pydantic models for beacon node REST API responses.

Only the fields read by this service are declared; everything else in the
payloads is ignored.
"""

from pydantic import BaseModel


class Eth1Data(BaseModel):
    """eth1_data section of a beacon block body."""

    block_hash: str


class BlockBody(BaseModel):
    """Beacon block body."""

    eth1_data: Eth1Data


class BlockMessage(BaseModel):
    """Beacon block message."""

    body: BlockBody


class BlockData(BaseModel):
    """Signed beacon block."""

    message: BlockMessage


class BlockDetailResponse(BaseModel):
    """Response of GET /eth/v2/beacon/blocks/{block_id}."""

    data: BlockData

    @property
    def block_hash(self) -> str:
        """Execution block hash referenced by the beacon block."""
        return self.data.message.body.eth1_data.block_hash


class HeaderMessage(BaseModel):
    """Beacon block header message."""

    slot: str


class SignedHeader(BaseModel):
    """Signed beacon block header."""

    message: HeaderMessage


class HeaderData(BaseModel):
    """Entry of the headers list."""

    header: SignedHeader


class HeadersResponse(BaseModel):
    """Response of GET /eth/v1/beacon/headers."""

    data: list[HeaderData]


class SyncCommitteeData(BaseModel):
    """Sync committee membership for a state."""

    validators: list[str]


class SyncCommitteeResponse(BaseModel):
    """Response of GET /eth/v1/beacon/states/{state_id}/sync_committees."""

    data: SyncCommitteeData


class Validator(BaseModel):
    """Validator record."""

    pubkey: str


class ValidatorData(BaseModel):
    """Entry of the validators list."""

    validator: Validator


class ValidatorsResponse(BaseModel):
    """Response of GET /eth/v1/beacon/states/{state_id}/validators."""

    data: list[ValidatorData]

    @property
    def pubkeys(self) -> list[str]:
        """Public keys in response order."""
        return [item.validator.pubkey for item in self.data]


__all__ = [
    "BlockDetailResponse",
    "HeadersResponse",
    "SyncCommitteeResponse",
    "ValidatorsResponse",
]
