"""Beacon node REST client."""

import httpx

from beacon_rewards.data.beacon.models import (
    BlockDetailResponse,
    HeadersResponse,
    SyncCommitteeResponse,
    ValidatorsResponse,
)
from beacon_rewards.helpers.errors import ResponseParseError
from beacon_rewards.helpers.http import fetch_json


class BeaconClient:
    """Typed access to the beacon node endpoints used by the service."""

    def __init__(self, base_url: str) -> None:
        """Initialize beacon client.

        Args:
            base_url: Beacon node REST base URL

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            msg = "Beacon URL cannot be empty"
            raise ValueError(msg)

        self.base_url = base_url.rstrip("/")

    async def fetch_block_hash(self, client: httpx.AsyncClient, slot: int) -> str:
        """Resolve a slot to the execution block hash it references.

        Args:
            client: HTTP client instance
            slot: Beacon slot

        Returns:
            0x-prefixed block hash
        """
        url = f"{self.base_url}/eth/v2/beacon/blocks/{slot}"
        response = await fetch_json(client, url, BlockDetailResponse)
        return response.block_hash

    async def fetch_head_slot(self, client: httpx.AsyncClient) -> int:
        """Get the slot of the current head.

        Args:
            client: HTTP client instance

        Returns:
            Head slot

        Raises:
            ResponseParseError: If the header list is empty or the slot is not
                an integer
        """
        url = f"{self.base_url}/eth/v1/beacon/headers"
        response = await fetch_json(client, url, HeadersResponse)
        if not response.data:
            msg = "beacon node returned no headers"
            raise ResponseParseError(msg)

        slot = response.data[0].header.message.slot
        try:
            return int(slot)
        except ValueError:
            msg = f"head slot {slot!r} is not an integer"
            raise ResponseParseError(msg) from None

    async def fetch_sync_committee_indices(
        self, client: httpx.AsyncClient, slot: int
    ) -> list[str]:
        """Get the validator indices of the sync committee at a slot.

        Args:
            client: HTTP client instance
            slot: Beacon slot, used as the state id

        Returns:
            Validator indices in committee order
        """
        url = f"{self.base_url}/eth/v1/beacon/states/{slot}/sync_committees"
        response = await fetch_json(client, url, SyncCommitteeResponse)
        return response.data.validators

    async def fetch_validator_pubkeys(
        self, client: httpx.AsyncClient, slot: int, indices: list[str]
    ) -> list[str]:
        """Get public keys for a set of validators.

        Args:
            client: HTTP client instance
            slot: Beacon slot, used as the state id
            indices: Validator indices, sent as repeated id parameters in order

        Returns:
            Public keys in the order the beacon node returned them
        """
        url = f"{self.base_url}/eth/v1/beacon/states/{slot}/validators"
        params = [("id", index) for index in indices]
        response = await fetch_json(client, url, ValidatorsResponse, params=params)
        return response.pubkeys


__all__ = ["BeaconClient"]
