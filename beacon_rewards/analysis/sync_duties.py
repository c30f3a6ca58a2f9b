"""Sync committee public keys for a beacon slot."""

import httpx

from beacon_rewards.analysis.slots import SlotValidator
from beacon_rewards.data.beacon.client import BeaconClient
from beacon_rewards.helpers.logging import get_logger


logger = get_logger(__name__)


class SyncDutiesResolver:
    """Resolves a slot to the public keys of its sync committee members."""

    def __init__(self, validator: SlotValidator, beacon: BeaconClient) -> None:
        """Initialize the resolver.

        Args:
            validator: Validator applied to every requested slot
            beacon: Beacon client for the committee and validator lookups
        """
        self.validator = validator
        self.beacon = beacon

    async def duties_for_slot(
        self, client: httpx.AsyncClient, slot_text: str
    ) -> list[str]:
        """Get sync committee public keys for a slot.

        Args:
            client: HTTP client instance
            slot_text: Slot as received from the caller

        Returns:
            Public keys in the order returned by the beacon node
        """
        slot = await self.validator.validate(client, slot_text)

        indices = await self.beacon.fetch_sync_committee_indices(client, slot)
        if not indices:
            # Without any id filter the endpoint lists every validator
            logger.warning("Slot %s has an empty sync committee", slot)
            return []

        return await self.beacon.fetch_validator_pubkeys(client, slot, indices)


__all__ = ["SyncDutiesResolver"]
