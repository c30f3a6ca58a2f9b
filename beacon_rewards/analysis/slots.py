"""Slot validation against the PoS transition boundary and the chain head."""

import httpx

from beacon_rewards.data.beacon.client import BeaconClient
from beacon_rewards.helpers.constants import POS_TRANSITION_SLOT
from beacon_rewards.helpers.errors import (
    BeaconRewardsError,
    SlotTooFarInFutureError,
    SlotUnavailableError,
)
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.helpers.parsers import parse_slot


logger = get_logger(__name__)


class SlotValidator:
    """Checks that a slot lies after the PoS transition and at or before head."""

    def __init__(
        self, beacon: BeaconClient, pos_transition_slot: int = POS_TRANSITION_SLOT
    ) -> None:
        """Initialize the validator.

        Args:
            beacon: Beacon client used for the head lookup
            pos_transition_slot: Last slot that is not eligible
        """
        self.beacon = beacon
        self.pos_transition_slot = pos_transition_slot

    async def current_head_slot(self, client: httpx.AsyncClient) -> int:
        """Get the head slot, or 0 when it cannot be determined.

        A head of 0 rejects every slot as too far in the future instead of
        accepting a slot that could not be checked.
        """
        try:
            return await self.beacon.fetch_head_slot(client)
        except BeaconRewardsError as e:
            logger.warning("Cannot determine head slot, assuming 0: %s", e)
            return 0

    async def validate(self, client: httpx.AsyncClient, slot_text: str) -> int:
        """Parse and validate a slot.

        Args:
            client: HTTP client instance
            slot_text: Slot as received from the caller

        Returns:
            Validated slot number

        Raises:
            InvalidSlotError: If the text is not an integer
            SlotUnavailableError: If the slot is at or before the PoS transition
            SlotTooFarInFutureError: If the slot is after the current head
        """
        slot = parse_slot(slot_text)

        if slot <= self.pos_transition_slot:
            msg = "slot is missing"
            raise SlotUnavailableError(msg)

        head = await self.current_head_slot(client)
        if slot > head:
            msg = "slot is in the future"
            raise SlotTooFarInFutureError(msg)

        return slot


__all__ = ["SlotValidator"]
