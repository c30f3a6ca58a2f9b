"""Slot query service shared by the HTTP API and the CLI."""

from typing import Self

import httpx

from beacon_rewards.analysis.models import RewardResult
from beacon_rewards.analysis.rewards import RewardAggregator
from beacon_rewards.analysis.slots import SlotValidator
from beacon_rewards.analysis.sync_duties import SyncDutiesResolver
from beacon_rewards.data.beacon.client import BeaconClient
from beacon_rewards.helpers.config import Settings
from beacon_rewards.helpers.http import create_http_client
from beacon_rewards.helpers.logging import get_logger
from beacon_rewards.helpers.rate_limit import TokenBucketLimiter
from beacon_rewards.helpers.rpc import RPCClient
from beacon_rewards.outcomes import Outcome, capture


logger = get_logger(__name__)


class SlotService:
    """Answers block reward and sync duty queries for beacon slots.

    All upstream traffic, beacon REST and execution JSON-RPC, goes through the
    one HTTP client given here, so its rate limiter is the single admission
    point for the process.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        beacon: BeaconClient,
        rpc: RPCClient,
        *,
        pos_transition_slot: int,
        mev_multiplier: int,
    ) -> None:
        """Initialize the service.

        Args:
            http_client: Shared, rate-limited HTTP client
            beacon: Beacon node client
            rpc: Execution JSON-RPC client
            pos_transition_slot: Last slot that is not eligible
            mev_multiplier: Base fee multiple above which a price counts as MEV
        """
        self.http_client = http_client
        self.validator = SlotValidator(beacon, pos_transition_slot)
        self.rewards = RewardAggregator(self.validator, beacon, rpc, mev_multiplier)
        self.sync_duties = SyncDutiesResolver(self.validator, beacon)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Build the service with one limiter and one client for all upstreams."""
        limiter = TokenBucketLimiter(settings.rate_limit)
        http_client = create_http_client(settings.timeout, limiter=limiter)
        logger.info(
            "Upstreams: beacon %s, rpc %s, %.2f req/s shared",
            settings.beacon_url,
            settings.rpc_url,
            settings.rate_limit,
        )
        return cls(
            http_client,
            BeaconClient(settings.beacon_url),
            RPCClient(settings.rpc_url),
            pos_transition_slot=settings.pos_transition_slot,
            mev_multiplier=settings.mev_base_fee_multiplier,
        )

    async def get_block_reward_and_status(self, slot: str) -> Outcome[RewardResult]:
        """Get the execution reward and MEV status of the block at a slot."""
        return await capture(
            "block reward", self.rewards.reward_for_slot(self.http_client, slot)
        )

    async def get_sync_duties(self, slot: str) -> Outcome[list[str]]:
        """Get the public keys of the sync committee at a slot."""
        return await capture(
            "sync duties", self.sync_duties.duties_for_slot(self.http_client, slot)
        )

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        await self.http_client.aclose()


__all__ = ["SlotService"]
